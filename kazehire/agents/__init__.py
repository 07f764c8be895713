"""Task agents: one end-to-end composition per structured task."""

from kazehire.agents.ranking_agent import rank_candidates, order_and_cap
from kazehire.agents.conversation_agent import summarize_conversation
from kazehire.agents.bias_agent import detect_bias

__all__ = [
    "rank_candidates",
    "order_and_cap",
    "summarize_conversation",
    "detect_bias",
]

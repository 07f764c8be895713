"""Prompt templates for the three structured tasks.

Each module holds one task's template, its literal JSON response shape and
its builder. compiler.compile_prompt dispatches on the task type.
"""

from kazehire.prompts.ranking_prompt import (
    RANKING_SCHEMA_ID,
    RANKING_RESPONSE_SCHEMA,
    build_ranking_prompt,
)
from kazehire.prompts.conversation_prompt import (
    CONVERSATION_SCHEMA_ID,
    CONVERSATION_RESPONSE_SCHEMA,
    build_conversation_prompt,
)
from kazehire.prompts.bias_prompt import BIAS_SCHEMA_ID, BIAS_RESPONSE_SCHEMA, build_bias_prompt
from kazehire.prompts.compiler import compile_prompt, compile_request

__all__ = [
    # Ranking
    "RANKING_SCHEMA_ID",
    "RANKING_RESPONSE_SCHEMA",
    "build_ranking_prompt",
    # Conversation
    "CONVERSATION_SCHEMA_ID",
    "CONVERSATION_RESPONSE_SCHEMA",
    "build_conversation_prompt",
    # Bias
    "BIAS_SCHEMA_ID",
    "BIAS_RESPONSE_SCHEMA",
    "build_bias_prompt",
    # Compiler
    "compile_prompt",
    "compile_request",
]

"""Models for the recruitment AI pipeline.

Modules:
- task_models: TaskType, documents, payloads and CompiledPrompt (dataclasses)
- ranking_models: RankingResponse (model output) and RankingEntry (result)
- conversation_models: ConversationExtraction
- bias_models: BiasCheckResponse, BiasFlag
"""

from kazehire.pydantic_models.task_models import (
    TaskType,
    DocumentRef,
    CandidateDocument,
    ExtractedText,
    RankCandidatesPayload,
    ConversationPayload,
    BiasPayload,
    TaskPayload,
    TaskRequest,
    CompiledPrompt,
)
from kazehire.pydantic_models.ranking_models import (
    RankedCandidateResponse,
    RankingResponse,
    RankingEntry,
)
from kazehire.pydantic_models.conversation_models import ConversationExtraction
from kazehire.pydantic_models.bias_models import BiasFlag, BiasCheckResponse

__all__ = [
    # Request side
    "TaskType",
    "DocumentRef",
    "CandidateDocument",
    "ExtractedText",
    "RankCandidatesPayload",
    "ConversationPayload",
    "BiasPayload",
    "TaskPayload",
    "TaskRequest",
    "CompiledPrompt",
    # Ranking
    "RankedCandidateResponse",
    "RankingResponse",
    "RankingEntry",
    # Conversation
    "ConversationExtraction",
    # Bias
    "BiasFlag",
    "BiasCheckResponse",
]

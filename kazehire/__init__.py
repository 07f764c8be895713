"""KazeHire AI pipeline.

Turns resumes, chat transcripts and interview feedback into validated,
structured results with a generative text model.

Architecture:
    core/             - Text extraction, model gateway, decode/validate, identity, errors, logging
    prompts/          - Task prompt templates and the prompt compiler
    agents/           - One end-to-end composition per task
    pydantic_models/  - Request types and validated response schemas

Usage:
    from kazehire import Orchestrator, ProviderConfig

    orchestrator = Orchestrator(providers=[ProviderConfig("openrouter", model, api_key=key)])
    ranking = await orchestrator.rank_candidates(title, description, documents)

CLI:
    kazehire rank --title "Backend Engineer" --description job.txt resumes/*.pdf
"""

from kazehire.orchestrator import Orchestrator, TaskFailure, FailureKind, classify_failure
from kazehire.core.llm_client import ProviderConfig, ModelGateway
from kazehire.core.errors import PipelineErrors
from kazehire.pydantic_models import (
    # Requests
    TaskType,
    DocumentRef,
    CandidateDocument,
    # Results
    RankingEntry,
    ConversationExtraction,
    BiasFlag,
)

__all__ = [
    # Main entry point
    "Orchestrator",
    "TaskFailure",
    "FailureKind",
    "classify_failure",
    # Wiring
    "ProviderConfig",
    "ModelGateway",
    "PipelineErrors",
    # Requests
    "TaskType",
    "DocumentRef",
    "CandidateDocument",
    # Results
    "RankingEntry",
    "ConversationExtraction",
    "BiasFlag",
]

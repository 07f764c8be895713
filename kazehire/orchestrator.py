"""Task orchestrator: the entry point the routing layer calls.

Wires the shared pieces (model gateway, text extractor, logging settings)
once, then runs each task through its agent. Every task invocation builds its
own prompt, identity map and logger, so concurrent calls share nothing
mutable.

Errors that end a task are re-raised as TaskFailure with a stable
FailureKind and a short diagnostic. The boundary layer decides status codes
and user-facing wording from the kind alone; provider and parser internals
stay in the chained cause.
"""

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from kazehire.agents import detect_bias, rank_candidates, summarize_conversation
from kazehire.core.errors import (
    AllProvidersFailed,
    AuthError,
    InvalidTaskInput,
    KazehireError,
    NoUsableDocuments,
    PipelineErrors,
    ResponseFormatError,
    SchemaValidationError,
)
from kazehire.core.llm_client import ModelGateway, ProviderConfig
from kazehire.core.pdf_reader import TextExtractor
from kazehire.core.pipeline_logger import PipelineLogger
from kazehire.pydantic_models import BiasFlag, ConversationExtraction, DocumentRef, RankingEntry


class FailureKind(Enum):
    """Classified reason a task failed."""

    INVALID_INPUT = "invalid_input"
    NO_USABLE_DOCUMENTS = "no_usable_documents"
    AI_AUTH_FAILED = "ai_auth_failed"
    AI_UNAVAILABLE = "ai_unavailable"
    AI_RESPONSE_INVALID = "ai_response_invalid"
    AI_PROCESSING_FAILED = "ai_processing_failed"


class TaskFailure(Exception):
    """A task ended without a result."""

    def __init__(self, kind: FailureKind, task: str, diagnostic: str):
        self.kind = kind
        self.task = task
        self.diagnostic = diagnostic
        super().__init__(f"{task} failed ({kind.value}): {diagnostic}")


def classify_failure(error: KazehireError) -> FailureKind:
    """Map a task-ending error to its FailureKind."""
    if isinstance(error, InvalidTaskInput):
        return FailureKind.INVALID_INPUT
    if isinstance(error, NoUsableDocuments):
        return FailureKind.NO_USABLE_DOCUMENTS
    if isinstance(error, AuthError):
        return FailureKind.AI_AUTH_FAILED
    if isinstance(error, AllProvidersFailed):
        return FailureKind.AI_UNAVAILABLE
    if isinstance(error, (ResponseFormatError, SchemaValidationError)):
        return FailureKind.AI_RESPONSE_INVALID
    return FailureKind.AI_PROCESSING_FAILED


class Orchestrator:
    """Runs the three structured tasks against a configured gateway."""

    def __init__(
        self,
        providers: Sequence[ProviderConfig] | None = None,
        gateway: ModelGateway | None = None,
        extractor: TextExtractor | None = None,
        verbose: bool = False,
        log_dir: str | Path | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            providers: Providers in preference order. Ignored if gateway is given.
            gateway: Prebuilt gateway (e.g. with test doubles).
            extractor: Text extractor for resumes.
            verbose: If True, log DEBUG detail.
            log_dir: Directory for log files.
        """
        if gateway is None:
            if not providers:
                raise ValueError("Orchestrator needs at least one provider or a gateway")
            gateway = ModelGateway(providers)
        self.gateway = gateway
        self.extractor = extractor or TextExtractor()
        self.verbose = verbose
        self.log_dir = log_dir

    def _logger(self) -> PipelineLogger:
        return PipelineLogger(verbose=self.verbose, log_dir=self.log_dir)

    async def rank_candidates(
        self,
        job_title: str,
        job_description: str,
        candidate_documents: Sequence[DocumentRef],
        comments: str | None = None,
        errors: PipelineErrors | None = None,
    ) -> list[RankingEntry]:
        """Rank candidates for a job. See agents.ranking_agent.rank_candidates."""
        try:
            return await rank_candidates(
                job_title,
                job_description,
                candidate_documents,
                self.gateway,
                comments=comments,
                extractor=self.extractor,
                errors=errors,
                logger=self._logger(),
            )
        except KazehireError as e:
            raise TaskFailure(classify_failure(e), "rank_candidates", str(e)) from e

    async def summarize_conversation(self, transcript: str) -> ConversationExtraction:
        """Extract hiring details from a transcript."""
        try:
            return await summarize_conversation(transcript, self.gateway, logger=self._logger())
        except KazehireError as e:
            raise TaskFailure(classify_failure(e), "summarize_conversation", str(e)) from e

    async def detect_bias(self, feedback_text: str) -> list[BiasFlag]:
        """Flag biased terms in interview feedback."""
        try:
            return await detect_bias(feedback_text, self.gateway, logger=self._logger())
        except KazehireError as e:
            raise TaskFailure(classify_failure(e), "detect_bias", str(e)) from e

"""Request-side models: task types, documents, payloads and compiled prompts.

These are internal, per-request values. Nothing here is persisted and none of
them is mutated after creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from kazehire.core.identity import IdentityMap


class TaskType(Enum):
    """The three structured tasks the pipeline supports."""

    RANK_CANDIDATES = "rank_candidates"
    SUMMARIZE_CONVERSATION = "summarize_conversation"
    DETECT_BIAS = "detect_bias"


@dataclass(frozen=True)
class DocumentRef:
    """A raw document handed to the text extractor.

    Attributes:
        source_identifier: Caller's identifier for the document (candidate id,
            or the file name for manual uploads).
        raw_bytes: Already-fetched document bytes.
        display_name: Human-readable label, usually the file name.
    """

    source_identifier: str
    raw_bytes: bytes = field(repr=False)
    display_name: str = ""


@dataclass(frozen=True)
class CandidateDocument(DocumentRef):
    """A resume document, optionally with the candidate's known name.

    Candidates from the existing pool carry their stored name. Manual uploads
    leave it empty and the name is guessed from the resume text.
    """

    candidate_name: str | None = None


@dataclass(frozen=True)
class ExtractedText:
    """Plain text extracted from one document."""

    source_identifier: str
    display_name: str
    text: str
    extraction_ok: bool = True


@dataclass(frozen=True)
class RankCandidatesPayload:
    """Inputs for ranking candidates against a job opening."""

    job_title: str
    job_description: str
    resumes: tuple[ExtractedText, ...]
    comments: str | None = None


@dataclass(frozen=True)
class ConversationPayload:
    """Inputs for extracting structured attributes from a transcript."""

    transcript: str


@dataclass(frozen=True)
class BiasPayload:
    """Inputs for flagging biased language in interview feedback."""

    feedback_text: str


TaskPayload = Union[RankCandidatesPayload, ConversationPayload, BiasPayload]


@dataclass(frozen=True)
class TaskRequest:
    """One caller invocation: a task type plus its typed payload."""

    task_type: TaskType
    payload: TaskPayload


@dataclass(frozen=True)
class CompiledPrompt:
    """Prompt text plus the response schema the model was told to follow.

    For ranking prompts, identity_map holds the opaque candidate tokens issued
    while compiling. It is compared by value, so two compilations of the same
    input are equal.
    """

    text: str
    declared_response_schema_id: str
    identity_map: IdentityMap | None = None

"""Structured error types for the recruitment AI pipeline.

Two kinds of errors live here:

- Exceptions, raised where a failure stops a unit of work (one document,
  one provider attempt, one task).
- PipelineIssue records, collected in a PipelineErrors accumulator for
  failures that are absorbed (a skipped document, a dropped ranking entry)
  so they still show up in diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kazehire.core.llm_client import ProviderResponse


class ErrorSeverity(Enum):
    """Severity levels for pipeline issues."""
    WARNING = "warning"   # Non-fatal, task continued unchanged
    ERROR = "error"       # Item dropped, task continued without it
    CRITICAL = "critical" # Task halted


class ErrorCategory(Enum):
    """Categories of pipeline issues."""
    EXTRACTION = "extraction"       # Document text extraction
    PROVIDER = "provider"           # Model provider call
    RESPONSE_FORMAT = "response_format"  # Model output was not JSON
    VALIDATION = "validation"       # Model output had the wrong shape
    IDENTITY = "identity"           # Model echoed an unknown identifier
    POLICY = "policy"               # Prompt policy the model ignored


class ExtractionFailureKind(Enum):
    """Why a document yielded no usable text."""
    EMPTY = "empty"       # Parsed fine, but (almost) no text
    CORRUPT = "corrupt"   # Could not be parsed at all


# =============================================================================
# Exceptions
# =============================================================================


class KazehireError(Exception):
    """Base class for every error raised by the pipeline."""


class InvalidTaskInput(KazehireError):
    """The caller supplied input a task cannot work with (e.g. empty transcript)."""


class ExtractionError(KazehireError):
    """A single document could not be turned into usable text."""

    def __init__(self, kind: ExtractionFailureKind, source_identifier: str, detail: str = ""):
        self.kind = kind
        self.source_identifier = source_identifier
        self.detail = detail
        message = f"{kind.value} document: {source_identifier}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NoUsableDocuments(KazehireError):
    """Every document in a batch failed extraction."""

    def __init__(self, failures: list[ExtractionError] | None = None):
        self.failures = failures or []
        super().__init__(
            f"No usable documents ({len(self.failures)} failed extraction)"
        )


class ProviderError(KazehireError):
    """A single provider attempt failed. Subclasses carry the classification."""

    fatal: bool = False

    def __init__(self, provider_id: str, message: str = ""):
        self.provider_id = provider_id
        self.attempts: list["ProviderResponse"] = []  # Filled in when raised by the gateway
        super().__init__(f"{provider_id}: {message}" if message else provider_id)


class AuthError(ProviderError):
    """Credentials rejected. Stops the gateway: no fallback."""

    fatal = True


class RateLimited(ProviderError):
    """Provider is throttling us. Gateway moves on to the next provider."""


class ProviderServerError(ProviderError):
    """Provider-side failure, timeout, connection loss or empty completion."""


class UnknownError(ProviderError):
    """Anything not classified above. Falls back, but is logged at ERROR."""


class AllProvidersFailed(KazehireError):
    """Every configured provider was tried and none produced text."""

    def __init__(self, attempts: list["ProviderResponse"]):
        self.attempts = attempts
        tried = ", ".join(a.provider_id for a in attempts) or "none configured"
        super().__init__(f"All providers failed (tried: {tried})")


class ResponseFormatError(KazehireError):
    """Model output could not be parsed as JSON."""

    def __init__(self, message: str, raw_excerpt: str = ""):
        self.raw_excerpt = raw_excerpt
        super().__init__(message)


class SchemaValidationError(KazehireError):
    """Parsed model output violates the task's response shape."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


@dataclass(frozen=True)
class IdentityMismatch:
    """A ranking entry echoed an opaque id that was never issued for the request."""

    opaque_id: str
    echoed_name: str = ""


# =============================================================================
# Absorbed issues
# =============================================================================


@dataclass
class PipelineIssue:
    """Structured record of an absorbed, non-fatal failure."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    task: str                      # Task type value, e.g. "rank_candidates"
    subject: str | None = None     # Document or entry the issue concerns
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.severity.value.upper()}] {self.category.value}: {self.message}"]
        if self.subject:
            parts.append(f"subject={self.subject}")
        if self.task:
            parts.append(f"task={self.task}")
        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "task": self.task,
            "subject": self.subject,
            "context": self.context,
        }


@dataclass
class PipelineErrors:
    """Aggregate absorbed issues across one task invocation."""

    errors: list[PipelineIssue] = field(default_factory=list)
    warnings: list[PipelineIssue] = field(default_factory=list)
    dropped_subjects: list[str] = field(default_factory=list)

    def add(self, issue: PipelineIssue):
        """Add an error or warning."""
        if issue.severity == ErrorSeverity.WARNING:
            self.warnings.append(issue)
        else:
            self.errors.append(issue)
            if issue.subject and issue.subject not in self.dropped_subjects:
                self.dropped_subjects.append(issue.subject)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def summary(self) -> dict:
        """Get summary statistics."""
        by_category: dict[str, int] = {}
        for issue in self.errors:
            cat = issue.category.value
            by_category[cat] = by_category.get(cat, 0) + 1

        return {
            "total_errors": self.error_count,
            "total_warnings": self.warning_count,
            "dropped_subjects": len(self.dropped_subjects),
            "errors_by_category": by_category,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "dropped_subjects": self.dropped_subjects,
            "summary": self.summary(),
        }


# Factory functions for common issues

def extraction_issue(error: ExtractionError, task: str) -> PipelineIssue:
    """Record a document that was skipped because extraction failed."""
    return PipelineIssue(
        category=ErrorCategory.EXTRACTION,
        severity=ErrorSeverity.ERROR,
        message=str(error),
        task=task,
        subject=error.source_identifier,
        context={"kind": error.kind.value},
    )


def identity_issue(mismatch: IdentityMismatch, task: str) -> PipelineIssue:
    """Record a ranking entry dropped for carrying an unknown opaque id."""
    return PipelineIssue(
        category=ErrorCategory.IDENTITY,
        severity=ErrorSeverity.ERROR,
        message=f"Unknown candidate token '{mismatch.opaque_id}' dropped",
        task=task,
        subject=mismatch.opaque_id,
        context={"echoed_name": mismatch.echoed_name} if mismatch.echoed_name else {},
    )


def policy_warning(message: str, task: str, subject: str | None = None) -> PipelineIssue:
    """Record a prompt policy the model did not follow (kept, not enforced)."""
    return PipelineIssue(
        category=ErrorCategory.POLICY,
        severity=ErrorSeverity.WARNING,
        message=message,
        task=task,
        subject=subject,
    )

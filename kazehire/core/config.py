"""Centralized configuration for the recruitment AI pipeline.

All magic numbers, budgets, and provider defaults are documented here.
Each constant includes:
- What it controls
- What changing it affects

Nothing in this module reads the environment. Provider credentials are
wired in by the caller (see cli.providers_from_env).
"""

from typing import Final


# =============================================================================
# Provider Defaults
# =============================================================================
#
# The gateway tries providers strictly in the order it is given. The default
# order puts OpenRouter first and Google Gemini (direct) second.
#
# Model identifiers use litellm's "<provider>/<model>" routing convention.
#
# =============================================================================

DEFAULT_PROVIDER_ORDER: Final[tuple[str, ...]] = ("openrouter", "gemini")
"""Preferred provider order when the wiring layer builds the provider list."""

DEFAULT_MODELS: Final[dict[str, str]] = {
    "openrouter": "openrouter/google/gemini-2.0-flash-exp:free",
    "gemini": "gemini/gemini-2.0-flash-001",
}
"""Default litellm model identifier per provider."""

API_KEY_ENV_VARS: Final[dict[str, str]] = {
    "openrouter": "OPEN_ROUTER_API_KEY",
    "gemini": "GEMINI_API_KEY",
}
"""Environment variable holding each provider's API key (read by cli.py only)."""

API_BASE_ENV_VARS: Final[dict[str, str]] = {
    "openrouter": "OPEN_ROUTER_API_BASE",
    "gemini": "GEMINI_API_BASE",
}
"""Optional endpoint override per provider (read by cli.py only)."""

OPENROUTER_HEADERS: Final[dict[str, str]] = {
    "X-Title": "KazeHire AI - Resume Matching System",
}
"""Attribution headers OpenRouter expects from calling applications."""


# Text Extraction

class ExtractionLimits:
    """Limits applied when turning documents into text."""

    MIN_TEXT_LENGTH: Final[int] = 50
    """Minimum characters of extracted text for a document to count as usable.

    Scanned resumes without a text layer usually yield a handful of stray
    characters. Anything shorter than this is reported as EMPTY rather than
    sent to the model as a real (but blank) resume.
    """

    MAX_DOCUMENT_BYTES: Final[int] = 20 * 1024 * 1024
    """Upper bound on a single document's size (20 MB).

    Larger payloads are rejected as CORRUPT before PyMuPDF parses them.
    """


# Prompt Budgets

class PromptBudgets:
    """Character budgets for caller-supplied content embedded in prompts.

    Content is cut at exactly this many characters. A plain prefix cut keeps
    compilation deterministic: the same input always truncates at the same
    boundary.
    """

    JOB_TITLE: Final[int] = 200
    JOB_DESCRIPTION: Final[int] = 4000
    RESUME: Final[int] = 6000
    """Per candidate. Five resumes at this size stay well inside a 32k context."""

    COMMENTS: Final[int] = 1000
    TRANSCRIPT: Final[int] = 12000
    FEEDBACK: Final[int] = 6000


# Task Configuration

class RankingConfig:
    """Ranking task parameters."""

    MAX_RANKED: Final[int] = 5
    """Maximum number of candidates returned by a ranking."""

    FIT_SCORE_MIN: Final[int] = 1
    FIT_SCORE_MAX: Final[int] = 10

    OPAQUE_ID_PREFIX: Final[str] = "candidate_"
    """Prefix for the per-request tokens that stand in for real candidate ids."""

    NAME_DRIFT_THRESHOLD: Final[float] = 60.0
    """rapidfuzz token-set ratio below which an echoed name is reported as drift.

    Only a warning: identity always comes from the opaque token.
    """

    NAME_SCAN_LINES: Final[int] = 5
    """How many leading non-empty resume lines are scanned for a candidate name."""


class ConversationConfig:
    """Conversation summary task parameters."""

    INTEREST_MIN: Final[int] = 1
    INTEREST_MAX: Final[int] = 5


# LLM Call Configuration

class LLMConfig:
    """Default parameters for model calls."""

    TEMPERATURE: Final[float] = 0.1
    """Low temperature keeps rankings and extractions stable across calls."""

    MAX_TOKENS: Final[int] = 2000
    """Completion budget. Five ranking entries fit comfortably."""

    TIMEOUT_SECONDS: Final[float] = 60.0
    """Per-provider timeout. Expiry is treated as a provider server error."""

"""Core components of the recruitment AI pipeline."""

from kazehire.core.config import (
    DEFAULT_PROVIDER_ORDER,
    DEFAULT_MODELS,
    API_KEY_ENV_VARS,
    API_BASE_ENV_VARS,
    ExtractionLimits,
    PromptBudgets,
    RankingConfig,
    ConversationConfig,
    LLMConfig,
)
from kazehire.core.errors import (
    ErrorSeverity,
    ErrorCategory,
    ExtractionFailureKind,
    KazehireError,
    InvalidTaskInput,
    ExtractionError,
    NoUsableDocuments,
    ProviderError,
    AuthError,
    RateLimited,
    ProviderServerError,
    UnknownError,
    AllProvidersFailed,
    ResponseFormatError,
    SchemaValidationError,
    IdentityMismatch,
    PipelineIssue,
    PipelineErrors,
)
from kazehire.core.pdf_reader import PDFReader, TextExtractor, guess_candidate_name
from kazehire.core.llm_client import (
    ProviderConfig,
    ProviderResponse,
    GatewayResult,
    ModelGateway,
    classify_provider_error,
)
from kazehire.core.response_decoder import decode, strip_code_fence
from kazehire.core.schema_validator import validate, RESPONSE_MODELS
from kazehire.core.identity import IdentityMap, IdentityEntry, CorrelationResult, correlate
from kazehire.core.pipeline_logger import PipelineLogger, reset_logger

__all__ = [
    # Configuration
    "DEFAULT_PROVIDER_ORDER",
    "DEFAULT_MODELS",
    "API_KEY_ENV_VARS",
    "API_BASE_ENV_VARS",
    "ExtractionLimits",
    "PromptBudgets",
    "RankingConfig",
    "ConversationConfig",
    "LLMConfig",
    # Errors
    "ErrorSeverity",
    "ErrorCategory",
    "ExtractionFailureKind",
    "KazehireError",
    "InvalidTaskInput",
    "ExtractionError",
    "NoUsableDocuments",
    "ProviderError",
    "AuthError",
    "RateLimited",
    "ProviderServerError",
    "UnknownError",
    "AllProvidersFailed",
    "ResponseFormatError",
    "SchemaValidationError",
    "IdentityMismatch",
    "PipelineIssue",
    "PipelineErrors",
    # Text extraction
    "PDFReader",
    "TextExtractor",
    "guess_candidate_name",
    # Model gateway
    "ProviderConfig",
    "ProviderResponse",
    "GatewayResult",
    "ModelGateway",
    "classify_provider_error",
    # Decode / validate / correlate
    "decode",
    "strip_code_fence",
    "validate",
    "RESPONSE_MODELS",
    "IdentityMap",
    "IdentityEntry",
    "CorrelationResult",
    "correlate",
    # Logging
    "PipelineLogger",
    "reset_logger",
]

"""Validate decoded model output against each task's response shape.

The rules live on the pydantic models in kazehire.pydantic_models; this
module picks the model for a task type and turns pydantic's errors into a
SchemaValidationError naming the first offending field.

Only one repair is made: missing (or null) strengths, concerns and
technical_skills lists on ranking entries become empty lists. Every other
violation fails the task. Out-of-range scores are rejected, never clamped.
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from kazehire.core.errors import SchemaValidationError
from kazehire.pydantic_models.bias_models import BiasCheckResponse
from kazehire.pydantic_models.conversation_models import ConversationExtraction
from kazehire.pydantic_models.ranking_models import RankingResponse
from kazehire.pydantic_models.task_models import TaskType

RESPONSE_MODELS: dict[TaskType, type[BaseModel]] = {
    TaskType.RANK_CANDIDATES: RankingResponse,
    TaskType.SUMMARIZE_CONVERSATION: ConversationExtraction,
    TaskType.DETECT_BIAS: BiasCheckResponse,
}


def _field_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as 'top_candidates[0].fit_score'."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def validate(payload: dict[str, Any] | BaseModel, task_type: TaskType) -> BaseModel:
    """Validate a decoded payload for a task.

    Validation is idempotent: passing an already-validated result (or its
    model_dump()) back in yields an equal object.

    Args:
        payload: Decoded JSON object, or a previously validated result.
        task_type: Which task's shape to enforce.

    Returns:
        RankingResponse, ConversationExtraction or BiasCheckResponse.

    Raises:
        SchemaValidationError: On the first rule violation.
    """
    model = RESPONSE_MODELS[task_type]
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        raise SchemaValidationError(
            field=_field_path(first["loc"]),
            reason=first["msg"],
        ) from e

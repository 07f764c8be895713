"""Compile a task request into a prompt.

compile_prompt is pure: no I/O, no clock, no randomness. The same task type
and payload always produce byte-identical text (and, for ranking, an equal
IdentityMap).
"""

from kazehire.prompts.bias_prompt import BIAS_SCHEMA_ID, build_bias_prompt
from kazehire.prompts.conversation_prompt import CONVERSATION_SCHEMA_ID, build_conversation_prompt
from kazehire.prompts.ranking_prompt import RANKING_SCHEMA_ID, build_ranking_prompt
from kazehire.pydantic_models.task_models import (
    BiasPayload,
    CompiledPrompt,
    ConversationPayload,
    RankCandidatesPayload,
    TaskPayload,
    TaskRequest,
    TaskType,
)

_PAYLOAD_TYPES: dict[TaskType, type] = {
    TaskType.RANK_CANDIDATES: RankCandidatesPayload,
    TaskType.SUMMARIZE_CONVERSATION: ConversationPayload,
    TaskType.DETECT_BIAS: BiasPayload,
}


def compile_prompt(task_type: TaskType, payload: TaskPayload) -> CompiledPrompt:
    """Compile the prompt for one task.

    Args:
        task_type: Which task template to use.
        payload: The matching payload type for the task.

    Returns:
        CompiledPrompt. Ranking prompts carry the IdentityMap issued for
        their candidates.

    Raises:
        TypeError: If the payload does not match the task type.
    """
    expected = _PAYLOAD_TYPES[task_type]
    if not isinstance(payload, expected):
        raise TypeError(f"{task_type.value} expects {expected.__name__}, got {type(payload).__name__}")

    if task_type is TaskType.RANK_CANDIDATES:
        text, id_map = build_ranking_prompt(payload)
        return CompiledPrompt(text=text, declared_response_schema_id=RANKING_SCHEMA_ID, identity_map=id_map)

    if task_type is TaskType.SUMMARIZE_CONVERSATION:
        return CompiledPrompt(
            text=build_conversation_prompt(payload),
            declared_response_schema_id=CONVERSATION_SCHEMA_ID,
        )

    return CompiledPrompt(text=build_bias_prompt(payload), declared_response_schema_id=BIAS_SCHEMA_ID)


def compile_request(request: TaskRequest) -> CompiledPrompt:
    """Compile a TaskRequest."""
    return compile_prompt(request.task_type, request.payload)

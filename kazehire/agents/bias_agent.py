"""Bias agent: flag potentially biased wording in interview feedback."""

from kazehire.agents.common import run_model_steps
from kazehire.core.errors import InvalidTaskInput, KazehireError
from kazehire.core.llm_client import ModelGateway
from kazehire.core.pipeline_logger import PipelineLogger
from kazehire.prompts.compiler import compile_prompt
from kazehire.pydantic_models.bias_models import BiasCheckResponse, BiasFlag
from kazehire.pydantic_models.task_models import BiasPayload, TaskType

TASK = TaskType.DETECT_BIAS


async def detect_bias(
    feedback_text: str,
    gateway: ModelGateway,
    logger: PipelineLogger | None = None,
) -> list[BiasFlag]:
    """Check feedback for biased terms.

    Returns:
        Flags in the order the model reported them. An empty list means no
        bias was found; a failed check raises instead.

    Raises:
        InvalidTaskInput: The feedback is empty.
        AuthError, AllProvidersFailed: Model call failed.
        ResponseFormatError, SchemaValidationError: Model output unusable.
    """
    if not feedback_text or not feedback_text.strip():
        raise InvalidTaskInput("Feedback text is empty")

    logger = logger or PipelineLogger()
    logger.start_task(TASK.value, chars=len(feedback_text))
    try:
        prompt = compile_prompt(TASK, BiasPayload(feedback_text=feedback_text))
        response: BiasCheckResponse = await run_model_steps(prompt, TASK, gateway, logger)
    except KazehireError as e:
        logger.error("Bias check failed", exc=e)
        logger.end_task(success=False)
        raise

    logger.end_task(success=True, flags=len(response.flags))
    return list(response.flags)

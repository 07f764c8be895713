"""Conversation agent: pull hiring details out of a chat transcript."""

from kazehire.agents.common import run_model_steps
from kazehire.core.errors import InvalidTaskInput, KazehireError
from kazehire.core.llm_client import ModelGateway
from kazehire.core.pipeline_logger import PipelineLogger
from kazehire.prompts.compiler import compile_prompt
from kazehire.pydantic_models.conversation_models import ConversationExtraction
from kazehire.pydantic_models.task_models import ConversationPayload, TaskType

TASK = TaskType.SUMMARIZE_CONVERSATION


async def summarize_conversation(
    transcript: str,
    gateway: ModelGateway,
    logger: PipelineLogger | None = None,
) -> ConversationExtraction:
    """Extract availability, salary and interest from a transcript.

    Fields the transcript does not mention come back as None.

    Raises:
        InvalidTaskInput: The transcript is empty.
        AuthError, AllProvidersFailed: Model call failed.
        ResponseFormatError, SchemaValidationError: Model output unusable.
    """
    if not transcript or not transcript.strip():
        raise InvalidTaskInput("Transcript is empty")

    logger = logger or PipelineLogger()
    logger.start_task(TASK.value, chars=len(transcript))
    try:
        prompt = compile_prompt(TASK, ConversationPayload(transcript=transcript))
        extraction: ConversationExtraction = await run_model_steps(prompt, TASK, gateway, logger)
    except KazehireError as e:
        logger.error("Conversation summary failed", exc=e)
        logger.end_task(success=False)
        raise

    mentioned = [name for name, value in extraction.model_dump().items() if value is not None]
    logger.end_task(success=True, fields=mentioned)
    return extraction

"""Steps shared by every task: invoke the model, decode, validate."""

from pydantic import BaseModel

from kazehire.core.llm_client import ModelGateway
from kazehire.core.pipeline_logger import PipelineLogger
from kazehire.core.response_decoder import decode
from kazehire.core.schema_validator import validate
from kazehire.pydantic_models.task_models import CompiledPrompt, TaskType


async def run_model_steps(
    prompt: CompiledPrompt,
    task_type: TaskType,
    gateway: ModelGateway,
    logger: PipelineLogger,
) -> BaseModel:
    """Invoke the model with a compiled prompt and return the validated result.

    Raises:
        AuthError, AllProvidersFailed: From the gateway.
        ResponseFormatError: Output was not a JSON object.
        SchemaValidationError: Output had the wrong shape.
    """
    logger.start_phase("invoke")
    result = await gateway.complete(prompt)
    logger.phase_result(
        "model answered",
        provider=result.response.provider_id,
        attempts=len(result.attempts),
        chars=len(result.text),
    )

    logger.start_phase("decode")
    payload = decode(result.text)

    logger.start_phase("validate")
    validated = validate(payload, task_type)
    logger.debug("Validated response", schema=prompt.declared_response_schema_id)
    return validated

"""Ranking agent: rank candidate resumes against a job opening.

extract resumes -> compile (issuing opaque ids) -> invoke -> decode
-> validate -> correlate ids back -> order and cap the result.

A corrupt or empty resume is skipped and recorded; the ranking continues with
the rest. The ranking fails only if no resume is usable, or if the model call
or its output fails.
"""

from collections.abc import Sequence

from kazehire.agents.common import run_model_steps
from kazehire.core.config import RankingConfig
from kazehire.core.errors import (
    KazehireError,
    PipelineErrors,
    identity_issue,
    policy_warning,
)
from kazehire.core.identity import correlate
from kazehire.core.llm_client import ModelGateway
from kazehire.core.pdf_reader import TextExtractor
from kazehire.core.pipeline_logger import PipelineLogger
from kazehire.prompts.compiler import compile_prompt
from kazehire.pydantic_models.ranking_models import RankingEntry, RankingResponse
from kazehire.pydantic_models.task_models import (
    DocumentRef,
    RankCandidatesPayload,
    TaskType,
)

TASK = TaskType.RANK_CANDIDATES


def order_and_cap(entries: list[RankingEntry], pool_size: int) -> list[RankingEntry]:
    """Sort by fit_score (best first, ties keep model order) and cap the length."""
    limit = min(RankingConfig.MAX_RANKED, pool_size)
    ranked = sorted(entries, key=lambda entry: entry.fit_score, reverse=True)
    return ranked[:limit]


async def rank_candidates(
    job_title: str,
    job_description: str,
    candidate_documents: Sequence[DocumentRef],
    gateway: ModelGateway,
    comments: str | None = None,
    extractor: TextExtractor | None = None,
    errors: PipelineErrors | None = None,
    logger: PipelineLogger | None = None,
) -> list[RankingEntry]:
    """Rank candidates for a job from their resume documents.

    Args:
        job_title: Title of the job opening.
        job_description: Full job description.
        candidate_documents: One resume per candidate. Use CandidateDocument to
            pass a known candidate name; otherwise the name is guessed.
        gateway: Model gateway with the providers to use.
        comments: Optional recruiter comments for the model.
        extractor: Text extractor; a default one is created if omitted.
        errors: Optional accumulator for skipped documents and dropped entries.
        logger: Task logger; a fresh one is created if omitted.

    Returns:
        Up to min(5, usable resumes) entries, best fit first, carrying the
        caller's real candidate ids.

    Raises:
        NoUsableDocuments: No resume yielded usable text.
        AuthError, AllProvidersFailed: Model call failed.
        ResponseFormatError, SchemaValidationError: Model output unusable.
    """
    extractor = extractor or TextExtractor()
    logger = logger or PipelineLogger()
    errors = errors if errors is not None else PipelineErrors()

    logger.start_task(TASK.value, documents=len(candidate_documents))
    try:
        logger.start_phase("extract")
        resumes = extractor.extract_many(candidate_documents, errors=errors, task=TASK.value)
        logger.phase_result(
            "resumes extracted",
            usable=len(resumes),
            skipped=len(candidate_documents) - len(resumes),
        )

        logger.start_phase("compile")
        prompt = compile_prompt(
            TASK,
            RankCandidatesPayload(
                job_title=job_title,
                job_description=job_description,
                resumes=tuple(resumes),
                comments=comments,
            ),
        )
        id_map = prompt.identity_map
        logger.debug("Compiled ranking prompt", chars=len(prompt.text), candidates=len(id_map))

        response: RankingResponse = await run_model_steps(prompt, TASK, gateway, logger)

        logger.start_phase("correlate")
        correlation = correlate(list(response.top_candidates), id_map)
        for mismatch in correlation.mismatches:
            errors.add(identity_issue(mismatch, TASK.value))

        for entry in correlation.entries:
            if not entry.concerns:
                # Requested in the prompt, not enforced
                errors.add(policy_warning("Ranked candidate has no concerns", TASK.value, entry.candidate_id))
                logger.warning("Ranked candidate has no concerns", candidate=entry.candidate_id)

        ranking = order_and_cap(correlation.entries, pool_size=len(id_map))
        expected = min(RankingConfig.MAX_RANKED, len(id_map))
        if len(ranking) < expected:
            logger.warning("Model ranked fewer candidates than requested", expected=expected, got=len(ranking))
        logger.phase_result("ranking ready", ranked=len(ranking), dropped=len(correlation.mismatches))
    except KazehireError as e:
        logger.error("Ranking failed", exc=e)
        logger.end_task(success=False)
        raise

    logger.end_task(success=True, ranked=len(ranking))
    return ranking

"""Prompt for ranking candidates against a job opening.

Each resume is introduced under an opaque token issued by an IdentityMap.
The model only ever sees and echoes those tokens, never a real candidate id.
"""

from kazehire.core.config import PromptBudgets, RankingConfig
from kazehire.core.identity import IdentityMap
from kazehire.prompts.budget import truncate
from kazehire.pydantic_models.task_models import RankCandidatesPayload

RANKING_SCHEMA_ID = "rank_candidates.v1"

RANKING_RESPONSE_SCHEMA = """{
  "top_candidates": [
    {
      "candidate_id": "<Candidate ID exactly as given above>",
      "candidate_name": "<candidate name>",
      "fit_score": <integer 1-10>,
      "strengths": ["<strength>", "<strength>"],
      "concerns": ["<concern>"],
      "technical_skills": ["<skill>", "<skill>"],
      "reasoning": "<1-2 sentence explanation of the ranking>"
    }
  ]
}"""

RANKING_ROLE = """You are an expert HR manager tasked with ranking candidates based on their resumes and a job description.

## Objective

Decide which candidates fit the job best, score each one, and explain the ranking."""

RANKING_RULES = """## Critical Rules

1. **Exact IDs**: "candidate_id" must be one of the Candidate IDs listed above, copied exactly. Never invent IDs.
2. **Integer scores**: "fit_score" is a whole number from {min_score} (poor fit) to {max_score} (ideal fit).
3. **At least one concern**: every candidate you return must have at least one concern, even if minor.
4. **Technical skills**: list the candidate's skills that matter for this role.
5. **Order**: sort candidates from best to worst fit (highest fit_score first).
6. **Count**: {count_rule}"""


def _count_rule(pool_size: int) -> str:
    limit = RankingConfig.MAX_RANKED
    if pool_size <= limit:
        return f"there are {pool_size} candidates; return ALL {pool_size} of them."
    return f"there are {pool_size} candidates; return only the TOP {limit}."


def build_ranking_prompt(payload: RankCandidatesPayload) -> tuple[str, IdentityMap]:
    """Build the ranking prompt and the identity map for its candidates.

    Args:
        payload: Job details, extracted resumes (in caller order) and comments.

    Returns:
        Tuple of (prompt text, IdentityMap issued for this prompt).
    """
    id_map = IdentityMap()

    candidate_blocks = []
    for resume in payload.resumes:
        if id_map.opaque_for(resume.source_identifier) is not None:
            continue  # same candidate submitted twice
        opaque_id = id_map.issue(resume.source_identifier, resume.display_name)
        candidate_blocks.append(
            f"### Candidate ID: {opaque_id}\n"
            f"Name: {truncate(resume.display_name, PromptBudgets.JOB_TITLE)}\n"
            f"Resume:\n{truncate(resume.text, PromptBudgets.RESUME)}"
        )

    sections = [
        RANKING_ROLE,
        "## Job\n\n"
        f"Job Title: {truncate(payload.job_title, PromptBudgets.JOB_TITLE)}\n"
        f"Job Description:\n{truncate(payload.job_description, PromptBudgets.JOB_DESCRIPTION)}",
        "## Candidates\n\n" + "\n\n".join(candidate_blocks),
        RANKING_RULES.format(
            min_score=RankingConfig.FIT_SCORE_MIN,
            max_score=RankingConfig.FIT_SCORE_MAX,
            count_rule=_count_rule(len(id_map)),
        ),
    ]

    comments = truncate(payload.comments, PromptBudgets.COMMENTS)
    if comments:
        sections.append(f"## Additional Comments\n\n{comments}")

    sections.append(
        "## Output Format\n\n"
        "Respond with ONLY this JSON structure and nothing else:\n"
        f"{RANKING_RESPONSE_SCHEMA}"
    )

    return "\n\n".join(sections), id_map

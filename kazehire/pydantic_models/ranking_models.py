"""Pydantic schemas for the candidate ranking task.

RankingResponse is what the model must return. Its entries still carry the
opaque per-request tokens; RankingEntry is the correlated result with the
caller's real candidate ids.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RankedCandidateResponse(BaseModel):
    """One ranked candidate as echoed by the model.

    Attributes:
        candidate_id: Opaque token issued in the prompt (e.g. "candidate_2")
        candidate_name: Name the model associated with the token (informational)
        fit_score: Integer 1-10 match strength
        strengths: Reasons the candidate fits
        concerns: Gaps or risks (the prompt asks for at least one)
        technical_skills: Skills relevant to the role
        reasoning: Short explanation of the ranking
    """

    model_config = ConfigDict(frozen=True)

    candidate_id: str = Field(strict=True, min_length=1, description="Opaque candidate token")
    candidate_name: str = Field(
        strict=True, min_length=1, description="Candidate name as the model read it"
    )
    fit_score: int = Field(strict=True, ge=1, le=10, description="1 = poor fit, 10 = ideal fit")
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    technical_skills: list[str] = Field(default_factory=list)
    reasoning: str = Field(strict=True, description="1-2 sentence explanation")

    @field_validator("candidate_id", "candidate_name")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return value.strip()

    @field_validator("strengths", "concerns", "technical_skills", mode="before")
    @classmethod
    def _default_missing_list(cls, value):
        # Only these three lists are auto-repaired; null counts as missing.
        return [] if value is None else value


class RankingResponse(BaseModel):
    """Top-level ranking payload returned by the model."""

    model_config = ConfigDict(frozen=True)

    top_candidates: list[RankedCandidateResponse] = Field(
        description="Candidates ordered from best to worst fit"
    )


class RankingEntry(BaseModel):
    """A ranked candidate resolved to the caller's real identity."""

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    candidate_name: str
    fit_score: int = Field(ge=1, le=10)
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    technical_skills: list[str] = Field(default_factory=list)
    reasoning: str = ""

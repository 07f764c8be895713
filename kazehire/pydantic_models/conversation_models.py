"""Pydantic schema for the conversation summary task.

Every field is independently optional. A missing field means the transcript
did not mention it; nothing is inferred.
"""

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ConversationExtraction(BaseModel):
    """Structured attributes extracted from a recruiter/candidate conversation.

    Attributes:
        start_date: Earliest date the candidate can start
        end_date: Date the candidate's availability ends (e.g. contract roles)
        min_salary: Lower bound of expected salary
        max_salary: Upper bound of expected salary
        interest_level: Candidate's interest in the role, 1 (low) to 5 (high)
        summary_text: Short neutral summary of the conversation
    """

    model_config = ConfigDict(frozen=True)

    start_date: date | None = Field(default=None, strict=True)
    end_date: date | None = Field(default=None, strict=True)
    min_salary: float | None = Field(default=None, strict=True, ge=0, allow_inf_nan=False)
    max_salary: float | None = Field(default=None, strict=True, ge=0, allow_inf_nan=False)
    interest_level: int | None = Field(default=None, strict=True, ge=1, le=5)
    summary_text: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _iso_date_only(cls, value):
        # Numbers would otherwise be read as Unix timestamps.
        if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
            return value
        if isinstance(value, str) and _ISO_DATE.match(value):
            return date.fromisoformat(value)
        raise ValueError("date must be an ISO YYYY-MM-DD string")

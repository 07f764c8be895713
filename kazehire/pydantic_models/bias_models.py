"""Pydantic schemas for the bias detection task."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonBlankStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]


class BiasFlag(BaseModel):
    """A term in written feedback that may reflect bias.

    Attributes:
        term: The exact word or phrase from the feedback
        justification: Why the term may be biased
    """

    model_config = ConfigDict(frozen=True)

    term: NonBlankStr
    justification: NonBlankStr


class BiasCheckResponse(BaseModel):
    """Top-level bias check payload. An empty list means no bias found."""

    model_config = ConfigDict(frozen=True)

    flags: list[BiasFlag]

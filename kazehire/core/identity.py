"""Opaque candidate identifiers and their correlation back to real ids.

The model never sees a real candidate id. While compiling a ranking prompt
each resume is issued a short token ("candidate_1", "candidate_2", ...) and
the model is asked to echo that token. Afterwards the echoed tokens are
looked up in the same IdentityMap; anything that does not resolve is dropped.

Names are informational only. A name that drifts from the known display name
is logged, but identity is always decided by the token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rapidfuzz import fuzz

from kazehire.core.config import RankingConfig
from kazehire.core.errors import IdentityMismatch
from kazehire.pydantic_models.ranking_models import RankedCandidateResponse, RankingEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityEntry:
    """One issued token and the real identity it stands for."""

    opaque_id: str
    source_identifier: str
    display_name: str


@dataclass
class IdentityMap:
    """Per-request arena of issued tokens, searchable in both directions.

    Tokens are assigned by ordinal in issue order, so the same sequence of
    issue() calls always yields the same tokens.
    """

    prefix: str = RankingConfig.OPAQUE_ID_PREFIX
    entries: list[IdentityEntry] = field(default_factory=list)
    _by_opaque: dict[str, int] = field(default_factory=dict, repr=False, compare=False)
    _by_source: dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def issue(self, source_identifier: str, display_name: str) -> str:
        """Issue a token for a real identity, or return the one already issued."""
        if source_identifier in self._by_source:
            return self.entries[self._by_source[source_identifier]].opaque_id

        index = len(self.entries)
        opaque_id = f"{self.prefix}{index + 1}"
        self.entries.append(IdentityEntry(opaque_id, source_identifier, display_name))
        self._by_opaque[opaque_id] = index
        self._by_source[source_identifier] = index
        return opaque_id

    def resolve(self, opaque_id: str) -> IdentityEntry | None:
        """Look up the real identity behind a token, or None if never issued."""
        index = self._by_opaque.get(opaque_id.strip())
        return self.entries[index] if index is not None else None

    def opaque_for(self, source_identifier: str) -> str | None:
        """Token issued for a real identifier, if any."""
        index = self._by_source.get(source_identifier)
        return self.entries[index].opaque_id if index is not None else None

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, opaque_id: object) -> bool:
        return isinstance(opaque_id, str) and opaque_id.strip() in self._by_opaque


@dataclass
class CorrelationResult:
    """Entries that resolved, plus the ones that were dropped."""

    entries: list[RankingEntry] = field(default_factory=list)
    mismatches: list[IdentityMismatch] = field(default_factory=list)


def name_drift(echoed_name: str, known_name: str) -> bool:
    """True when the model's name for a token clearly differs from the known name."""
    if not echoed_name or not known_name:
        return False
    score = fuzz.token_set_ratio(echoed_name.lower(), known_name.lower())
    return score < RankingConfig.NAME_DRIFT_THRESHOLD


def correlate(
    entries: list[RankedCandidateResponse],
    id_map: IdentityMap,
) -> CorrelationResult:
    """Replace opaque tokens with real identities.

    Args:
        entries: Validated ranking entries as echoed by the model.
        id_map: The map issued when this request's prompt was compiled.

    Returns:
        CorrelationResult with resolved entries in input order. Entries with an
        unknown token are listed in mismatches, and a token echoed twice keeps
        only its first entry.
    """
    result = CorrelationResult()
    seen: set[str] = set()

    for entry in entries:
        identity = id_map.resolve(entry.candidate_id)
        if identity is None:
            logger.warning("Dropping ranking entry with unknown token %r", entry.candidate_id)
            result.mismatches.append(
                IdentityMismatch(opaque_id=entry.candidate_id, echoed_name=entry.candidate_name)
            )
            continue

        if identity.opaque_id in seen:
            logger.warning("Duplicate ranking entry for %s ignored", identity.opaque_id)
            continue
        seen.add(identity.opaque_id)

        if name_drift(entry.candidate_name, identity.display_name):
            logger.warning(
                "Model named %s %r but it was issued for %r; keeping the issued identity",
                identity.opaque_id, entry.candidate_name, identity.display_name,
            )

        result.entries.append(
            RankingEntry(
                candidate_id=identity.source_identifier,
                candidate_name=identity.display_name,
                fit_score=entry.fit_score,
                strengths=list(entry.strengths),
                concerns=list(entry.concerns),
                technical_skills=list(entry.technical_skills),
                reasoning=entry.reasoning,
            )
        )

    return result

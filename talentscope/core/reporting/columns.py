"""
Report status columns.

Each column groups one or more stored status spellings. Rejected and Dropped
are split into Client and Mentor columns through the attribution rules.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from talentscope.data.models import Candidate
from talentscope.utils.constants import (
    STATUS_ALIASES,
    TOTAL_COLUMN,
    AttributionParty,
    CandidateStatus,
)

from .attribution import matches_attribution
from .filters import DateWindowPolicy


@dataclass(frozen=True)
class StatusColumn:
    """A counted report column."""

    key: str
    statuses: tuple[str, ...]
    # (main status, party) for attributed columns
    attribution: Optional[tuple[str, AttributionParty]] = None

    def matches(self, candidate: Candidate) -> bool:
        if self.attribution is not None:
            main_status, party = self.attribution
            return matches_attribution(candidate, main_status, party)
        return candidate.status in self.statuses

    @property
    def window_statuses(self) -> Optional[tuple[str, ...]]:
        """Spellings that date an attributed column; plain columns use the current status."""
        return self.statuses if self.attribution is not None else None


def _attributed(key: str, status: CandidateStatus, party: AttributionParty) -> StatusColumn:
    return StatusColumn(
        key=key,
        statuses=STATUS_ALIASES[status.value],
        attribution=(status.value, party),
    )


DEFAULT_COLUMNS: tuple[StatusColumn, ...] = (
    StatusColumn("New", STATUS_ALIASES[CandidateStatus.NEW.value]),
    StatusColumn("Shortlisted", STATUS_ALIASES[CandidateStatus.SHORTLISTED.value]),
    _attributed("Drop (M)", CandidateStatus.DROPPED, AttributionParty.MENTOR),
    _attributed("Rej (M)", CandidateStatus.REJECTED, AttributionParty.MENTOR),
    StatusColumn("Interviewed", STATUS_ALIASES[CandidateStatus.INTERVIEWED.value]),
    StatusColumn("Selected", STATUS_ALIASES[CandidateStatus.SELECTED.value]),
    StatusColumn("Joined", STATUS_ALIASES[CandidateStatus.JOINED.value]),
    StatusColumn("Hold", STATUS_ALIASES[CandidateStatus.HOLD.value]),
    _attributed("Drop (C)", CandidateStatus.DROPPED, AttributionParty.CLIENT),
    _attributed("Rej (C)", CandidateStatus.REJECTED, AttributionParty.CLIENT),
)


def column_keys(columns: Iterable[StatusColumn] = DEFAULT_COLUMNS) -> list[str]:
    """Column keys in display order, followed by Total."""
    return [column.key for column in columns] + [TOTAL_COLUMN]


def count_columns(
    candidates: Iterable[Candidate],
    policy: DateWindowPolicy,
    columns: Iterable[StatusColumn] = DEFAULT_COLUMNS,
) -> tuple[dict[str, int], dict[str, list[str]]]:
    """
    Count candidates per column.

    The Total column is windowed by upload date and the status columns by
    status date, each only when the policy asks for it. Plain columns date a
    candidate by its current status and attributed columns by the latest
    Rejected or Dropped entry.

    Returns:
        Tuple of (counts by column key, candidate ids by column key)
    """
    columns = tuple(columns)
    ids: dict[str, list[str]] = {key: [] for key in column_keys(columns)}

    for candidate in candidates:
        candidate_id = str(candidate.id) if candidate.id is not None else ""
        if policy.counts_in_total(candidate):
            ids[TOTAL_COLUMN].append(candidate_id)
        for column in columns:
            if column.matches(candidate) and policy.counts_in_status(candidate, column.window_statuses):
                ids[column.key].append(candidate_id)

    counts = {key: len(values) for key, values in ids.items()}
    return counts, ids

"""
Status timestamp resolution.

Determines when a candidate last reached a status, preferring the dedicated
date fields over the status history.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from talentscope.data.models import Candidate
from talentscope.utils.constants import CandidateStatus


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _target_set(targets: Union[str, Iterable[str]]) -> frozenset[str]:
    if isinstance(targets, str):
        return frozenset({targets})
    return frozenset(targets)


def resolve_status_timestamp(
    record: Candidate,
    targets: Union[str, Iterable[str]],
    fallback: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Resolve the instant ``record`` last reached any of ``targets``.

    Priority:
    1. ``joiningDate`` when Joined is a target
    2. ``selectionDate`` when Selected is a target
    3. latest matching ``statusHistory`` timestamp
    4. ``fallback``, then ``createdAt``, then None

    Args:
        record: Candidate to inspect
        targets: A status or an iterable of statuses
        fallback: Value to use when neither dedicated fields nor history match

    Returns:
        Naive UTC datetime, or None
    """
    wanted = _target_set(targets)

    if CandidateStatus.JOINED.value in wanted and record.joining_date:
        return to_naive_utc(record.joining_date)
    if CandidateStatus.SELECTED.value in wanted and record.selection_date:
        return to_naive_utc(record.selection_date)

    matches = [
        to_naive_utc(entry.timestamp)
        for entry in record.status_history
        if entry.status in wanted and entry.timestamp is not None
    ]
    if matches:
        return max(matches)

    if fallback is not None:
        return to_naive_utc(fallback)
    return to_naive_utc(record.created_at)


def current_status_timestamp(record: Candidate) -> Optional[datetime]:
    """
    When ``record`` reached the status it is in now.

    Joined reads ``joiningDate`` and Selected or Offer read ``selectionDate``
    before the history. Any other spelling is looked up exactly as stored, so
    a Hired candidate is dated by its Hired entries and never by
    ``joiningDate``.
    """
    status = record.status
    if status == CandidateStatus.JOINED.value:
        return resolve_status_timestamp(record, status, record.joining_date)
    if status in (CandidateStatus.SELECTED.value, "Offer"):
        return resolve_status_timestamp(record, CandidateStatus.SELECTED.value, record.selection_date)
    return resolve_status_timestamp(record, status)

"""
Rejection and drop attribution.

Records written before the explicit ``rejectedBy``/``droppedBy`` fields
existed are attributed from their status history. Both paths are resolved
through a small decision table so the legacy inference stays isolated.
"""

from dataclasses import dataclass
from typing import Optional

from talentscope.data.models import Candidate
from talentscope.utils.constants import STATUS_ALIASES, AttributionParty, CandidateStatus


@dataclass(frozen=True)
class AttributionRule:
    """How one terminal status is attributed."""

    statuses: tuple[str, ...]
    explicit_field: str


ATTRIBUTION_RULES: dict[str, AttributionRule] = {
    CandidateStatus.REJECTED.value: AttributionRule(
        statuses=STATUS_ALIASES[CandidateStatus.REJECTED.value],
        explicit_field="rejected_by",
    ),
    CandidateStatus.DROPPED.value: AttributionRule(
        statuses=STATUS_ALIASES[CandidateStatus.DROPPED.value],
        explicit_field="dropped_by",
    ),
}

# Explicit values written by older screens
_EXPLICIT_PARTIES: dict[str, AttributionParty] = {
    "client": AttributionParty.CLIENT,
    "mentor": AttributionParty.MENTOR,
    "manager": AttributionParty.MENTOR,
}

_INTERVIEWED = frozenset(STATUS_ALIASES[CandidateStatus.INTERVIEWED.value])
_SHORTLISTED = frozenset(STATUS_ALIASES[CandidateStatus.SHORTLISTED.value])


def infer_from_history(candidate: Candidate) -> Optional[AttributionParty]:
    """
    Attribute from how far the candidate progressed.

    Reaching an interview means the client turned them down; stopping at
    shortlisting means the mentor did. Neither means no attribution.
    """
    seen = candidate.history_statuses
    if seen & _INTERVIEWED:
        return AttributionParty.CLIENT
    if seen & _SHORTLISTED:
        return AttributionParty.MENTOR
    return None


def classify_attribution(candidate: Candidate, main_status: str) -> Optional[AttributionParty]:
    """
    Classify who is responsible for a Rejected or Dropped candidate.

    Args:
        candidate: Candidate to classify
        main_status: ``Rejected`` or ``Dropped``

    Returns:
        The responsible party, or None when the candidate is not in
        ``main_status`` or cannot be attributed
    """
    rule = ATTRIBUTION_RULES.get(main_status)
    if rule is None or candidate.status not in rule.statuses:
        return None

    explicit = getattr(candidate, rule.explicit_field)
    if explicit:
        # Unknown explicit values are authoritative too: they match no bucket
        return _EXPLICIT_PARTIES.get(explicit.strip().lower())

    return infer_from_history(candidate)


def matches_attribution(
    candidate: Candidate,
    main_status: str,
    party: AttributionParty | str,
) -> bool:
    """Check whether ``candidate`` falls in the ``party`` bucket of ``main_status``."""
    party = AttributionParty(party)
    return classify_attribution(candidate, main_status) == party

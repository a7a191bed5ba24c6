"""
Application-wide constants for TalentScope.

This module contains all constant values used throughout the application.
Status spellings mirror what the tracker application writes to storage.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "TalentScope"
APP_DISPLAY_NAME: Final[str] = "TalentScope Pipeline Reports"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Enums
# =============================================================================


class Designation(str, Enum):
    """Organizational role of a user."""

    RECRUITER = "Recruiter"
    MENTOR = "Mentor"
    MANAGER = "Manager"
    ADMIN = "Admin"
    FINANCE = "Finance"


class CandidateStatus(str, Enum):
    """Status of a candidate in the pipeline."""

    NEW = "New"
    SHORTLISTED = "Shortlisted"
    INTERVIEWED = "Interviewed"
    SELECTED = "Selected"
    JOINED = "Joined"
    REJECTED = "Rejected"
    DROPPED = "Dropped"
    HOLD = "Hold"


class JobStatus(str, Enum):
    """Status of a job requirement."""

    OPEN = "Open"
    CLOSED = "Closed"
    ON_HOLD = "On Hold"


class AttributionParty(str, Enum):
    """Party responsible for a rejection or drop."""

    CLIENT = "Client"
    MENTOR = "Mentor"


class LocalFilterMode(str, Enum):
    """Which candidate counts the local date range applies to."""

    NONE = "none"
    TOTAL = "total"
    STATUS = "status"
    BOTH = "both"


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    REPORT_GENERATED = "report_generated"
    VISIBILITY_RESOLVED = "visibility_resolved"


# =============================================================================
# Status Spellings
# =============================================================================

# Legacy spellings written by older screens, keyed by canonical status
STATUS_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    CandidateStatus.NEW.value: ("New", "Screening", "Under Review"),
    CandidateStatus.SHORTLISTED.value: ("Shortlisted", "Screen", "Screened"),
    CandidateStatus.INTERVIEWED.value: ("Interviewed", "Interview"),
    CandidateStatus.SELECTED.value: ("Selected", "Offer"),
    CandidateStatus.JOINED.value: ("Joined", "Hired"),
    CandidateStatus.HOLD.value: ("Hold",),
    CandidateStatus.REJECTED.value: ("Rejected", "Reject"),
    CandidateStatus.DROPPED.value: ("Dropped", "Drop"),
}

# Designations that receive visibility into jobs they are assigned to
ASSIGNMENT_GRANT_DESIGNATIONS: Final[frozenset[str]] = frozenset(
    {Designation.MENTOR.value, Designation.MANAGER.value}
)

# Job status value meaning "no job status filter"
ALL_STATUSES: Final[str] = "all"

TOTAL_COLUMN: Final[str] = "Total"

"""
Candidate repository for TalentScope.

Provides the scoped candidate reads the reports are built from.
"""

from typing import Any, Optional

from talentscope.data.models.candidate import Candidate
from talentscope.utils.config import get_settings
from talentscope.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

# Resume links, notes and uploaded files are never needed for reporting
CANDIDATE_PROJECTION = {
    "jobId": 1,
    "createdBy": 1,
    "status": 1,
    "statusHistory": 1,
    "interviewStage": 1,
    "interviewStageHistory": 1,
    "joiningDate": 1,
    "selectionDate": 1,
    "rejectedBy": 1,
    "droppedBy": 1,
    "dynamicFields": 1,
    "createdAt": 1,
    "updatedAt": 1,
}


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for candidate document queries."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.candidates_collection

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    def get_visible(self, scope_query: dict[str, Any]) -> list[Candidate]:
        """Load every candidate matching a visibility scope query."""
        candidates = self.find_all(scope_query, projection=CANDIDATE_PROJECTION)
        logger.debug(f"Loaded {len(candidates)} visible candidates")
        return candidates


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository

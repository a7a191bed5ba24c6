"""
Job repository for TalentScope.

Provides the job reads the visibility scope and reports depend on.
"""

from typing import Any, Iterable, Optional

from bson import ObjectId

from talentscope.data.models.job import Job
from talentscope.utils.config import get_settings
from talentscope.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[Job]):
    """Repository for job document queries."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.jobs_collection

    @property
    def model_class(self) -> type[Job]:
        return Job

    @staticmethod
    def assignment_query(user_id: str | ObjectId) -> dict[str, Any]:
        """Jobs the user leads or is assigned to."""
        oid = BaseRepository._to_object_id(user_id)
        return {"$or": [{"leadRecruiter": oid}, {"assignedRecruiters": oid}]}

    def get_assigned_to(self, user_id: str | ObjectId) -> list[Job]:
        """Get jobs the user leads or is assigned to."""
        return self.find_all(self.assignment_query(user_id))

    def get_for_report(
        self,
        scope_query: dict[str, Any],
        extra_job_ids: Iterable[str | ObjectId] = (),
        actor_id: Optional[str | ObjectId] = None,
    ) -> list[Job]:
        """
        Load the jobs a report may show.

        A job qualifies if it passes the scope query, is one of
        ``extra_job_ids`` (jobs with visible candidates), or is assigned to
        the actor.
        """
        if not scope_query:
            return self.find_all()

        clauses: list[dict[str, Any]] = [scope_query]
        extra_job_ids = list(extra_job_ids)
        if extra_job_ids:
            clauses.append({"_id": self._in_ids(extra_job_ids)})
        if actor_id is not None:
            clauses.append(self.assignment_query(actor_id))

        jobs = self.find_all({"$or": clauses})
        logger.debug(f"Loaded {len(jobs)} report jobs")
        return jobs


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository

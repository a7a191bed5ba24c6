"""
Record visibility scopes.

A scope combines the actor's resolved hierarchy with the jobs they are
assigned to, and answers whether a candidate or job is visible. The same
predicate is available as MongoDB filters so the repositories only load
what the actor may see.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from bson import ObjectId

from talentscope.data.models import Candidate, Job
from talentscope.utils.constants import ASSIGNMENT_GRANT_DESIGNATIONS, Designation
from talentscope.utils.logger import get_logger

from .hierarchy import OrgHierarchyResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class VisibilityScope:
    """Immutable visibility predicate for one actor."""

    actor_id: Any
    designation: Optional[str]
    allowed_creators: frozenset = field(default_factory=frozenset)
    assigned_job_ids: frozenset = field(default_factory=frozenset)
    unrestricted: bool = False

    @classmethod
    def build(
        cls,
        user_id,
        designation: Optional[str],
        resolver: OrgHierarchyResolver,
        jobs: Iterable[Job] = (),
    ) -> "VisibilityScope":
        """
        Build the scope of ``user_id``.

        Admins known to the directory bypass scoping. Only Mentors and
        Managers are granted the jobs they lead or are assigned to; a
        Recruiter sees strictly their own uploads.

        Args:
            user_id: Actor id
            designation: Actor designation
            resolver: Hierarchy resolver over the current user snapshot
            jobs: Jobs to scan for the actor's assignments

        Returns:
            VisibilityScope for the actor
        """
        allowed = resolver.resolve(user_id, designation)
        actor = resolver.get_user(user_id)
        actor_id = actor.id if actor is not None else next(iter(allowed))

        if actor is not None and designation == Designation.ADMIN.value:
            return cls(
                actor_id=actor_id,
                designation=designation,
                allowed_creators=frozenset(allowed),
                unrestricted=True,
            )

        assigned: frozenset = frozenset()
        if designation in ASSIGNMENT_GRANT_DESIGNATIONS and isinstance(actor_id, ObjectId):
            assigned = frozenset(
                job.id for job in jobs
                if job.id is not None and job.is_assigned_to(actor_id)
            )

        logger.debug(
            f"Scope for {actor_id} ({designation}): {len(allowed)} creators, "
            f"{len(assigned)} assigned jobs"
        )
        return cls(
            actor_id=actor_id,
            designation=designation,
            allowed_creators=frozenset(allowed),
            assigned_job_ids=assigned,
        )

    # -------------------------------------------------------------------------
    # In-memory predicates
    # -------------------------------------------------------------------------

    def allows_candidate(self, candidate: Candidate) -> bool:
        if self.unrestricted:
            return True
        if candidate.created_by is not None and candidate.created_by in self.allowed_creators:
            return True
        return candidate.job_id is not None and candidate.job_id in self.assigned_job_ids

    def allows_job(self, job: Job) -> bool:
        if self.unrestricted:
            return True
        return job.created_by is not None and job.created_by in self.allowed_creators

    def filter_candidates(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        return [c for c in candidates if self.allows_candidate(c)]

    def filter_jobs(self, jobs: Iterable[Job]) -> list[Job]:
        return [j for j in jobs if self.allows_job(j)]

    # -------------------------------------------------------------------------
    # MongoDB filters
    # -------------------------------------------------------------------------

    def candidate_query(self) -> dict[str, Any]:
        """Render the candidate predicate as a MongoDB filter."""
        if self.unrestricted:
            return {}
        clauses: list[dict[str, Any]] = [
            {"createdBy": {"$in": sorted(self.allowed_creators, key=str)}}
        ]
        if self.assigned_job_ids:
            clauses.append({"jobId": {"$in": sorted(self.assigned_job_ids, key=str)}})
        return clauses[0] if len(clauses) == 1 else {"$or": clauses}

    def job_query(self) -> dict[str, Any]:
        """Render the job predicate as a MongoDB filter."""
        if self.unrestricted:
            return {}
        return {"CreatedBy": {"$in": sorted(self.allowed_creators, key=str)}}

"""
Report service.

Loads one snapshot of users, jobs, clients and candidates per request
through the repositories, scopes it to the actor, and hands it to the
aggregator. Reads are independent; no isolation is attempted across them.
"""

from typing import Optional

from talentscope.core.visibility import OrgHierarchyResolver, VisibilityScope
from talentscope.data.models import Candidate, Job
from talentscope.data.repositories import (
    CandidateRepository,
    ClientRepository,
    JobRepository,
    UserRepository,
    get_candidate_repository,
    get_client_repository,
    get_job_repository,
    get_user_repository,
)
from talentscope.utils.constants import ASSIGNMENT_GRANT_DESIGNATIONS, AuditAction
from talentscope.utils.logger import LoggerMixin, audit_log

from .aggregator import ReportAggregator, ReportPage
from .filters import ReportFilters


class ReportService(LoggerMixin):
    """Entry point for visibility lookups and reports."""

    def __init__(
        self,
        user_repository: Optional[UserRepository] = None,
        job_repository: Optional[JobRepository] = None,
        client_repository: Optional[ClientRepository] = None,
        candidate_repository: Optional[CandidateRepository] = None,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self.users = user_repository or get_user_repository()
        self.jobs = job_repository or get_job_repository()
        self.clients = client_repository or get_client_repository()
        self.candidates = candidate_repository or get_candidate_repository()
        self.aggregator = aggregator or ReportAggregator()

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    def hierarchy(self) -> OrgHierarchyResolver:
        """Build a resolver over the current user directory."""
        return OrgHierarchyResolver(self.users.get_directory())

    def visible_user_ids(self, actor_id, designation: Optional[str]) -> set:
        """Resolve the ids whose work ``actor_id`` may see."""
        visible = self.hierarchy().resolve(actor_id, designation)
        audit_log(
            AuditAction.VISIBILITY_RESOLVED.value,
            {"actor_id": actor_id, "designation": designation, "visible": visible},
            audit_type="VISIBILITY",
        )
        return visible

    def visibility_scope(
        self,
        actor_id,
        designation: Optional[str],
        resolver: Optional[OrgHierarchyResolver] = None,
    ) -> VisibilityScope:
        """Build the visibility scope of ``actor_id``."""
        resolver = resolver or self.hierarchy()
        assigned: list[Job] = []
        if designation in ASSIGNMENT_GRANT_DESIGNATIONS and resolver.get_user(actor_id) is not None:
            assigned = self.jobs.get_assigned_to(actor_id)
        return VisibilityScope.build(actor_id, designation, resolver, assigned)

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def client_job_report(
        self,
        actor_id,
        designation: Optional[str],
        filters: Optional[ReportFilters] = None,
    ) -> ReportPage:
        """
        Build the client/job report for an actor.

        A job is eligible when it passes the job scope, the actor leads or is
        assigned to it, or at least one visible candidate references it.
        Only visible candidates are counted.

        Args:
            actor_id: Requesting user id
            designation: Requesting user's designation
            filters: Report filters; defaults apply when omitted

        Returns:
            ReportPage
        """
        filters = filters or ReportFilters()
        resolver = self.hierarchy()
        scope = self.visibility_scope(actor_id, designation, resolver)

        candidates = self._visible_candidates(scope)
        candidate_job_ids = {c.job_id for c in candidates if c.job_id is not None}

        jobs = self.jobs.get_for_report(
            scope.job_query(),
            extra_job_ids=candidate_job_ids,
            actor_id=None if scope.unrestricted else scope.actor_id,
        )
        jobs = [
            job for job in jobs
            if scope.allows_job(job)
            or job.id in candidate_job_ids
            or job.is_assigned_to(scope.actor_id)
        ]
        clients = self.clients.get_for_jobs(job.client_id for job in jobs)

        page = self.aggregator.client_job_report(
            candidates, jobs, clients, resolver.users, filters
        )
        self._audit("client_job", actor_id, designation, filters, page)
        return page

    def daily_lineup_report(
        self,
        actor_id,
        designation: Optional[str],
        filters: Optional[ReportFilters] = None,
    ) -> ReportPage:
        """Build the daily lineup report for an actor."""
        filters = filters or ReportFilters()
        resolver = self.hierarchy()
        scope = self.visibility_scope(actor_id, designation, resolver)

        candidates = self._visible_candidates(scope)
        jobs = self.jobs.get_many({c.job_id for c in candidates if c.job_id is not None})
        clients = self.clients.get_for_jobs(job.client_id for job in jobs)

        page = self.aggregator.daily_lineup_report(
            candidates, jobs, clients, resolver.users, filters
        )
        self._audit("daily_lineup", actor_id, designation, filters, page)
        return page

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _visible_candidates(self, scope: VisibilityScope) -> list[Candidate]:
        candidates = self.candidates.get_visible(scope.candidate_query())
        return scope.filter_candidates(candidates)

    def _audit(self, report: str, actor_id, designation, filters: ReportFilters, page: ReportPage) -> None:
        self.logger.info(
            f"Generated {report} report for {actor_id}: "
            f"{page.total_count} rows, page {page.current_page}/{page.total_pages}"
        )
        audit_log(
            AuditAction.REPORT_GENERATED.value,
            {
                "report": report,
                "actor_id": actor_id,
                "designation": designation,
                "filters": filters.model_dump(mode="json", exclude_defaults=True),
                "rows": page.total_count,
            },
        )


# Singleton instance
_report_service: Optional[ReportService] = None


def get_report_service() -> ReportService:
    """Get the report service singleton instance."""
    global _report_service
    if _report_service is None:
        _report_service = ReportService()
    return _report_service

"""
Report aggregation.

Joins candidates, jobs, clients and users into denormalized report rows,
applies text, column and date filters, orders, paginates, and totals the
full filtered set.

Two report shapes share the same mechanics:
- client/job report: one row per job; the global window filters jobs by
  creation date and each row counts the job's lifetime candidates
- daily lineup report: one row per (recruiter, job, upload date); the global
  window filters candidates by upload date
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from talentscope.data.models import Candidate, Client, Job, User
from talentscope.utils.config import get_settings
from talentscope.utils.constants import TOTAL_COLUMN
from talentscope.utils.logger import LoggerMixin

from .columns import DEFAULT_COLUMNS, StatusColumn, column_keys, count_columns
from .filters import ColumnFilters, DateWindowPolicy, ReportFilters
from .timestamps import to_naive_utc


@dataclass
class ReportRow:
    """One denormalized report row."""

    job_id: str
    job_title: str
    client_name: str
    department: Optional[str] = None
    job_status: Optional[str] = None
    date_received: Optional[datetime] = None
    no_of_positions: Optional[int] = None
    recruiters: list[str] = field(default_factory=list)

    counts: dict[str, int] = field(default_factory=dict)
    candidate_ids: dict[str, list[str]] = field(default_factory=dict)

    # Daily lineup rows only
    recruiter_id: Optional[str] = None
    recruiter_name: Optional[str] = None
    upload_date: Optional[date] = None

    @property
    def total(self) -> int:
        return self.counts.get(TOTAL_COLUMN, 0)

    @property
    def row_date(self) -> Optional[date]:
        """Date shown in the row's date column."""
        if self.upload_date is not None:
            return self.upload_date
        return self.date_received.date() if self.date_received else None

    def to_dict(self, date_format: Optional[str] = None) -> dict[str, Any]:
        date_format = date_format or get_settings().reports.display_date_format
        data = {
            "jobId": self.job_id,
            "jobTitle": self.job_title,
            "clientName": self.client_name,
            "department": self.department,
            "jobStatus": self.job_status,
            "dateReceived": self.date_received.strftime(date_format) if self.date_received else None,
            "noOfPositions": self.no_of_positions,
            "recruiters": list(self.recruiters),
            "counts": dict(self.counts),
            "candidateIds": {k: list(v) for k, v in self.candidate_ids.items()},
        }
        if self.upload_date is not None:
            data["recruiterId"] = self.recruiter_id
            data["recruiterName"] = self.recruiter_name
            data["uploadDate"] = self.upload_date.strftime(date_format)
        return data


@dataclass
class ReportPage:
    """A page of report rows with totals over every filtered row."""

    rows: list[ReportRow] = field(default_factory=list)
    totals: dict[str, int] = field(default_factory=dict)
    total_count: int = 0
    total_pages: int = 0
    current_page: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "totals": dict(self.totals),
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
        }


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


class ReportAggregator(LoggerMixin):
    """
    Builds report pages from record snapshots.

    Stateless between calls; every input is passed per request.
    """

    def __init__(
        self,
        columns: Iterable[StatusColumn] = DEFAULT_COLUMNS,
        date_format: Optional[str] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            columns: Status columns to count, in display order
            date_format: strftime format for the date column filter values
        """
        self.columns = tuple(columns)
        self.date_format = date_format or get_settings().reports.display_date_format

    # -------------------------------------------------------------------------
    # Client / Job Report
    # -------------------------------------------------------------------------

    def client_job_report(
        self,
        candidates: Iterable[Candidate],
        jobs: Iterable[Job],
        clients: Iterable[Client],
        users: Iterable[User],
        filters: Optional[ReportFilters] = None,
    ) -> ReportPage:
        """
        Build the client/job report: one row per eligible job.

        Jobs are filtered by status (Open unless overridden) and by the
        global range over their creation date. Candidates are counted over
        the job's lifetime, windowed only by the local policy.
        """
        filters = filters or ReportFilters()
        policy = filters.window_policy()
        status = filters.effective_status(get_settings().reports.open_job_status)

        client_names = {c.id: c.company_name for c in clients}
        user_names = {u.id: u.name for u in users}
        by_job: dict[Any, list[Candidate]] = defaultdict(list)
        for candidate in candidates:
            self._check_consistency(candidate)
            by_job[candidate.job_id].append(candidate)

        rows = []
        for job in jobs:
            if status is not None and (job.status or "").lower() != status.lower():
                continue
            if not policy.in_global(job.created_at):
                continue

            job_candidates = by_job.get(job.id, [])
            rows.append(
                self._build_row(
                    job,
                    job_candidates,
                    client_names,
                    recruiters=self._uploader_names(job_candidates, user_names),
                    policy=policy,
                )
            )

        rows = self._apply_filters(rows, filters)
        rows.sort(key=lambda r: to_naive_utc(r.date_received) or datetime.min, reverse=True)
        return self._paginate(rows, filters)

    # -------------------------------------------------------------------------
    # Daily Lineup Report
    # -------------------------------------------------------------------------

    def daily_lineup_report(
        self,
        candidates: Iterable[Candidate],
        jobs: Iterable[Job],
        clients: Iterable[Client],
        users: Iterable[User],
        filters: Optional[ReportFilters] = None,
    ) -> ReportPage:
        """
        Build the daily lineup report.

        Candidates uploaded by recruiters (or admins) are grouped by uploader,
        job and upload day. The global range filters upload dates; job status
        is unfiltered unless requested.
        """
        filters = filters or ReportFilters()
        policy = filters.window_policy()
        status = filters.effective_status(None)

        client_names = {c.id: c.company_name for c in clients}
        uploaders = {u.id: u for u in users if u.is_uploader}
        jobs_by_id = {j.id: j for j in jobs}

        groups: dict[tuple, list[Candidate]] = defaultdict(list)
        for candidate in candidates:
            self._check_consistency(candidate)
            job = jobs_by_id.get(candidate.job_id)
            if job is None or candidate.created_by not in uploaders:
                continue
            if candidate.created_at is None or not policy.in_global(candidate.created_at):
                continue
            if status is not None and (job.status or "").lower() != status.lower():
                continue
            upload_day = to_naive_utc(candidate.created_at).date()
            groups[(candidate.created_by, job.id, upload_day)].append(candidate)

        rows = []
        for (recruiter_id, job_id, upload_day), group in groups.items():
            recruiter = uploaders[recruiter_id]
            row = self._build_row(
                jobs_by_id[job_id],
                group,
                client_names,
                recruiters=[recruiter.name],
                policy=policy,
            )
            row.recruiter_id = str(recruiter_id)
            row.recruiter_name = recruiter.name
            row.upload_date = upload_day
            rows.append(row)

        rows = self._apply_filters(rows, filters)
        rows.sort(key=lambda r: (r.recruiter_name or "", r.job_title))
        rows.sort(key=lambda r: r.upload_date, reverse=True)
        return self._paginate(rows, filters)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_row(
        self,
        job: Job,
        candidates: list[Candidate],
        client_names: dict,
        recruiters: list[str],
        policy: DateWindowPolicy,
    ) -> ReportRow:
        counts, ids = count_columns(candidates, policy, self.columns)
        return ReportRow(
            job_id=str(job.id),
            job_title=job.title,
            client_name=client_names.get(job.client_id, ""),
            department=job.department,
            job_status=job.status,
            date_received=job.created_at,
            no_of_positions=job.no_of_positions,
            recruiters=recruiters,
            counts=counts,
            candidate_ids=ids,
        )

    @staticmethod
    def _uploader_names(candidates: list[Candidate], user_names: dict) -> list[str]:
        names = {user_names[c.created_by] for c in candidates if c.created_by in user_names}
        return sorted(name for name in names if name)

    def _check_consistency(self, candidate: Candidate) -> None:
        if not candidate.status_matches_history:
            self.logger.debug(
                f"Candidate {candidate.id} status {candidate.status!r} differs from "
                f"last history entry {candidate.status_history[-1].status!r}"
            )

    def _apply_filters(self, rows: list[ReportRow], filters: ReportFilters) -> list[ReportRow]:
        """Apply text and header filters to built rows."""
        if filters.search:
            term = filters.search
            rows = [
                r for r in rows
                if _contains(r.job_title, term)
                or _contains(r.client_name, term)
                or _contains(r.department, term)
                or any(_contains(name, term) for name in r.recruiters)
            ]
        if filters.client_filter:
            rows = [r for r in rows if _contains(r.client_name, filters.client_filter)]
        if filters.job_title_filter:
            rows = [r for r in rows if _contains(r.job_title, filters.job_title_filter)]
        if filters.recruiter_filter:
            rows = [
                r for r in rows
                if any(_contains(name, filters.recruiter_filter) for name in r.recruiters)
            ]
        if filters.columns.active:
            rows = [r for r in rows if self._matches_columns(r, filters.columns)]
        return rows

    def _matches_columns(self, row: ReportRow, columns: ColumnFilters) -> bool:
        if columns.dates:
            shown = row.row_date.strftime(self.date_format) if row.row_date else ""
            if shown not in columns.dates:
                return False
        if columns.clients and row.client_name not in columns.clients:
            return False
        if columns.jobs and row.job_title not in columns.jobs:
            return False
        if columns.recruiters and not set(row.recruiters) & set(columns.recruiters):
            return False
        if columns.totals and row.total not in columns.totals:
            return False
        return True

    def _paginate(self, rows: list[ReportRow], filters: ReportFilters) -> ReportPage:
        """Slice one page; totals cover every filtered row."""
        keys = column_keys(self.columns)
        totals = {key: sum(r.counts.get(key, 0) for r in rows) for key in keys}

        total_count = len(rows)
        total_pages = math.ceil(total_count / filters.limit) if total_count else 0
        skip = (filters.page - 1) * filters.limit

        self.logger.debug(
            f"Report page {filters.page}/{total_pages}: {total_count} rows, "
            f"{totals[TOTAL_COLUMN]} candidates"
        )
        return ReportPage(
            rows=rows[skip:skip + filters.limit],
            totals=totals,
            total_count=total_count,
            total_pages=total_pages,
            current_page=filters.page,
        )

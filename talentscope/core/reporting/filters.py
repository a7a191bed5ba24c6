"""
Report filters and date windows.

Reports have two independent date axes:
- the global range, which decides which jobs (client/job report) or uploads
  (daily lineup) are reported at all
- the local range, which optionally windows the Total column by upload date
  and/or the status columns by the date each status was reached

``DateWindowPolicy`` carries both so counting code never inspects raw flags.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.dataclasses import dataclass as pydantic_dataclass

from talentscope.data.models import Candidate
from talentscope.utils.config import get_settings
from talentscope.utils.constants import ALL_STATUSES, LocalFilterMode

from .timestamps import current_status_timestamp, resolve_status_timestamp, to_naive_utc


# =============================================================================
# Date Ranges
# =============================================================================


@pydantic_dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar-day range.

    Either side may be None for an open-ended range. Datetimes are compared
    as naive UTC.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def strip_time(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return to_naive_utc(v).date()
        if v == "":
            return None
        return v

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")

    @property
    def start_at(self) -> Optional[datetime]:
        return datetime.combine(self.start, time.min) if self.start else None

    @property
    def end_at(self) -> Optional[datetime]:
        return datetime.combine(self.end, time.max) if self.end else None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, value: Optional[datetime]) -> bool:
        """Check whether ``value`` falls inside the range; None never does."""
        if value is None:
            return False
        if not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        value = to_naive_utc(value)
        if self.start_at and value < self.start_at:
            return False
        if self.end_at and value > self.end_at:
            return False
        return True

    def mongo_filter(self) -> dict[str, datetime]:
        """Render the range as a MongoDB comparison document."""
        bounds: dict[str, datetime] = {}
        if self.start_at:
            bounds["$gte"] = self.start_at
        if self.end_at:
            bounds["$lte"] = self.end_at
        return bounds

    @classmethod
    def from_shortcut(cls, shortcut: str, today: Optional[date] = None) -> "DateRange":
        """
        Build a range from a header shortcut.

        ``T`` today, ``Y`` yesterday, ``W`` this week (Monday to today),
        ``L`` last week (Monday to Sunday).
        """
        today = today or datetime.now(timezone.utc).date()
        key = (shortcut or "").strip().upper()

        if key == "T":
            return cls(today, today)
        if key == "Y":
            yesterday = today - timedelta(days=1)
            return cls(yesterday, yesterday)
        if key == "W":
            return cls(today - timedelta(days=today.weekday()), today)
        if key == "L":
            this_monday = today - timedelta(days=today.weekday())
            return cls(this_monday - timedelta(days=7), this_monday - timedelta(days=1))

        raise ValueError(f"Unknown date shortcut: {shortcut!r}")

    @classmethod
    def parse(cls, start: Optional[str] = None, end: Optional[str] = None) -> Optional["DateRange"]:
        """Parse ISO date strings; returns None when both sides are empty."""

        def _parse(value: Optional[str]) -> Optional[date]:
            if not value or not value.strip():
                return None
            return date.fromisoformat(value.strip()[:10])

        start_date, end_date = _parse(start), _parse(end)
        if start_date is None and end_date is None:
            return None
        return cls(start_date, end_date)


# =============================================================================
# Window Policy
# =============================================================================


@dataclass(frozen=True)
class DateWindowPolicy:
    """Global and local date windows for one report request."""

    global_range: Optional[DateRange] = None
    local_mode: LocalFilterMode = LocalFilterMode.NONE
    local_range: Optional[DateRange] = None

    @property
    def windows_total(self) -> bool:
        return self.local_range is not None and self.local_mode in (
            LocalFilterMode.TOTAL,
            LocalFilterMode.BOTH,
        )

    @property
    def windows_status(self) -> bool:
        return self.local_range is not None and self.local_mode in (
            LocalFilterMode.STATUS,
            LocalFilterMode.BOTH,
        )

    def in_global(self, value: Optional[datetime]) -> bool:
        """Open global ranges admit everything, including missing dates."""
        if self.global_range is None or self.global_range.is_open:
            return True
        return self.global_range.contains(value)

    def counts_in_total(self, candidate: Candidate) -> bool:
        if not self.windows_total:
            return True
        return self.local_range.contains(candidate.created_at)

    def counts_in_status(self, candidate: Candidate, statuses: Optional[Iterable[str]] = None) -> bool:
        """
        Whether the status date falls in the local range.

        ``statuses`` dates the candidate by the latest of those spellings;
        without it the candidate is dated by its current status.
        """
        if not self.windows_status:
            return True
        if statuses is None:
            reached = current_status_timestamp(candidate)
        else:
            reached = resolve_status_timestamp(candidate, statuses, candidate.created_at)
        return self.local_range.contains(reached)


# =============================================================================
# Request Filters
# =============================================================================


class ColumnFilters(BaseModel):
    """Exact-value header filters; an empty list disables a filter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    dates: list[str] = Field(default_factory=list)
    clients: list[str] = Field(default_factory=list)
    jobs: list[str] = Field(default_factory=list)
    recruiters: list[str] = Field(default_factory=list)
    totals: list[int] = Field(default_factory=list)

    @property
    def active(self) -> bool:
        return any((self.dates, self.clients, self.jobs, self.recruiters, self.totals))


def _default_limit() -> int:
    return get_settings().reports.default_page_size


class ReportFilters(BaseModel):
    """
    Caller-supplied report parameters.

    Accepts both snake_case names and the camelCase names the tracker's
    report screens send.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=_default_limit, ge=1)

    search: str = ""
    # Job status; None means the report's default, "all" disables it
    status_filter: Optional[str] = None
    client_filter: str = ""
    job_title_filter: str = ""
    recruiter_filter: str = ""

    date_range: Optional[DateRange] = None
    local_mode: LocalFilterMode = Field(
        default=LocalFilterMode.NONE,
        validation_alias=AliasChoices("local_mode", "localMode", "localCandidateFilterMode"),
    )
    local_range: Optional[DateRange] = Field(
        default=None,
        validation_alias=AliasChoices("local_range", "localRange", "localCandidateDateRange"),
    )

    columns: ColumnFilters = Field(default_factory=ColumnFilters)

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        return min(v, get_settings().reports.max_page_size)

    @field_validator("search", "client_filter", "job_title_filter", "recruiter_filter", mode="before")
    @classmethod
    def blank_text(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("status_filter", mode="before")
    @classmethod
    def blank_status(cls, v: Any) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("local_mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        if v is None or v == "":
            return LocalFilterMode.NONE
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def effective_status(self, default: Optional[str]) -> Optional[str]:
        """Job status to filter on, or None for every status."""
        status = self.status_filter if self.status_filter is not None else default
        if status is None or status.lower() == ALL_STATUSES:
            return None
        return status

    def window_policy(self) -> DateWindowPolicy:
        return DateWindowPolicy(
            global_range=self.date_range,
            local_mode=LocalFilterMode(self.local_mode),
            local_range=self.local_range,
        )

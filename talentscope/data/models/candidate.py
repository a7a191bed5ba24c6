"""
Candidate data models for TalentScope.

A candidate is one upload against one job. ``statusHistory`` is the
append-only event log and the source of truth for when a status was reached.
"""

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pydantic import Field, ValidationError, field_validator

from talentscope.utils.constants import CandidateStatus
from talentscope.utils.logger import get_logger

from .base import BaseDocument, EmbeddedModel, PyObjectId

logger = get_logger(__name__)

# Name keys seen in job-defined candidate forms, in lookup order
NAME_FIELD_KEYS = ("candidateName", "CandidateName", "name", "Name")


class HistoryEntry(EmbeddedModel):
    """
    Common tolerance for log entries written by several app versions.

    Actor references and dates that cannot be parsed load as unknown, and a
    stored ``null`` text field loads as empty.
    """

    updated_by: Optional[PyObjectId] = None
    timestamp: Optional[datetime] = None

    @field_validator("updated_by", mode="before")
    @classmethod
    def tolerate_bad_actor(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return v
        if isinstance(v, str) and PyObjectId.is_valid(v):
            return v
        return None

    @field_validator("timestamp", mode="wrap")
    @classmethod
    def tolerate_bad_timestamp(cls, v: Any, handler: Any) -> Optional[datetime]:
        try:
            return handler(v)
        except ValidationError:
            return None


class StatusHistoryEntry(HistoryEntry):
    """One status transition."""

    status: str = Field(min_length=1)
    comment: str = ""
    joining_date: Optional[datetime] = None

    @field_validator("comment", mode="before")
    @classmethod
    def null_comment(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("joining_date", mode="wrap")
    @classmethod
    def tolerate_bad_joining_date(cls, v: Any, handler: Any) -> Optional[datetime]:
        try:
            return handler(v)
        except ValidationError:
            return None


class InterviewStageEntry(HistoryEntry):
    """Outcome of one interview stage."""

    stage_name: str = Field(min_length=1)
    status: str = Field(min_length=1)
    notes: str = ""

    @field_validator("notes", mode="before")
    @classmethod
    def null_notes(cls, v: Any) -> Any:
        return "" if v is None else v


def _clean_history(value: Any, entry_class: type[HistoryEntry]) -> list[HistoryEntry]:
    """
    Validate log entries one at a time.

    An entry that still fails (no status, a non-text status, not a mapping)
    is dropped on its own so the candidate keeps the rest of its history.
    """
    if not isinstance(value, (list, tuple)):
        return []
    cleaned = []
    for entry in value:
        if isinstance(entry, entry_class):
            cleaned.append(entry)
            continue
        try:
            cleaned.append(entry_class.model_validate(entry))
        except ValidationError as e:
            logger.debug(f"Dropping unusable {entry_class.__name__}: {e.error_count()} error(s)")
    return cleaned


class Candidate(BaseDocument):
    """
    Main candidate model.

    Loaded read-only from the tracker's candidates collection. Loading never
    fails on legacy or malformed history; see ``status_matches_history`` for
    the consistency signal.
    """

    job_id: Optional[PyObjectId] = None
    created_by: Optional[PyObjectId] = None

    status: str = CandidateStatus.NEW.value
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)

    interview_stage: Optional[str] = None
    interview_stage_history: list[InterviewStageEntry] = Field(default_factory=list)

    joining_date: Optional[datetime] = None
    selection_date: Optional[datetime] = None

    # Explicit attribution, absent on records older than the field
    rejected_by: Optional[str] = None
    dropped_by: Optional[str] = None

    # Job-defined form values; key casing is inconsistent across records
    dynamic_fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> str:
        if not v:
            return CandidateStatus.NEW.value
        return str(v)

    @field_validator("status_history", mode="before")
    @classmethod
    def clean_status_history(cls, v: Any) -> list:
        return _clean_history(v, StatusHistoryEntry)

    @field_validator("interview_stage_history", mode="before")
    @classmethod
    def clean_stage_history(cls, v: Any) -> list:
        return _clean_history(v, InterviewStageEntry)

    @field_validator("joining_date", "selection_date", mode="wrap")
    @classmethod
    def tolerate_bad_dates(cls, v: Any, handler: Any) -> Optional[datetime]:
        try:
            return handler(v)
        except ValidationError:
            return None

    @field_validator("dynamic_fields", mode="before")
    @classmethod
    def default_dynamic_fields(cls, v: Any) -> dict:
        return v if isinstance(v, dict) else {}

    @field_validator("rejected_by", "dropped_by", mode="before")
    @classmethod
    def blank_attribution(cls, v: Any) -> Optional[str]:
        """Empty strings mean the field was never set."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def history_statuses(self) -> set[str]:
        """Every status this candidate has ever been moved to."""
        return {entry.status for entry in self.status_history}

    @property
    def status_matches_history(self) -> bool:
        """
        Whether ``status`` equals the last appended history entry.

        Candidates without history are considered consistent.
        """
        if not self.status_history:
            return True
        return self.status_history[-1].status == self.status

    def dynamic_field(self, *keys: str) -> Any:
        """
        Look up a form value by any of ``keys``.

        Exact keys are tried first, then a case-insensitive match, because
        forms have written both ``candidateName`` and ``CandidateName``.
        """
        for key in keys:
            if key in self.dynamic_fields:
                return self.dynamic_fields[key]
        lowered = {str(k).lower(): v for k, v in self.dynamic_fields.items()}
        for key in keys:
            if key.lower() in lowered:
                return lowered[key.lower()]
        return None

    @property
    def display_name(self) -> Optional[str]:
        """Best-effort candidate name from the job-defined form."""
        value = self.dynamic_field(*NAME_FIELD_KEYS)
        if value:
            return str(value)
        for key, value in self.dynamic_fields.items():
            if "name" in str(key).lower() and value:
                return str(value)
        return None

    class Settings:
        """MongoDB collection settings."""

        name = "candidatebyjobs"
        indexes = [
            "jobId",
            "createdBy",
            "status",
            "createdAt",
        ]

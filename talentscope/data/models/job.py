"""
Job requirement data models for TalentScope.

Only the fields the visibility and reporting engine reads are modelled;
everything else stored on a job is ignored at load time.
"""

from typing import Optional

from pydantic import Field, field_validator

from talentscope.utils.constants import JobStatus

from .base import BaseDocument, PyObjectId


class Job(BaseDocument):
    """
    A client requirement that candidates are uploaded against.

    Stored by the tracker with a capitalised ``CreatedBy`` field.
    """

    title: str = ""
    department: Optional[str] = None
    status: str = JobStatus.OPEN.value

    client_id: Optional[PyObjectId] = None
    assigned_recruiters: list[PyObjectId] = Field(default_factory=list)
    lead_recruiter: Optional[PyObjectId] = None
    no_of_positions: Optional[int] = None

    created_by: Optional[PyObjectId] = Field(default=None, alias="CreatedBy")

    @field_validator("assigned_recruiters", mode="before")
    @classmethod
    def drop_empty_assignments(cls, v):
        """Null or missing assignment lists load as empty."""
        if v is None:
            return []
        return [item for item in v if item]

    @field_validator("no_of_positions", mode="before")
    @classmethod
    def parse_positions(cls, v):
        """Positions are sometimes stored as strings by the job form."""
        if v in (None, ""):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    def is_assigned_to(self, user_id) -> bool:
        """Check whether the user leads or is assigned to this job."""
        if user_id is None:
            return False
        return self.lead_recruiter == user_id or user_id in self.assigned_recruiters

    class Settings:
        """MongoDB collection settings."""

        name = "jobs"
        indexes = [
            "status",
            "CreatedBy",
            "assignedRecruiters",
            "leadRecruiter",
            "createdAt",
        ]

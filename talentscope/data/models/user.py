"""
User data model for TalentScope.

Users form the reporting tree through the ``reporter`` back-reference.
"""

from typing import Optional

from pydantic import field_validator

from talentscope.utils.constants import Designation

from .base import BaseDocument, PyObjectId


class User(BaseDocument):
    """A member of the recruitment organization."""

    name: str = ""
    email: Optional[str] = None

    # Kept as a plain string: unknown designations must still load
    designation: str = Designation.RECRUITER.value
    reporter: Optional[PyObjectId] = None
    is_admin: bool = False

    department: Optional[str] = None

    @field_validator("designation", mode="before")
    @classmethod
    def default_designation(cls, v: Optional[str]) -> str:
        """Treat a missing designation as the least privileged role."""
        if v is None:
            return Designation.RECRUITER.value
        return str(v)

    @property
    def is_uploader(self) -> bool:
        """Whether this user appears as a row owner in the lineup report."""
        return "recruiter" in self.designation.lower() or self.is_admin

    class Settings:
        """MongoDB collection settings."""

        name = "users"
        indexes = [
            "reporter",
            "designation",
        ]


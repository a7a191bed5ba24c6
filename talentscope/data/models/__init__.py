"""
Pydantic data models for TalentScope.

Read-only views of the tracker's users, jobs, clients and candidates.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin

# Entity models
from .candidate import Candidate, HistoryEntry, InterviewStageEntry, StatusHistoryEntry
from .client import Client
from .job import Job
from .user import User

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    # Candidate
    "Candidate",
    "HistoryEntry",
    "InterviewStageEntry",
    "StatusHistoryEntry",
    # Client
    "Client",
    # Job
    "Job",
    # User
    "User",
]

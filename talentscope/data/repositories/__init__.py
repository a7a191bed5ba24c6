"""
Database repositories for TalentScope data access.

This module provides read-only repository classes for the tracker's
collections, implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import CandidateRepository, get_candidate_repository
from .client_repository import ClientRepository, get_client_repository
from .job_repository import JobRepository, get_job_repository
from .user_repository import UserRepository, get_user_repository

__all__ = [
    # Base
    "BaseRepository",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # Client
    "ClientRepository",
    "get_client_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # User
    "UserRepository",
    "get_user_repository",
]

"""
Shared test fixtures for the TalentScope test suite.

Sets environment variables before any talentscope imports to prevent config
failures, then provides a small organization, a two-month pipeline snapshot,
and in-memory repositories so the report service runs without MongoDB.
"""

import os
import tempfile

# === Set environment BEFORE any talentscope imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "talentscope_test")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")
os.environ.setdefault("LOG_FILE_PATH", os.path.join(tempfile.gettempdir(), "talentscope-tests", "talentscope.log"))

from datetime import datetime
from typing import Any, Iterable, Optional

import pytest
from bson import ObjectId

from talentscope.core.reporting import ReportAggregator, ReportService
from talentscope.core.visibility import OrgHierarchyResolver
from talentscope.data.models import Candidate, Client, Job, User


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

# name -> (designation, reporter name, is_admin)
ORG_CHART = {
    "meera": ("Manager", None, False),
    "arun": ("Mentor", "meera", False),
    "bela": ("Mentor", "meera", False),
    "ravi": ("Recruiter", "arun", False),
    "rita": ("Recruiter", "arun", False),
    "rohan": ("Recruiter", "bela", False),
    # Three hops below the manager; never visible to her
    "dev": ("Recruiter", "ravi", False),
    # Reports straight to the manager, skipping a mentor
    "dina": ("Recruiter", "meera", False),
    "ada": ("Admin", None, True),
    "farah": ("Finance", "meera", False),
}


@pytest.fixture
def ids() -> dict[str, ObjectId]:
    """Stable ObjectIds for every named user, job, client and candidate."""
    names = list(ORG_CHART) + [
        "acme", "globex",
        "j1", "j2", "j3",
        "c1", "c2", "c3", "c4", "c5", "c6", "c7",
    ]
    return {name: ObjectId() for name in names}


@pytest.fixture
def users(ids) -> list[User]:
    return [
        User.model_validate(
            {
                "_id": ids[name],
                "name": name.title(),
                "email": f"{name}@example.com",
                "designation": designation,
                "reporter": ids[reporter] if reporter else None,
                "isAdmin": is_admin,
                "createdAt": datetime(2023, 6, 1),
            }
        )
        for name, (designation, reporter, is_admin) in ORG_CHART.items()
    ]


@pytest.fixture
def resolver(users) -> OrgHierarchyResolver:
    return OrgHierarchyResolver(users)


# ---------------------------------------------------------------------------
# Pipeline snapshot
# ---------------------------------------------------------------------------


@pytest.fixture
def clients(ids) -> list[Client]:
    return [
        Client.model_validate({"_id": ids["acme"], "companyName": "Acme Corp"}),
        Client.model_validate({"_id": ids["globex"], "companyName": "Globex"}),
    ]


@pytest.fixture
def jobs(ids) -> list[Job]:
    """Two open jobs and one closed job created across January and February."""
    return [
        Job.model_validate(
            {
                "_id": ids["j1"],
                "title": "Backend Engineer",
                "department": "Engineering",
                "status": "Open",
                "clientId": ids["acme"],
                "assignedRecruiters": [ids["ravi"]],
                "noOfPositions": 2,
                "CreatedBy": ids["meera"],
                "createdAt": datetime(2024, 1, 10, 9, 0),
            }
        ),
        Job.model_validate(
            {
                "_id": ids["j2"],
                "title": "Data Analyst",
                "department": "Analytics",
                "status": "Open",
                "clientId": ids["globex"],
                "assignedRecruiters": [ids["ravi"], ids["rita"]],
                "leadRecruiter": ids["arun"],
                "noOfPositions": "3",
                "CreatedBy": ids["arun"],
                "createdAt": datetime(2024, 2, 5, 10, 0),
            }
        ),
        Job.model_validate(
            {
                "_id": ids["j3"],
                "title": "QA Lead",
                "department": "Quality",
                "status": "Closed",
                "clientId": ids["acme"],
                "assignedRecruiters": [ids["rohan"]],
                "noOfPositions": 1,
                "CreatedBy": ids["bela"],
                "createdAt": datetime(2024, 2, 10, 11, 0),
            }
        ),
    ]


@pytest.fixture
def make_candidate(ids):
    """Factory that builds a Candidate from storage-shaped values."""

    def _factory(
        name: str = "Test Candidate",
        status: str = "New",
        history: Optional[list[tuple[str, datetime]]] = None,
        created_at: Optional[datetime] = datetime(2024, 2, 1),
        job: Optional[str] = "j1",
        uploader: Optional[str] = "ravi",
        candidate_id: Optional[ObjectId] = None,
        **extra: Any,
    ) -> Candidate:
        data = {
            "_id": candidate_id or ObjectId(),
            "jobId": ids[job] if job else None,
            "createdBy": ids[uploader] if uploader else None,
            "status": status,
            "statusHistory": [
                {"status": s, "timestamp": ts, "comment": ""} for s, ts in (history or [])
            ],
            "dynamicFields": {"candidateName": name},
            "createdAt": created_at,
        }
        data.update(extra)
        return Candidate.model_validate(data)

    return _factory


@pytest.fixture
def candidates(ids, make_candidate) -> list[Candidate]:
    """
    Seven candidates across the three jobs.

    j1: c1 (Jan, New), c2 (Feb, Shortlisted)                     by ravi
    j2: c3 (Feb, Interviewed) by ravi; c4 (Feb, Rejected after
        interview) and c5 (Mar, Joined) by rita; c7 (Feb, New)
        by rohan, who is outside arun's team
    j3: c6 (Feb, New)                                            by rohan
    """
    return [
        make_candidate(
            "Asha", "New",
            [("New", datetime(2024, 1, 12, 9))],
            created_at=datetime(2024, 1, 12, 9), job="j1", uploader="ravi",
            candidate_id=ids["c1"],
        ),
        make_candidate(
            "Bharat", "Shortlisted",
            [("New", datetime(2024, 2, 3, 9)), ("Shortlisted", datetime(2024, 2, 4, 9))],
            created_at=datetime(2024, 2, 3, 9), job="j1", uploader="ravi",
            candidate_id=ids["c2"],
        ),
        make_candidate(
            "Chitra", "Interviewed",
            [
                ("New", datetime(2024, 2, 6, 9)),
                ("Shortlisted", datetime(2024, 2, 7, 9)),
                ("Interviewed", datetime(2024, 2, 8, 9)),
            ],
            created_at=datetime(2024, 2, 6, 9), job="j2", uploader="ravi",
            candidate_id=ids["c3"],
        ),
        make_candidate(
            "Deepak", "Rejected",
            [
                ("New", datetime(2024, 2, 20, 9)),
                ("Shortlisted", datetime(2024, 2, 20, 12)),
                ("Interviewed", datetime(2024, 2, 21, 9)),
                ("Rejected", datetime(2024, 2, 22, 9)),
            ],
            created_at=datetime(2024, 2, 20, 9), job="j2", uploader="rita",
            candidate_id=ids["c4"],
        ),
        make_candidate(
            "Esha", "Joined",
            [
                ("New", datetime(2024, 3, 2, 9)),
                ("Selected", datetime(2024, 3, 10, 9)),
                ("Joined", datetime(2024, 3, 18, 9)),
            ],
            created_at=datetime(2024, 3, 2, 9), job="j2", uploader="rita",
            candidate_id=ids["c5"],
            joiningDate=datetime(2024, 3, 20),
        ),
        make_candidate(
            "Farid", "New",
            [("New", datetime(2024, 2, 11, 9))],
            created_at=datetime(2024, 2, 11, 9), job="j3", uploader="rohan",
            candidate_id=ids["c6"],
        ),
        make_candidate(
            "Gauri", "New",
            [("New", datetime(2024, 2, 12, 9))],
            created_at=datetime(2024, 2, 12, 9), job="j2", uploader="rohan",
            candidate_id=ids["c7"],
        ),
    ]


@pytest.fixture
def aggregator() -> ReportAggregator:
    return ReportAggregator(date_format="%d-%b-%y")


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class FakeUserRepository:
    def __init__(self, users: list[User]):
        self.users = users

    def get_directory(self) -> list[User]:
        return list(self.users)


class FakeJobRepository:
    def __init__(self, jobs: list[Job]):
        self.jobs = jobs
        self.report_queries: list[dict] = []

    def get_assigned_to(self, user_id) -> list[Job]:
        return [j for j in self.jobs if j.is_assigned_to(user_id)]

    def get_for_report(self, scope_query, extra_job_ids=(), actor_id=None) -> list[Job]:
        self.report_queries.append(scope_query)
        return list(self.jobs)

    def get_many(self, ids: Iterable) -> list[Job]:
        wanted = set(ids)
        return [j for j in self.jobs if j.id in wanted]


class FakeClientRepository:
    def __init__(self, clients: list[Client]):
        self.clients = clients

    def get_for_jobs(self, client_ids: Iterable) -> list[Client]:
        wanted = set(client_ids)
        return [c for c in self.clients if c.id in wanted]


class FakeCandidateRepository:
    def __init__(self, candidates: list[Candidate]):
        self.candidates = candidates
        self.queries: list[dict] = []

    def get_visible(self, scope_query) -> list[Candidate]:
        self.queries.append(scope_query)
        return list(self.candidates)


@pytest.fixture
def report_service(users, jobs, clients, candidates) -> ReportService:
    """ReportService backed by the in-memory snapshot."""
    return ReportService(
        user_repository=FakeUserRepository(users),
        job_repository=FakeJobRepository(jobs),
        client_repository=FakeClientRepository(clients),
        candidate_repository=FakeCandidateRepository(candidates),
        aggregator=ReportAggregator(date_format="%d-%b-%y"),
    )

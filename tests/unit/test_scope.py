"""
Tests for talentscope.core.visibility.scope: candidate and job visibility.
"""

import dataclasses

import pytest
from bson import ObjectId

from talentscope.core.visibility import VisibilityScope


def _visible_ids(scope, candidates):
    return {c.id for c in scope.filter_candidates(candidates)}


class TestCandidateVisibility:
    def test_recruiter_sees_own_uploads_only(self, resolver, ids, jobs, candidates):
        # ravi is assigned to j1 and j2, which must not widen his view
        scope = VisibilityScope.build(ids["ravi"], "Recruiter", resolver, jobs)
        assert scope.assigned_job_ids == frozenset()
        assert _visible_ids(scope, candidates) == {ids["c1"], ids["c2"], ids["c3"]}

    def test_mentor_gets_assignment_grant(self, resolver, ids, jobs, candidates):
        scope = VisibilityScope.build(ids["arun"], "Mentor", resolver, jobs)
        assert scope.assigned_job_ids == frozenset({ids["j2"]})
        # c7 was uploaded by rohan (bela's team) against arun's job
        assert _visible_ids(scope, candidates) == {
            ids["c1"], ids["c2"], ids["c3"], ids["c4"], ids["c5"], ids["c7"],
        }

    def test_mentor_without_assignments(self, resolver, ids, jobs, candidates):
        scope = VisibilityScope.build(ids["bela"], "Mentor", resolver, jobs)
        assert _visible_ids(scope, candidates) == {ids["c6"], ids["c7"]}

    def test_manager_sees_whole_team(self, resolver, ids, jobs, candidates):
        scope = VisibilityScope.build(ids["meera"], "Manager", resolver, jobs)
        assert _visible_ids(scope, candidates) == {c.id for c in candidates}

    def test_finance_gets_no_assignment_grant(self, resolver, ids, jobs, make_candidate):
        job = jobs[0].model_copy(update={"assigned_recruiters": [ids["farah"]]})
        scope = VisibilityScope.build(ids["farah"], "Finance", resolver, [job])
        assert scope.assigned_job_ids == frozenset()
        assert not scope.allows_candidate(make_candidate(job="j1", uploader="ravi"))

    def test_admin_bypasses_scope(self, resolver, ids, jobs, make_candidate):
        scope = VisibilityScope.build(ids["ada"], "Admin", resolver, jobs)
        assert scope.unrestricted
        orphan = make_candidate(job=None, uploader=None)
        assert scope.allows_candidate(orphan)

    def test_unknown_admin_fails_closed(self, resolver, jobs, candidates):
        stranger = ObjectId()
        scope = VisibilityScope.build(stranger, "Admin", resolver, jobs)
        assert not scope.unrestricted
        assert scope.filter_candidates(candidates) == []

    def test_candidate_without_uploader_or_job(self, resolver, ids, jobs, make_candidate):
        scope = VisibilityScope.build(ids["arun"], "Mentor", resolver, jobs)
        assert not scope.allows_candidate(make_candidate(job=None, uploader=None))


class TestJobVisibility:
    def test_job_visible_by_creator(self, resolver, ids, jobs):
        scope = VisibilityScope.build(ids["arun"], "Mentor", resolver, jobs)
        assert {j.id for j in scope.filter_jobs(jobs)} == {ids["j2"]}

    def test_manager_jobs(self, resolver, ids, jobs):
        scope = VisibilityScope.build(ids["meera"], "Manager", resolver, jobs)
        assert {j.id for j in scope.filter_jobs(jobs)} == {ids["j1"], ids["j2"], ids["j3"]}

    def test_recruiter_sees_no_jobs_they_did_not_create(self, resolver, ids, jobs):
        scope = VisibilityScope.build(ids["ravi"], "Recruiter", resolver, jobs)
        assert scope.filter_jobs(jobs) == []


class TestMongoQueries:
    def test_admin_queries_are_empty(self, resolver, ids, jobs):
        scope = VisibilityScope.build(ids["ada"], "Admin", resolver, jobs)
        assert scope.candidate_query() == {}
        assert scope.job_query() == {}

    def test_recruiter_candidate_query(self, resolver, ids):
        scope = VisibilityScope.build(ids["ravi"], "Recruiter", resolver)
        assert scope.candidate_query() == {"createdBy": {"$in": [ids["ravi"]]}}

    def test_mentor_candidate_query_includes_assigned_jobs(self, resolver, ids, jobs):
        scope = VisibilityScope.build(ids["arun"], "Mentor", resolver, jobs)
        query = scope.candidate_query()
        assert set(query["$or"][0]["createdBy"]["$in"]) == {ids["arun"], ids["ravi"], ids["rita"]}
        assert query["$or"][1] == {"jobId": {"$in": [ids["j2"]]}}

    def test_job_query(self, resolver, ids):
        scope = VisibilityScope.build(ids["arun"], "Mentor", resolver)
        assert set(scope.job_query()["CreatedBy"]["$in"]) == {ids["arun"], ids["ravi"], ids["rita"]}


class TestImmutability:
    def test_scope_is_frozen(self, resolver, ids):
        scope = VisibilityScope.build(ids["ravi"], "Recruiter", resolver)
        with pytest.raises(dataclasses.FrozenInstanceError):
            scope.unrestricted = True

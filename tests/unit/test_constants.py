"""
Tests for talentscope.utils.constants: enums and status spellings.
"""

from talentscope.utils.constants import (
    ASSIGNMENT_GRANT_DESIGNATIONS,
    STATUS_ALIASES,
    AttributionParty,
    CandidateStatus,
    Designation,
    LocalFilterMode,
)


class TestStatusAliases:
    def test_every_status_has_aliases(self):
        assert set(STATUS_ALIASES) == {s.value for s in CandidateStatus}

    def test_canonical_spelling_listed_first(self):
        for canonical, spellings in STATUS_ALIASES.items():
            assert spellings[0] == canonical

    def test_spellings_are_unique(self):
        spellings = [s for group in STATUS_ALIASES.values() for s in group]
        assert len(spellings) == len(set(spellings))


class TestEnums:
    def test_designations(self):
        assert {d.value for d in Designation} == {"Recruiter", "Mentor", "Manager", "Admin", "Finance"}

    def test_assignment_grant(self):
        assert ASSIGNMENT_GRANT_DESIGNATIONS == {"Mentor", "Manager"}

    def test_parties(self):
        assert AttributionParty("Client") is AttributionParty.CLIENT
        assert AttributionParty("Mentor") is AttributionParty.MENTOR

    def test_local_modes(self):
        assert [m.value for m in LocalFilterMode] == ["none", "total", "status", "both"]

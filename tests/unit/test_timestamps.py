"""
Tests for talentscope.core.reporting.timestamps: status timestamp resolution.
"""

from datetime import datetime, timedelta, timezone

from talentscope.core.reporting.timestamps import (
    current_status_timestamp,
    resolve_status_timestamp,
    to_naive_utc,
)


class TestDedicatedFields:
    def test_joining_date_wins_over_history(self, make_candidate):
        c = make_candidate(
            status="Joined",
            history=[("Joined", datetime(2024, 2, 20))],
            joiningDate="2024-03-01T00:00:00",
        )
        assert resolve_status_timestamp(c, "Joined") == datetime(2024, 3, 1)

    def test_joining_date_used_when_joined_in_target_list(self, make_candidate):
        c = make_candidate(status="Joined", joiningDate=datetime(2024, 3, 1))
        assert resolve_status_timestamp(c, ["Hired", "Joined"]) == datetime(2024, 3, 1)

    def test_joining_date_ignored_for_other_targets(self, make_candidate):
        c = make_candidate(
            history=[("Selected", datetime(2024, 2, 1))],
            joiningDate=datetime(2024, 3, 1),
        )
        assert resolve_status_timestamp(c, "Selected") == datetime(2024, 2, 1)

    def test_selection_date_wins_over_history(self, make_candidate):
        c = make_candidate(
            status="Selected",
            history=[("Selected", datetime(2024, 2, 1))],
            selectionDate=datetime(2024, 2, 5),
        )
        assert resolve_status_timestamp(c, {"Selected", "Offer"}) == datetime(2024, 2, 5)


class TestHistory:
    def test_latest_matching_entry(self, make_candidate):
        c = make_candidate(
            history=[
                ("Shortlisted", datetime(2024, 1, 5)),
                ("Hold", datetime(2024, 1, 6)),
                ("Shortlisted", datetime(2024, 1, 9)),
                ("New", datetime(2024, 1, 10)),
            ]
        )
        assert resolve_status_timestamp(c, "Shortlisted") == datetime(2024, 1, 9)

    def test_any_target_matches(self, make_candidate):
        c = make_candidate(
            history=[("Interview", datetime(2024, 1, 5)), ("Interviewed", datetime(2024, 1, 3))]
        )
        assert resolve_status_timestamp(c, ("Interviewed", "Interview")) == datetime(2024, 1, 5)

    def test_entries_without_timestamp_are_skipped(self, make_candidate):
        c = make_candidate(
            created_at=datetime(2024, 1, 1),
            statusHistory=[{"status": "Hold"}, {"status": "Hold", "timestamp": "not a date"}],
        )
        assert resolve_status_timestamp(c, "Hold") == datetime(2024, 1, 1)


class TestFallbacks:
    def test_fallback_before_created_at(self, make_candidate):
        c = make_candidate(created_at=datetime(2024, 1, 1))
        fallback = datetime(2024, 1, 15)
        assert resolve_status_timestamp(c, "Hold", fallback) == fallback

    def test_created_at_when_no_match(self, make_candidate):
        c = make_candidate(history=[("New", datetime(2024, 1, 2))], created_at=datetime(2024, 1, 1))
        assert resolve_status_timestamp(c, "Hold") == datetime(2024, 1, 1)

    def test_none_when_nothing_known(self, make_candidate):
        c = make_candidate(created_at=None)
        assert resolve_status_timestamp(c, "Hold") is None

    def test_missing_history_does_not_raise(self, make_candidate):
        c = make_candidate(created_at=datetime(2024, 1, 1), statusHistory=None)
        assert resolve_status_timestamp(c, "Joined") == datetime(2024, 1, 1)


class TestCurrentStatusTimestamp:
    def test_joined_prefers_joining_date(self, make_candidate):
        c = make_candidate(
            status="Joined", history=[("Joined", datetime(2024, 3, 18))], joiningDate=datetime(2024, 3, 20)
        )
        assert current_status_timestamp(c) == datetime(2024, 3, 20)

    def test_offer_reads_selection_date(self, make_candidate):
        c = make_candidate(status="Offer", selectionDate=datetime(2024, 2, 5))
        assert current_status_timestamp(c) == datetime(2024, 2, 5)

    def test_offer_ignores_offer_history(self, make_candidate):
        c = make_candidate(status="Offer", history=[("Offer", datetime(2024, 2, 9))], created_at=datetime(2024, 2, 1))
        assert current_status_timestamp(c) == datetime(2024, 2, 1)

    def test_hired_uses_own_history_not_joining_date(self, make_candidate):
        c = make_candidate(
            status="Hired",
            history=[("Hired", datetime(2024, 2, 14))],
            joiningDate=datetime(2024, 3, 20),
        )
        assert current_status_timestamp(c) == datetime(2024, 2, 14)

    def test_falls_back_to_upload_date(self, make_candidate):
        c = make_candidate(status="Hold", created_at=datetime(2024, 1, 3))
        assert current_status_timestamp(c) == datetime(2024, 1, 3)


class TestToNaiveUtc:
    def test_naive_passthrough(self):
        value = datetime(2024, 1, 1, 12)
        assert to_naive_utc(value) is value

    def test_aware_converted(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        value = datetime(2024, 1, 1, 3, 0, tzinfo=ist)
        assert to_naive_utc(value) == datetime(2023, 12, 31, 21, 30)

    def test_none(self):
        assert to_naive_utc(None) is None

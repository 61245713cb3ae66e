"""
Unit tests for deadline adherence, time to offer and response rate.
"""

import pytest

from job_analytics.features.outcomes import compute_deadline_adherence, compute_response_rate, compute_time_to_offer
from job_analytics.models.schema import DeadlineStats


class TestDeadlineAdherence:
    """Test deadline met/missed classification."""

    def test_created_after_deadline_is_missed(self, record_factory):
        """Test a single late record gives zero adherence."""
        records = [record_factory(1, created="2026-03-10", deadline="2026-03-01")]

        assert compute_deadline_adherence(records) == DeadlineStats(met=0, missed=1, adherence=0.0)

    def test_created_on_deadline_is_met(self, record_factory):
        """Test the deadline instant itself counts as met."""
        records = [record_factory(1, created="2026-03-01", deadline="2026-03-01")]

        assert compute_deadline_adherence(records).met == 1

    def test_only_deadline_bearing_records_count(self, record_factory):
        """Test met + missed equals the number of records with a deadline."""
        records = [
            record_factory(1, created="2026-03-01", deadline="2026-03-05"),
            record_factory(2, created="2026-03-09", deadline="2026-03-05"),
            record_factory(3, created="2026-03-01", deadline=None),
            record_factory(4, created=None, deadline="2026-03-05"),
            record_factory(5, created="2026-02-01", deadline="2026-03-05"),
        ]

        stats = compute_deadline_adherence(records)

        assert stats.met + stats.missed == 4
        assert stats.met == 2
        assert stats.adherence == 0.5

    def test_no_deadlines(self, record_factory):
        """Test adherence is zero when no record has a deadline."""
        assert compute_deadline_adherence([record_factory(1)]) == DeadlineStats(met=0, missed=0, adherence=0.0)


class TestTimeToOffer:
    """Test average days from creation to offer."""

    def test_average_over_offers_with_change_date(self, record_factory):
        """Test only offers with a recorded status change are averaged."""
        records = [
            record_factory(1, status="Offer", created="2026-09-01", changed="2026-09-11"),
            record_factory(2, status="offer", created="2026-09-01", changed="2026-09-21"),
            record_factory(3, status="Offer", created="2026-09-01", changed=None),
            record_factory(4, status="Interview", created="2026-09-01", changed="2026-12-01"),
        ]

        assert compute_time_to_offer(records) == pytest.approx(15.0)

    def test_no_offers(self, record_factory):
        """Test zero when nothing reached the offer stage."""
        assert compute_time_to_offer([record_factory(1, status="Applied", changed="2026-10-05")]) == 0.0
        assert compute_time_to_offer([]) == 0.0


class TestResponseRate:
    """Test the share of records with any status change."""

    def test_fraction_with_status_change(self, record_factory):
        """Test responded records over all records."""
        records = [
            record_factory(1, changed="2026-10-02"),
            record_factory(2, changed=None),
            record_factory(3, changed="2026-10-04"),
            record_factory(4, changed=None),
        ]

        assert compute_response_rate(records) == 0.5

    def test_empty_collection(self):
        """Test zero for no records."""
        assert compute_response_rate([]) == 0.0

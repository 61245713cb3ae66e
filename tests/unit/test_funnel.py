"""
Unit tests for the funnel aggregator.

Tests stage counts and the cumulative conversion metrics, including the
zero-denominator policy and read-only handling of input records.
"""

import pandas as pd
import pytest

from job_analytics.features.funnel import compute_conversion_metrics, compute_funnel_counts, safe_ratio
from job_analytics.models.schema import STAGE_ORDER, Stage


class TestFunnelCounts:
    """Test per-stage counts."""

    def test_scenario_a_counts(self, scenario_a_records):
        """Test the mixed collection buckets into every stage, unknown included."""
        funnel = compute_funnel_counts(scenario_a_records)

        assert funnel == {
            Stage.INTERESTED: 0,
            Stage.APPLIED: 4,
            Stage.PHONE_SCREEN: 2,
            Stage.INTERVIEW: 2,
            Stage.OFFER: 1,
            Stage.REJECTED: 0,
            Stage.UNKNOWN: 1,
        }

    def test_counts_sum_to_record_count(self, record_factory):
        """Test every record lands in exactly one bucket."""
        records = [record_factory(i, status=s) for i, s in enumerate(["", None, "offer", "rejected", "??", "Interested"])]

        funnel = compute_funnel_counts(records)

        assert sum(funnel.values()) == len(records)

    def test_canonical_stage_order(self, scenario_a_records):
        """Test stages are reported in pipeline order."""
        assert list(compute_funnel_counts(scenario_a_records)) == STAGE_ORDER

    def test_empty_collection(self):
        """Test empty input gives all-zero buckets."""
        funnel = compute_funnel_counts([])

        assert set(funnel) == set(Stage)
        assert all(count == 0 for count in funnel.values())

    def test_accepts_data_layer_column_names(self, scenario_a_frame):
        """Test snake_case frames from the data layer are normalized."""
        assert compute_funnel_counts(scenario_a_frame)[Stage.APPLIED] == 4

    def test_input_frame_not_mutated(self, scenario_a_frame):
        """Test the caller's DataFrame is left untouched."""
        before = scenario_a_frame.copy()

        compute_funnel_counts(scenario_a_frame)

        pd.testing.assert_frame_equal(scenario_a_frame, before)


class TestConversionMetrics:
    """Test cumulative reachability counts and ratios."""

    def test_scenario_a_metrics(self, scenario_a_records):
        """Test counts and ratios for the reference collection."""
        metrics = compute_conversion_metrics(scenario_a_records)

        assert metrics.applied == 9
        assert metrics.phone_screens == 5
        assert metrics.interviews == 3
        assert metrics.offers == 1
        assert metrics.applied_to_interview == pytest.approx(3 / 9)
        assert metrics.applied_to_phone == pytest.approx(5 / 9)
        assert metrics.phone_to_interview == pytest.approx(3 / 5)
        assert metrics.interview_to_offer == pytest.approx(1 / 3)

    def test_rejected_counts_as_applied(self, record_factory):
        """Test rejected applications still count toward the applied total."""
        records = [record_factory(1, status="Rejected"), record_factory(2, status="Interview")]

        metrics = compute_conversion_metrics(records)

        assert metrics.applied == 2
        assert metrics.applied_to_interview == 0.5

    def test_empty_collection_ratios_are_zero(self):
        """Test zero denominators give zero ratios."""
        metrics = compute_conversion_metrics([])

        assert metrics.applied == 0
        assert metrics.applied_to_phone == 0.0
        assert metrics.phone_to_interview == 0.0
        assert metrics.interview_to_offer == 0.0
        assert metrics.applied_to_interview == 0.0

    def test_only_interested_records(self, record_factory):
        """Test a funnel with nothing applied yet keeps ratios at zero."""
        metrics = compute_conversion_metrics([record_factory(1, status="Interested")])

        assert metrics.applied == 0
        assert metrics.applied_to_interview == 0.0

    @pytest.mark.parametrize(
        "statuses",
        [
            ["Offer"],
            ["Offer", "Offer", "Applied"],
            ["Interview", "Phone Screen", "Rejected", "junk"],
        ],
    )
    def test_ratios_within_unit_interval(self, record_factory, statuses):
        """Test every ratio stays within [0, 1]."""
        metrics = compute_conversion_metrics([record_factory(i, status=s) for i, s in enumerate(statuses)])

        for ratio in (
            metrics.applied_to_phone,
            metrics.phone_to_interview,
            metrics.interview_to_offer,
            metrics.applied_to_interview,
        ):
            assert 0.0 <= ratio <= 1.0


def test_safe_ratio():
    """Test guarded division."""
    assert safe_ratio(1, 4) == 0.25
    assert safe_ratio(3, 0) == 0.0

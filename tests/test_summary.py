"""Tests for campaign metrics aggregation."""

import pytest

from adscore.aggregation.summary import summarize_campaigns
from adscore.models.types import CampaignRecord


class TestEmptyInput:
    """Empty or absent input yields an all-zero summary."""

    @pytest.mark.parametrize("records", [[], None])
    def test_all_zero_summary(self, records):
        summary = summarize_campaigns(records)
        assert summary.total_campaigns == 0
        assert summary.avg_ctr == 0.0
        assert summary.avg_conversion_rate == 0.0
        assert summary.total_cost == 0.0
        assert summary.total_conversions == 0.0
        assert summary.best_performer is None
        assert summary.is_empty


class TestAverages:
    """Averages are unweighted arithmetic means."""

    def test_average_is_not_volume_weighted(self):
        """A tiny campaign counts as much as a huge one."""
        huge = CampaignRecord(name="huge", impressions=1_000_000, clicks=10_000)
        tiny = CampaignRecord(name="tiny", impressions=10, clicks=1)
        assert huge.ctr == pytest.approx(1.0)
        assert tiny.ctr == pytest.approx(10.0)

        summary = summarize_campaigns([huge, tiny])

        assert summary.avg_ctr == pytest.approx(5.5)
        weighted = (10_000 + 1) / (1_000_000 + 10) * 100
        assert summary.avg_ctr != pytest.approx(weighted)

    def test_averages_are_unrounded(self, make_record):
        records = [make_record(ctr=1.0), make_record(ctr=1.0), make_record(ctr=2.0)]
        summary = summarize_campaigns(records)
        assert summary.avg_ctr == pytest.approx(4.0 / 3)

    def test_average_conversion_rate(self, make_record):
        records = [make_record(conversion_rate=5.0), make_record(conversion_rate=1.0)]
        assert summarize_campaigns(records).avg_conversion_rate == pytest.approx(3.0)


class TestTotals:
    """Cost and conversions are plain sums."""

    def test_sums_cost_and_conversions(self, make_record):
        records = [
            make_record(cost=100.0, conversions=10),
            make_record(cost=50.5, conversions=2.5),
        ]
        summary = summarize_campaigns(records)
        assert summary.total_campaigns == 2
        assert summary.total_cost == pytest.approx(150.5)
        assert summary.total_conversions == pytest.approx(12.5)


class TestBestPerformer:
    """Best performer has the highest conversion rate."""

    def test_picks_highest_conversion_rate(self, make_record):
        records = [
            make_record(name="low", conversion_rate=1.0),
            make_record(name="high", conversion_rate=7.5),
            make_record(name="mid", conversion_rate=3.0),
        ]
        assert summarize_campaigns(records).best_performer.name == "high"

    def test_tie_keeps_first_in_input_order(self, make_record):
        records = [
            make_record(name="first", conversion_rate=4.0),
            make_record(name="second", conversion_rate=4.0),
        ]
        assert summarize_campaigns(records).best_performer.name == "first"

    def test_single_record_is_best(self, make_record):
        record = make_record(name="only", conversion_rate=0.0)
        assert summarize_campaigns([record]).best_performer is record

"""Campaign metrics aggregation.

Computes averages, totals and the best performer from campaign records.
Pure functions - no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

from adscore.models.domain import CampaignSummary
from adscore.models.types import CampaignRecord


def summarize_campaigns(records: Sequence[CampaignRecord] | None) -> CampaignSummary:
    """Compute summary statistics for a list of campaigns.

    Averages are unweighted: a campaign with 10 impressions counts as much
    as one with a million. No rounding is applied.

    Args:
        records: Campaign records, possibly empty or None.

    Returns:
        CampaignSummary. All-zero with no best performer for empty input.
    """
    if not records:
        return CampaignSummary(
            total_campaigns=0,
            avg_ctr=0.0,
            avg_conversion_rate=0.0,
            total_cost=0.0,
            total_conversions=0.0,
            best_performer=None,
        )

    count = len(records)

    return CampaignSummary(
        total_campaigns=count,
        avg_ctr=sum(_rate(r.ctr) for r in records) / count,
        avg_conversion_rate=sum(_rate(r.conversion_rate) for r in records) / count,
        total_cost=sum(r.cost for r in records),
        total_conversions=sum(r.conversions for r in records),
        best_performer=_find_best_performer(records),
    )


def _rate(value: float | None) -> float:
    return value if value is not None else 0.0


def _find_best_performer(records: Sequence[CampaignRecord]) -> CampaignRecord:
    """Return the record with the highest conversion rate.

    Scans in input order; only a strictly greater rate replaces the current
    best, so the first record wins ties.
    """
    best = records[0]
    for record in records[1:]:
        if _rate(record.conversion_rate) > _rate(best.conversion_rate):
            best = record
    return best

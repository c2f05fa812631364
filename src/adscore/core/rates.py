"""Rate derivations for campaign metrics.

All rates are percentages and unrounded. A zero denominator yields 0
(or None for cost per conversion) instead of raising.
"""

MICROS_PER_UNIT = 1_000_000


def compute_ctr(clicks: float, impressions: float) -> float:
    """Click-through rate: clicks / impressions * 100, or 0 without impressions."""
    if impressions > 0:
        return clicks / impressions * 100
    return 0.0


def compute_conversion_rate(conversions: float, clicks: float) -> float:
    """Conversion rate: conversions / clicks * 100, or 0 without clicks."""
    if clicks > 0:
        return conversions / clicks * 100
    return 0.0


def cost_per_conversion(total_cost: float, total_conversions: float) -> float | None:
    """Cost per acquisition.

    Returns:
        total_cost / total_conversions, or None when there are no conversions.
    """
    if total_conversions == 0:
        return None
    return total_cost / total_conversions


def micros_to_units(micros: int | None) -> float:
    """Convert Google Ads micros to currency units."""
    if not micros:
        return 0.0
    return micros / MICROS_PER_UNIT

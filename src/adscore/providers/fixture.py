"""Static demo campaigns.

Served in fixture mode and whenever the live API cannot be reached.
"""

from __future__ import annotations

from typing import Any

from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource

DEMO_CAMPAIGNS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "Brand Campaign 2024",
        "status": "ENABLED",
        "impressions": 45230,
        "clicks": 2105,
        "cost": 3421.50,
        "conversions": 89,
        "ctr": 4.65,
        "cpc": 1.63,
        "conversionRate": 4.23,
    },
    {
        "id": "2",
        "name": "Shopping - Electronics",
        "status": "ENABLED",
        "impressions": 38420,
        "clicks": 1523,
        "cost": 2843.20,
        "conversions": 67,
        "ctr": 3.96,
        "cpc": 1.87,
        "conversionRate": 4.40,
    },
    {
        "id": "3",
        "name": "Remarketing Campaign",
        "status": "ENABLED",
        "impressions": 28950,
        "clicks": 1205,
        "cost": 1987.30,
        "conversions": 54,
        "ctr": 4.16,
        "cpc": 1.65,
        "conversionRate": 4.48,
    },
)


def demo_campaigns() -> list[CampaignRecord]:
    """Fresh CampaignRecord instances for the demo data."""
    return [CampaignRecord.model_validate(data) for data in DEMO_CAMPAIGNS]


class FixtureDataSource(CampaignDataSource):
    """Data source returning the literal demo campaigns."""

    name = "fixture"

    def fetch_campaigns(self, tokens: dict[str, Any]) -> list[CampaignRecord]:
        return demo_campaigns()

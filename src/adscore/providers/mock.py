"""Mock data source for tests and the test deployment mode.

Returns caller-supplied campaigns, or raises UpstreamFetchError to
exercise the fallback path.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from adscore.core.errors import UpstreamFetchError
from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource

DEFAULT_MOCK_CAMPAIGNS: tuple[dict[str, Any], ...] = (
    {"id": "101", "name": "Test Search", "status": "ENABLED", "impressions": 10000,
     "clicks": 600, "cost": 900.0, "conversions": 30, "cpc": 1.5},
    {"id": "102", "name": "Test Display", "status": "PAUSED", "impressions": 50000,
     "clicks": 500, "cost": 400.0, "conversions": 10, "cpc": 0.8},
)


class MockDataSource(CampaignDataSource):
    """In-process data source with recorded calls.

    Attributes:
        calls: Token payloads passed to fetch_campaigns, in order.
    """

    name = "mock"

    def __init__(
        self,
        campaigns: Iterable[CampaignRecord | dict[str, Any]] | None = None,
        fail: bool = False,
    ):
        """Initialize mock data source.

        Args:
            campaigns: Records (or raw dicts) to return. Defaults to two test campaigns.
            fail: Raise UpstreamFetchError instead of returning data.
        """
        raw = DEFAULT_MOCK_CAMPAIGNS if campaigns is None else campaigns
        self.campaigns = [
            c if isinstance(c, CampaignRecord) else CampaignRecord.model_validate(c)
            for c in raw
        ]
        self.fail = fail
        self.calls: list[dict[str, Any]] = []

    def fetch_campaigns(self, tokens: dict[str, Any]) -> list[CampaignRecord]:
        self.calls.append(tokens)
        if self.fail:
            raise UpstreamFetchError("Mock data source configured to fail")
        return [c.model_copy() for c in self.campaigns]

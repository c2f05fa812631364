"""Base campaign data source interface.

- Data source adapter: narrow interface `fetch_campaigns(tokens) -> records`
- Forbidden: session handling, metric aggregation, scoring
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from adscore.models.types import CampaignRecord


class CampaignDataSource(ABC):
    """Abstract base class for campaign data sources.

    Implementations raise UpstreamFetchError when data cannot be fetched;
    they never return partial results.
    """

    name: str = "base"

    @abstractmethod
    def fetch_campaigns(self, tokens: dict[str, Any]) -> list[CampaignRecord]:
        """Fetch campaigns for an authenticated session.

        Args:
            tokens: OAuth token payload stored in the session.

        Returns:
            Campaign records, at most the source's configured limit.
        """
        pass

"""Fallback wrapper around a primary data source.

A failed live fetch is served with fallback data instead of an error.
Every fallback is logged at WARNING so the substitution stays visible.
"""

from __future__ import annotations

import logging
from typing import Any

from adscore.core.errors import UpstreamFetchError
from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource

logger = logging.getLogger(__name__)


class FallbackDataSource(CampaignDataSource):
    """Try `primary`, serve `fallback` on UpstreamFetchError."""

    def __init__(self, primary: CampaignDataSource, fallback: CampaignDataSource):
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def fetch_campaigns(self, tokens: dict[str, Any]) -> list[CampaignRecord]:
        try:
            return self.primary.fetch_campaigns(tokens)
        except UpstreamFetchError as e:
            logger.warning(
                f"Campaign fetch from {self.primary.name} failed, "
                f"serving {self.fallback.name} data: {e}"
            )
            return self.fallback.fetch_campaigns(tokens)

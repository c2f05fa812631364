"""Google Ads API data source.

Fetches the top campaigns by impressions over the last 30 days using the
session's refresh token. Any client or API failure surfaces as
UpstreamFetchError so callers can decide how to degrade.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from google.ads.googleads.client import GoogleAdsClient
from google.ads.googleads.errors import GoogleAdsException

from adscore.core.errors import UpstreamFetchError
from adscore.core.rates import micros_to_units
from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource

logger = logging.getLogger(__name__)

DEFAULT_CAMPAIGN_LIMIT = 10

CAMPAIGN_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        campaign.status,
        campaign_budget.amount_micros,
        metrics.impressions,
        metrics.clicks,
        metrics.cost_micros,
        metrics.conversions,
        metrics.average_cpc
    FROM campaign
    WHERE segments.date DURING LAST_30_DAYS
    ORDER BY metrics.impressions DESC
    LIMIT {limit}
"""

ClientFactory = Callable[[dict[str, Any]], Any]


def normalize_customer_id(customer_id: str) -> str:
    """Strip dashes from a customer id ("123-456-7890" -> "1234567890")."""
    return customer_id.replace("-", "").strip()


def row_to_campaign(row: Any) -> CampaignRecord:
    """Map a GoogleAdsRow to a CampaignRecord.

    Currency fields are converted from micros; rates are derived from
    the counters.
    """
    campaign = row.campaign
    metrics = row.metrics
    status = getattr(campaign.status, "name", campaign.status)

    return CampaignRecord(
        id=str(campaign.id),
        name=campaign.name,
        status=status,
        impressions=int(metrics.impressions or 0),
        clicks=int(metrics.clicks or 0),
        cost=micros_to_units(metrics.cost_micros),
        conversions=float(metrics.conversions or 0),
        cpc=micros_to_units(metrics.average_cpc),
    )


class GoogleAdsDataSource(CampaignDataSource):
    """Live campaign data from the Google Ads API."""

    name = "google_ads"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        developer_token: str,
        customer_id: str,
        login_customer_id: str | None = None,
        limit: int = DEFAULT_CAMPAIGN_LIMIT,
        client_factory: ClientFactory = GoogleAdsClient.load_from_dict,
    ):
        """Initialize data source.

        Args:
            client_id: OAuth client id.
            client_secret: OAuth client secret.
            developer_token: Google Ads developer token.
            customer_id: Account to query; dashes are stripped.
            login_customer_id: Manager account; defaults to customer_id.
            limit: Maximum number of campaigns to return.
            client_factory: Builds a client from a credentials dict.
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")

        self.client_id = client_id
        self.client_secret = client_secret
        self.developer_token = developer_token
        self.customer_id = normalize_customer_id(customer_id)
        self.login_customer_id = normalize_customer_id(login_customer_id or customer_id)
        self.limit = limit
        self._client_factory = client_factory

    def _build_client(self, refresh_token: str) -> Any:
        credentials = {
            "developer_token": self.developer_token,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
            "use_proto_plus": True,
        }
        if self.login_customer_id:
            credentials["login_customer_id"] = self.login_customer_id
        return self._client_factory(credentials)

    def fetch_campaigns(self, tokens: dict[str, Any]) -> list[CampaignRecord]:
        """Query the top campaigns by impressions.

        Raises:
            UpstreamFetchError: Missing refresh token, bad configuration,
                or any API failure.
        """
        refresh_token = tokens.get("refresh_token")
        if not refresh_token:
            raise UpstreamFetchError("Session has no refresh token")
        if not self.customer_id:
            raise UpstreamFetchError("No Google Ads customer id configured")

        query = CAMPAIGN_QUERY.format(limit=self.limit)

        try:
            client = self._build_client(refresh_token)
            ga_service = client.get_service("GoogleAdsService")
            # The pager follows page tokens until the result set is exhausted
            rows = ga_service.search(customer_id=self.customer_id, query=query)
            campaigns = [row_to_campaign(row) for row in rows]
        except GoogleAdsException as ex:
            errors = "; ".join(error.message for error in ex.failure.errors)
            raise UpstreamFetchError(
                f"Google Ads request {ex.request_id} failed: {errors}"
            ) from ex
        except Exception as ex:
            raise UpstreamFetchError(f"Google Ads fetch failed: {ex}") from ex

        logger.info(f"Found {len(campaigns)} campaigns for customer {self.customer_id}")
        return campaigns[: self.limit]

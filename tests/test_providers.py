"""Tests for campaign data sources."""

from types import SimpleNamespace

import pytest

from adscore.core.errors import UpstreamFetchError
from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource
from adscore.providers.fallback import FallbackDataSource
from adscore.providers.fixture import DEMO_CAMPAIGNS, FixtureDataSource
from adscore.providers.google_ads import (
    GoogleAdsDataSource,
    normalize_customer_id,
    row_to_campaign,
)
from adscore.providers.mock import MockDataSource


def make_row(
    campaign_id=123,
    name="Search - Brand",
    status="ENABLED",
    impressions=1000,
    clicks=50,
    cost_micros=25_000_000,
    conversions=5.0,
    average_cpc=500_000,
):
    """Build an object shaped like a GoogleAdsRow."""
    return SimpleNamespace(
        campaign=SimpleNamespace(id=campaign_id, name=name, status=SimpleNamespace(name=status)),
        campaign_budget=SimpleNamespace(amount_micros=10_000_000),
        metrics=SimpleNamespace(
            impressions=impressions,
            clicks=clicks,
            cost_micros=cost_micros,
            conversions=conversions,
            average_cpc=average_cpc,
        ),
    )


class FakeGoogleAdsService:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def search(self, customer_id, query):
        self.calls.append((customer_id, query))
        if self.error:
            raise self.error
        return iter(self.rows)


class FakeClientFactory:
    """Stands in for GoogleAdsClient.load_from_dict."""

    def __init__(self, service):
        self.service = service
        self.credentials = []

    def __call__(self, credentials):
        self.credentials.append(credentials)
        return SimpleNamespace(get_service=lambda name: self.service)


def make_source(service, **kwargs):
    factory = FakeClientFactory(service)
    source = GoogleAdsDataSource(
        client_id="cid",
        client_secret="secret",
        developer_token="dev-token",
        customer_id=kwargs.pop("customer_id", "123-456-7890"),
        client_factory=factory,
        **kwargs,
    )
    return source, factory


class TestDataSourceInterface:
    """Test base data source interface."""

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            CampaignDataSource()

    @pytest.mark.parametrize(
        "cls", [FixtureDataSource, MockDataSource, GoogleAdsDataSource, FallbackDataSource]
    )
    def test_implementations_inherit_from_base(self, cls):
        assert issubclass(cls, CampaignDataSource)


class TestFixtureDataSource:
    """Fixture source serves the literal demo campaigns."""

    def test_returns_three_demo_campaigns(self):
        campaigns = FixtureDataSource().fetch_campaigns({})
        assert [c.name for c in campaigns] == [
            "Brand Campaign 2024",
            "Shopping - Electronics",
            "Remarketing Campaign",
        ]

    def test_demo_rates_consistent_with_counters(self):
        """Rounded demo rates agree with their counters."""
        for data, record in zip(DEMO_CAMPAIGNS, FixtureDataSource().fetch_campaigns({})):
            assert record.ctr == pytest.approx(data["clicks"] / data["impressions"] * 100, abs=0.01)
            assert record.conversion_rate == pytest.approx(
                data["conversions"] / data["clicks"] * 100, abs=0.01
            )

    def test_returns_fresh_instances(self):
        source = FixtureDataSource()
        first = source.fetch_campaigns({})
        second = source.fetch_campaigns({})
        assert first == second
        assert first[0] is not second[0]


class TestMockDataSource:
    """Mock source returns configured data or fails on demand."""

    def test_default_campaigns(self):
        campaigns = MockDataSource().fetch_campaigns({})
        assert len(campaigns) == 2
        assert campaigns[0].ctr == pytest.approx(6.0)

    def test_accepts_dicts_and_records(self):
        source = MockDataSource([{"name": "dict"}, CampaignRecord(name="record")])
        assert [c.name for c in source.fetch_campaigns({})] == ["dict", "record"]

    def test_records_calls(self):
        source = MockDataSource()
        source.fetch_campaigns({"refresh_token": "rt"})
        assert source.calls == [{"refresh_token": "rt"}]

    def test_fail(self):
        with pytest.raises(UpstreamFetchError):
            MockDataSource(fail=True).fetch_campaigns({})


class TestFallbackDataSource:
    """Upstream failures degrade to fallback data."""

    def test_primary_success(self):
        primary = MockDataSource([{"name": "live"}])
        source = FallbackDataSource(primary, FixtureDataSource())
        assert [c.name for c in source.fetch_campaigns({})] == ["live"]

    def test_primary_failure_serves_fallback(self, caplog):
        source = FallbackDataSource(MockDataSource(fail=True), FixtureDataSource())

        with caplog.at_level("WARNING"):
            campaigns = source.fetch_campaigns({})

        assert len(campaigns) == 3
        assert "serving fixture data" in caplog.text

    def test_other_errors_propagate(self):
        class Broken(CampaignDataSource):
            def fetch_campaigns(self, tokens):
                raise KeyError("bug")

        source = FallbackDataSource(Broken(), FixtureDataSource())
        with pytest.raises(KeyError):
            source.fetch_campaigns({})


class TestRowMapping:
    """GoogleAdsRow -> CampaignRecord."""

    def test_maps_fields(self):
        record = row_to_campaign(make_row())
        assert record.id == "123"
        assert record.name == "Search - Brand"
        assert record.status == "ENABLED"
        assert record.impressions == 1000
        assert record.clicks == 50
        assert record.cost == pytest.approx(25.0)
        assert record.cpc == pytest.approx(0.5)
        assert record.ctr == pytest.approx(5.0)
        assert record.conversion_rate == pytest.approx(10.0)

    def test_zero_metrics(self):
        record = row_to_campaign(
            make_row(impressions=0, clicks=0, cost_micros=0, conversions=0, average_cpc=0)
        )
        assert record.ctr == 0.0
        assert record.conversion_rate == 0.0
        assert record.cost == 0.0

    def test_unrecognized_status(self):
        assert row_to_campaign(make_row(status="UNSPECIFIED")).status == "UNKNOWN"


class TestGoogleAdsDataSource:
    """Live source with a fake API client."""

    def test_normalize_customer_id(self):
        assert normalize_customer_id("123-456-7890") == "1234567890"

    def test_fetches_campaigns(self):
        service = FakeGoogleAdsService(rows=[make_row(), make_row(campaign_id=456, name="B")])
        source, _ = make_source(service)

        campaigns = source.fetch_campaigns({"refresh_token": "rt"})

        assert [c.id for c in campaigns] == ["123", "456"]
        customer_id, query = service.calls[0]
        assert customer_id == "1234567890"
        assert "LAST_30_DAYS" in query
        assert "ORDER BY metrics.impressions DESC" in query
        assert "LIMIT 10" in query

    def test_client_credentials_use_session_refresh_token(self):
        source, factory = make_source(FakeGoogleAdsService())
        source.fetch_campaigns({"refresh_token": "session-rt"})

        credentials = factory.credentials[0]
        assert credentials["refresh_token"] == "session-rt"
        assert credentials["developer_token"] == "dev-token"
        assert credentials["login_customer_id"] == "1234567890"
        assert credentials["use_proto_plus"] is True

    def test_limit_applied(self):
        rows = [make_row(campaign_id=i) for i in range(5)]
        source, _ = make_source(FakeGoogleAdsService(rows=rows), limit=3)
        assert len(source.fetch_campaigns({"refresh_token": "rt"})) == 3

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            make_source(FakeGoogleAdsService(), limit=0)

    def test_missing_refresh_token(self):
        source, factory = make_source(FakeGoogleAdsService())
        with pytest.raises(UpstreamFetchError, match="refresh token"):
            source.fetch_campaigns({"access_token": "at"})
        assert factory.credentials == []

    def test_missing_customer_id(self):
        source, _ = make_source(FakeGoogleAdsService(), customer_id="")
        with pytest.raises(UpstreamFetchError, match="customer id"):
            source.fetch_campaigns({"refresh_token": "rt"})

    def test_api_failure_wrapped(self):
        service = FakeGoogleAdsService(error=RuntimeError("network down"))
        source, _ = make_source(service)
        with pytest.raises(UpstreamFetchError, match="network down"):
            source.fetch_campaigns({"refresh_token": "rt"})

    def test_api_failure_falls_back(self):
        service = FakeGoogleAdsService(error=RuntimeError("quota"))
        live, _ = make_source(service)
        source = FallbackDataSource(live, FixtureDataSource())
        assert len(source.fetch_campaigns({"refresh_token": "rt"})) == 3

"""Tests for campaigns, health and root endpoints."""

import pytest
from fastapi.testclient import TestClient

from adscore.core.config import Settings
from adscore.providers.fallback import FallbackDataSource
from adscore.providers.fixture import FixtureDataSource
from adscore.providers.mock import MockDataSource
from adscore.sessions.store import InMemorySessionStore


def create_test_app_and_client(data_source=None, store=None):
    """Create app with injected collaborators and return (client, store, source)."""
    from adscore.api.app import create_app

    store = store if store is not None else InMemorySessionStore()
    source = data_source if data_source is not None else MockDataSource()
    app = create_app(settings=Settings(mode="test"), session_store=store, data_source=source)
    return TestClient(app), store, source


class TestHealthEndpoints:
    """Test / and /api/health."""

    def test_root(self):
        client, _, _ = create_test_app_and_client()
        data = client.get("/").json()
        assert "running" in data["message"]
        assert "timestamp" in data

    def test_health(self):
        client, _, _ = create_test_app_and_client()
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "OK", "service": "Google Ads Analyzer API"}


class TestCampaignsAuth:
    """Session checks on GET /api/campaigns."""

    def test_missing_session_returns_401(self):
        client, _, source = create_test_app_and_client()

        response = client.get("/api/campaigns")

        assert response.status_code == 401
        assert response.json()["detail"] == "No session provided"
        assert source.calls == []

    def test_unknown_session_returns_401(self):
        client, _, _ = create_test_app_and_client()

        response = client.get("/api/campaigns", params={"session": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired session"

    def test_expired_session_returns_401(self, clock):
        store = InMemorySessionStore(clock=clock)
        client, _, _ = create_test_app_and_client(store=store)
        session = store.create({"refresh_token": "rt"})
        clock.advance(hours=24, minutes=1)

        response = client.get("/api/campaigns", params={"session": session.session_id})

        assert response.status_code == 401

    def test_session_without_tokens_returns_401(self):
        client, store, _ = create_test_app_and_client()
        session = store.create({})

        response = client.get("/api/campaigns", params={"session": session.session_id})

        assert response.status_code == 401


class TestCampaignsData:
    """Campaign payloads."""

    def test_returns_campaigns(self):
        client, store, source = create_test_app_and_client()
        session = store.create({"refresh_token": "rt"})

        response = client.get("/api/campaigns", params={"session": session.session_id})

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data] == ["Test Search", "Test Display"]
        assert source.calls == [{"refresh_token": "rt"}]

    def test_campaign_shape(self):
        client, store, _ = create_test_app_and_client()
        session = store.create({"refresh_token": "rt"})

        campaign = client.get("/api/campaigns", params={"session": session.session_id}).json()[0]

        assert set(campaign) == {
            "id",
            "name",
            "status",
            "impressions",
            "clicks",
            "cost",
            "conversions",
            "ctr",
            "cpc",
            "conversionRate",
        }
        assert campaign["ctr"] == pytest.approx(6.0)
        assert campaign["conversionRate"] == pytest.approx(5.0)

    def test_upstream_failure_serves_demo_data(self):
        """A failed live fetch is a 200 with demo campaigns."""
        source = FallbackDataSource(MockDataSource(fail=True), FixtureDataSource())
        client, store, _ = create_test_app_and_client(data_source=source)
        session = store.create({"refresh_token": "rt"})

        response = client.get("/api/campaigns", params={"session": session.session_id})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == [
            "Brand Campaign 2024",
            "Shopping - Electronics",
            "Remarketing Campaign",
        ]


class TestDefaultCollaborators:
    """Mode selects data source and OAuth client."""

    @pytest.mark.parametrize(
        "mode,source_name",
        [("live", "google_ads+fixture"), ("fixture", "fixture"), ("test", "mock")],
    )
    def test_data_source_per_mode(self, mode, source_name):
        from adscore.api.app import create_app

        app = create_app(settings=Settings(mode=mode))
        assert app.state.data_source.name == source_name

    def test_live_mode_without_credentials_falls_back(self):
        """Unconfigured live mode still answers with demo data."""
        from adscore.api.app import create_app

        app = create_app(settings=Settings(mode="live"))
        client = TestClient(app)
        session = app.state.session_store.create({"refresh_token": "rt"})

        response = client.get("/api/campaigns", params={"session": session.session_id})

        assert response.status_code == 200
        assert len(response.json()) == 3

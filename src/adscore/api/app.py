"""FastAPI application factory.

Collaborators (session store, data source, OAuth client) are built from
settings unless passed in, kept on ``app.state`` and handed to routes
through the dependencies below.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from adscore.auth.oauth import DemoOAuthClient, GoogleOAuthClient, OAuthClient
from adscore.core.config import Settings
from adscore.core.identity import redact
from adscore.models.domain import SessionEntity
from adscore.providers.base import CampaignDataSource
from adscore.providers.fallback import FallbackDataSource
from adscore.providers.fixture import FixtureDataSource
from adscore.providers.google_ads import GoogleAdsDataSource
from adscore.providers.mock import MockDataSource
from adscore.scoring.config import ScoringConfig
from adscore.sessions.store import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_scoring_config(request: Request) -> ScoringConfig:
    return request.app.state.settings.scoring


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_data_source(request: Request) -> CampaignDataSource:
    return request.app.state.data_source


def get_oauth_client(request: Request) -> OAuthClient:
    return request.app.state.oauth_client


def require_session(
    session: str | None = Query(default=None),
    store: SessionStore = Depends(get_session_store),
) -> SessionEntity:
    """Resolve the ``session`` query parameter to a live session.

    Raises:
        HTTPException: 401 if missing, unknown, expired or without tokens.
    """
    if not session:
        raise HTTPException(status_code=401, detail="No session provided")

    entity = store.get(session)
    if entity is None or not entity.tokens:
        logger.info(f"No valid session found for {redact(session)}")
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    return entity


def build_data_source(settings: Settings) -> CampaignDataSource:
    """Pick the campaign data source for the deployment mode."""
    if settings.mode == "fixture":
        return FixtureDataSource()
    if settings.mode == "test":
        return MockDataSource()

    live = GoogleAdsDataSource(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        developer_token=settings.google_ads_developer_token,
        customer_id=settings.google_ads_customer_id,
    )
    return FallbackDataSource(primary=live, fallback=FixtureDataSource())


def build_oauth_client(settings: Settings) -> OAuthClient:
    """Pick the OAuth client for the deployment mode."""
    if settings.mode == "live":
        return GoogleOAuthClient(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.redirect_uri,
        )
    return DemoOAuthClient(redirect_uri=settings.redirect_uri)


def create_app(
    settings: Settings | None = None,
    session_store: SessionStore | None = None,
    data_source: CampaignDataSource | None = None,
    oauth_client: OAuthClient | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Application settings. Defaults to Settings.from_env().
        session_store: Session store. Defaults to an in-memory store.
        data_source: Campaign data source. Defaults per settings.mode.
        oauth_client: OAuth client. Defaults per settings.mode.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()
    if session_store is None:
        session_store = InMemorySessionStore(ttl=settings.session_ttl)
    if data_source is None:
        data_source = build_data_source(settings)
    if oauth_client is None:
        oauth_client = build_oauth_client(settings)

    app = FastAPI(
        title="adscore API",
        description="Google Ads campaign scoring and recommendations",
        version="0.1.0",
    )

    app.state.settings = settings
    app.state.session_store = session_store
    app.state.data_source = data_source
    app.state.oauth_client = oauth_client

    # Frontend runs on a different origin and sends credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from adscore.api.routes import analysis, auth, campaigns

    app.include_router(auth.router, prefix="/auth")
    app.include_router(campaigns.router, prefix="/api")
    app.include_router(analysis.router, prefix="/api")

    @app.get("/")
    def root():
        """Liveness banner."""
        return {
            "message": "Google Ads Analyzer backend is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "OK", "service": "Google Ads Analyzer API"}

    logger.info(
        f"adscore started in {settings.mode} mode with "
        f"{app.state.data_source.name} data source"
    )
    return app


# Default app instance
app = create_app()

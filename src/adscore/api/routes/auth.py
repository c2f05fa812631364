"""OAuth endpoints.

GET /auth/google - Consent URL for the frontend
GET /auth/callback - Exchange code, create session, redirect to frontend
POST /auth/logout - Drop a session
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Response
from fastapi.responses import RedirectResponse

from adscore.api.app import get_oauth_client, get_session_store, get_settings
from adscore.auth.oauth import OAuthClient
from adscore.core.config import Settings
from adscore.core.errors import OAuthExchangeError
from adscore.core.identity import redact
from adscore.models.types import AuthUrlResponse, LogoutRequest
from adscore.sessions.store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _frontend_redirect(settings: Settings, **params: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"{settings.frontend_url}?{urlencode(params)}",
        status_code=302,
    )


@router.get("/google", response_model=AuthUrlResponse)
def start_oauth(oauth: OAuthClient = Depends(get_oauth_client)) -> AuthUrlResponse:
    """Return the consent URL that starts the OAuth flow."""
    logger.info("Starting OAuth flow")
    return AuthUrlResponse(auth_url=oauth.authorization_url())


@router.get("/callback")
def oauth_callback(
    code: str | None = None,
    error: str | None = None,
    oauth: OAuthClient = Depends(get_oauth_client),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Handle the provider redirect.

    Args:
        code: Authorization code from the provider.
        error: Error code when the user denied consent.

    Returns:
        Redirect to the frontend carrying either the new session id or an error.
    """
    if error:
        logger.warning(f"OAuth error from provider: {error}")
        return _frontend_redirect(settings, error=error)

    try:
        tokens = oauth.exchange_code(code or "")
    except OAuthExchangeError as e:
        logger.warning(f"Token exchange failed: {e}")
        return _frontend_redirect(settings, error="auth_failed")

    store.sweep_expired()
    session = store.create(tokens)
    logger.info(f"OAuth success, created session {redact(session.session_id)}")

    return _frontend_redirect(settings, session=session.session_id, success="true")


@router.post("/logout", status_code=204)
def logout(
    body: LogoutRequest,
    store: SessionStore = Depends(get_session_store),
) -> Response:
    """Delete a session. Unknown sessions are ignored."""
    if store.delete(body.session):
        logger.info(f"Session {redact(body.session)} logged out")
    return Response(status_code=204)

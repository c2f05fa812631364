"""OAuth clients for the consent flow.

GoogleOAuthClient drives the web-server flow against Google;
DemoOAuthClient short-circuits it for fixture and test deployments.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import urlencode

from google_auth_oauthlib.flow import Flow

from adscore.core.errors import OAuthExchangeError

logger = logging.getLogger(__name__)

ADWORDS_SCOPE = "https://www.googleapis.com/auth/adwords"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

FlowFactory = Callable[..., Flow]


class OAuthClient(ABC):
    """Narrow interface: consent URL out, token payload in."""

    @abstractmethod
    def authorization_url(self) -> str:
        """Build the URL the frontend sends the user to."""

    @abstractmethod
    def exchange_code(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for a JSON-serializable token payload.

        Raises:
            OAuthExchangeError: If the exchange fails.
        """


class GoogleOAuthClient(OAuthClient):
    """Google OAuth web-server flow requesting offline Google Ads access."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: Sequence[str] = (ADWORDS_SCOPE,),
        flow_factory: FlowFactory = Flow.from_client_config,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = list(scopes)
        self._flow_factory = flow_factory

    def _client_config(self) -> dict[str, Any]:
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }

    def _flow(self) -> Flow:
        # Start and callback run on separate requests, so no PKCE verifier is kept
        return self._flow_factory(
            self._client_config(),
            scopes=self.scopes,
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def authorization_url(self) -> str:
        url, _state = self._flow().authorization_url(
            access_type="offline",
            prompt="consent",
        )
        logger.info("Generated Google consent URL")
        return url

    def exchange_code(self, code: str) -> dict[str, Any]:
        if not code:
            raise OAuthExchangeError("No authorization code provided")

        flow = self._flow()
        try:
            flow.fetch_token(code=code)
        except Exception as e:
            raise OAuthExchangeError(f"Token exchange failed: {e}") from e

        credentials = flow.credentials
        tokens = {
            "access_token": credentials.token,
            "refresh_token": credentials.refresh_token,
            "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
            "scopes": list(credentials.scopes or []),
        }
        logger.info(f"Tokens received: {sorted(k for k, v in tokens.items() if v)}")
        return tokens


class DemoOAuthClient(OAuthClient):
    """Consent flow stand-in that immediately calls back with a demo code."""

    DEMO_CODE = "demo"

    def __init__(self, redirect_uri: str):
        self.redirect_uri = redirect_uri

    def authorization_url(self) -> str:
        return f"{self.redirect_uri}?{urlencode({'code': self.DEMO_CODE})}"

    def exchange_code(self, code: str) -> dict[str, Any]:
        if not code:
            raise OAuthExchangeError("No authorization code provided")
        return {
            "access_token": f"demo-access-{code}",
            "refresh_token": f"demo-refresh-{code}",
            "expiry": None,
            "scopes": [ADWORDS_SCOPE],
        }

"""Exceptions shared across adscore layers."""


class UnauthorizedError(Exception):
    """No valid session for the request."""


class UpstreamFetchError(RuntimeError):
    """The campaign data source could not deliver data."""


class OAuthExchangeError(RuntimeError):
    """Authorization code could not be exchanged for tokens."""

"""Identity utilities for session tokens."""

import secrets

# 32 bytes of entropy, ~43 url-safe characters
SESSION_ID_BYTES = 32


def new_session_id() -> str:
    """Generate an opaque, collision-resistant session id.

    Returns:
        URL-safe random string from the OS CSPRNG.
    """
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def redact(session_id: str | None, keep: int = 6) -> str:
    """Shorten a session id for log output.

    Examples:
        >>> redact("abcdefghijkl")
        'abcdef...'
        >>> redact(None)
        '<none>'
    """
    if not session_id:
        return "<none>"
    return f"{session_id[:keep]}..."

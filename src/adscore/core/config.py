"""Environment-driven settings.

Read once at application start-up; every value has a development default.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Literal

from adscore.scoring.config import ScoringConfig, get_preset

Mode = Literal["live", "fixture", "test"]
MODES = ("live", "fixture", "test")

DEFAULT_REDIRECT_URI = "http://localhost:3001/auth/callback"
DEFAULT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")

# env var -> (ScoringConfig field, type); the empty string or "none" clears optional thresholds
SCORING_OVERRIDES: dict[str, tuple[str, type]] = {
    "ADSCORE_BASE_SCORE": ("base_score", int),
    "ADSCORE_CTR_HIGH_THRESHOLD": ("ctr_high_threshold", float),
    "ADSCORE_CTR_LOW_THRESHOLD": ("ctr_low_threshold", float),
    "ADSCORE_CONVERSION_HIGH_THRESHOLD": ("conversion_high_threshold", float),
    "ADSCORE_CONVERSION_LOW_THRESHOLD": ("conversion_low_threshold", float),
    "ADSCORE_COST_PER_CONVERSION_THRESHOLD": ("cost_per_conversion_threshold", float),
    "ADSCORE_BONUS_CTR_HIGH": ("bonus_ctr_high", int),
    "ADSCORE_PENALTY_CTR_LOW": ("penalty_ctr_low", int),
    "ADSCORE_BONUS_CONVERSION_HIGH": ("bonus_conversion_high", int),
    "ADSCORE_PENALTY_CONVERSION_LOW": ("penalty_conversion_low", int),
    "ADSCORE_BONUS_COST_EFFICIENCY": ("bonus_cost_efficiency", int),
}
OPTIONAL_THRESHOLDS = {"conversion_low_threshold", "cost_per_conversion_threshold"}


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        mode: "live" queries Google Ads (falling back to demo data),
            "fixture" serves demo data, "test" serves mock data.
        scoring: Rule configuration for the analysis endpoint.
    """

    mode: Mode = "live"
    google_client_id: str = ""
    google_client_secret: str = ""
    google_ads_developer_token: str = ""
    google_ads_customer_id: str = ""
    redirect_uri: str = DEFAULT_REDIRECT_URI
    frontend_url: str = DEFAULT_FRONTEND_URL
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    session_ttl: timedelta = timedelta(hours=24)
    scoring: ScoringConfig = field(default_factory=lambda: get_preset("live"))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: On an unknown mode or preset, or an unparseable number.
        """
        env = os.environ if environ is None else environ

        mode = env.get("ADSCORE_MODE", "live").strip().lower()
        if mode not in MODES:
            raise ValueError(f"ADSCORE_MODE must be one of {MODES}, got {mode!r}")

        origins = env.get("ADSCORE_CORS_ORIGINS")
        cors_origins = (
            tuple(o.strip() for o in origins.split(",") if o.strip())
            if origins
            else DEFAULT_CORS_ORIGINS
        )

        return cls(
            mode=mode,
            google_client_id=env.get("GOOGLE_CLIENT_ID", ""),
            google_client_secret=env.get("GOOGLE_CLIENT_SECRET", ""),
            google_ads_developer_token=env.get("GOOGLE_ADS_DEVELOPER_TOKEN", ""),
            google_ads_customer_id=env.get("GOOGLE_ADS_CUSTOMER_ID", ""),
            redirect_uri=env.get("ADSCORE_REDIRECT_URI", DEFAULT_REDIRECT_URI),
            frontend_url=env.get("ADSCORE_FRONTEND_URL", DEFAULT_FRONTEND_URL).rstrip("/"),
            cors_origins=cors_origins,
            session_ttl=_session_ttl(env),
            scoring=load_scoring_config(env, default_preset=mode),
        )


def _session_ttl(env: Mapping[str, str]) -> timedelta:
    raw = env.get("ADSCORE_SESSION_TTL_HOURS", "24").strip()
    try:
        return timedelta(hours=float(raw))
    except ValueError as e:
        raise ValueError(f"ADSCORE_SESSION_TTL_HOURS={raw!r} is not a valid float") from e


def load_scoring_config(env: Mapping[str, str], default_preset: str = "live") -> ScoringConfig:
    """Resolve the scoring preset and apply per-field overrides."""
    preset = get_preset(env.get("ADSCORE_SCORING_PRESET", default_preset).strip().lower())

    changes: dict[str, object] = {}
    for var, (field_name, cast) in SCORING_OVERRIDES.items():
        raw = env.get(var)
        if raw is None:
            continue
        raw = raw.strip()
        if field_name in OPTIONAL_THRESHOLDS and raw.lower() in ("", "none"):
            changes[field_name] = None
            continue
        try:
            changes[field_name] = cast(raw)
        except ValueError as e:
            raise ValueError(f"{var}={raw!r} is not a valid {cast.__name__}") from e

    return preset.with_overrides(**changes) if changes else preset

"""Domain models for adscore.

Plain dataclasses for values that never cross the HTTP boundary as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from adscore.models.types import CampaignRecord


# ============================================================================
# Analysis Domain
# ============================================================================


@dataclass(frozen=True)
class CampaignSummary:
    """Aggregate over a list of campaign records.

    Averages are unweighted arithmetic means. ``best_performer`` is None
    only when the list was empty.
    """

    total_campaigns: int
    avg_ctr: float
    avg_conversion_rate: float
    total_cost: float
    total_conversions: float
    best_performer: CampaignRecord | None = None

    @property
    def is_empty(self) -> bool:
        return self.total_campaigns == 0


# ============================================================================
# Session Domain
# ============================================================================


@dataclass
class SessionEntity:
    """An authenticated frontend session holding OAuth tokens."""

    session_id: str
    created_at: datetime
    tokens: dict[str, Any] = field(default_factory=dict)

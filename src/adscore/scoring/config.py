"""Scoring rule configuration.

Thresholds are percentages compared against unrounded averages.
Each deployment mode historically shipped its own numbers; they are
kept side by side as named presets rather than merged into one default.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from adscore.models.types import Priority, RecommendationType

PresetName = Literal["live", "fixture", "test"]


@dataclass(frozen=True)
class StatusMessage:
    """Static recommendation appended after all rules."""

    type: RecommendationType
    title: str
    description: str
    action: str


@dataclass(frozen=True)
class ScoringConfig:
    """Knobs for the recommendation rules.

    Optional thresholds set to None disable their rule.

    Attributes:
        base_score: Seed value for the running score.
        ctr_high_threshold: avg CTR above this earns a bonus.
        ctr_low_threshold: avg CTR below this costs a penalty.
        conversion_high_threshold: avg conversion rate above this earns a bonus.
        conversion_low_threshold: avg conversion rate below this costs a penalty.
        cost_per_conversion_threshold: CPA below this earns a small bonus.
        ctr_high_priority: Priority of the strong-CTR recommendation.
        acknowledge_solid_conversion: Emit a neutral note when the
            conversion rate is neither high nor low.
        status_message: Recommendation describing connectivity status.
    """

    base_score: int
    ctr_high_threshold: float
    ctr_low_threshold: float
    conversion_high_threshold: float
    status_message: StatusMessage
    conversion_low_threshold: float | None = None
    cost_per_conversion_threshold: float | None = None
    bonus_ctr_high: int = 10
    penalty_ctr_low: int = 10
    bonus_conversion_high: int = 10
    penalty_conversion_low: int = 5
    bonus_cost_efficiency: int = 5
    ctr_high_priority: Priority = "high"
    acknowledge_solid_conversion: bool = False

    def __post_init__(self) -> None:
        if self.ctr_low_threshold > self.ctr_high_threshold:
            raise ValueError(
                f"ctr_low_threshold={self.ctr_low_threshold} exceeds "
                f"ctr_high_threshold={self.ctr_high_threshold}"
            )
        if (
            self.conversion_low_threshold is not None
            and self.conversion_low_threshold > self.conversion_high_threshold
        ):
            raise ValueError(
                f"conversion_low_threshold={self.conversion_low_threshold} exceeds "
                f"conversion_high_threshold={self.conversion_high_threshold}"
            )

    def with_overrides(self, **changes) -> ScoringConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)


LIVE_PRESET = ScoringConfig(
    base_score=75,
    ctr_high_threshold=4.0,
    ctr_low_threshold=2.0,
    conversion_high_threshold=3.0,
    cost_per_conversion_threshold=50.0,
    bonus_ctr_high=10,
    penalty_ctr_low=10,
    bonus_conversion_high=10,
    bonus_cost_efficiency=5,
    ctr_high_priority="high",
    status_message=StatusMessage(
        type="success",
        title="Google Ads API connected",
        description="Live connection to the Google Ads API is working",
        action="Data is synchronised in real time",
    ),
)

FIXTURE_PRESET = ScoringConfig(
    base_score=82,
    ctr_high_threshold=5.5,
    ctr_low_threshold=3.0,
    conversion_high_threshold=4.5,
    conversion_low_threshold=3.0,
    bonus_ctr_high=5,
    penalty_ctr_low=10,
    bonus_conversion_high=8,
    penalty_conversion_low=8,
    ctr_high_priority="low",
    acknowledge_solid_conversion=True,
    status_message=StatusMessage(
        type="info",
        title="Demo mode",
        description="Analysis is based on sample campaign data",
        action="Connect a Google Ads account to analyse live campaigns",
    ),
)

TEST_PRESET = ScoringConfig(
    base_score=80,
    ctr_high_threshold=5.0,
    ctr_low_threshold=2.5,
    conversion_high_threshold=4.0,
    conversion_low_threshold=3.0,
    cost_per_conversion_threshold=50.0,
    ctr_high_priority="high",
    status_message=StatusMessage(
        type="info",
        title="Test data",
        description="Analysis is based on generated test campaigns",
        action="Switch to live mode to analyse real campaigns",
    ),
)

PRESETS: dict[str, ScoringConfig] = {
    "live": LIVE_PRESET,
    "fixture": FIXTURE_PRESET,
    "test": TEST_PRESET,
}


def get_preset(name: str) -> ScoringConfig:
    """Look up a preset by name.

    Raises:
        ValueError: If the preset is unknown.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scoring preset {name!r}; expected one of {sorted(PRESETS)}"
        ) from None

"""Score and recommendations from a campaign summary.

Rules run in a fixed order. Each rule may adjust the running score and
append one recommendation; earlier recommendations are never removed or
reordered. Data-dependent rules are skipped for an empty summary, and the
static status recommendation always comes last.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from adscore.aggregation.summary import summarize_campaigns
from adscore.core.errors import UnauthorizedError
from adscore.core.rates import cost_per_conversion
from adscore.models.domain import CampaignSummary
from adscore.models.types import (
    AnalysisResult,
    AnalysisSummary,
    CampaignRecord,
    Recommendation,
)
from adscore.scoring.config import LIVE_PRESET, ScoringConfig

logger = logging.getLogger(__name__)

SCORE_FLOOR = 0
SCORE_CEILING = 100


def analyze_campaigns(
    campaign_data: Sequence[CampaignRecord] | None,
    config: ScoringConfig = LIVE_PRESET,
    session_valid: bool = True,
) -> AnalysisResult:
    """Aggregate campaigns and evaluate the scoring rules.

    Args:
        campaign_data: Campaign records, possibly empty or None.
        config: Rule thresholds and deltas.
        session_valid: Whether the caller holds a valid session.

    Returns:
        AnalysisResult with clamped score, ordered recommendations and summary.

    Raises:
        UnauthorizedError: If session_valid is False. Nothing is computed.
    """
    if not session_valid:
        raise UnauthorizedError("Unauthorized")

    summary = summarize_campaigns(campaign_data)
    result = evaluate(summary, config)
    logger.info(
        f"Analysed {summary.total_campaigns} campaigns: score={result.overall_score}, "
        f"{len(result.recommendations)} recommendations"
    )
    return result


def evaluate(summary: CampaignSummary, config: ScoringConfig = LIVE_PRESET) -> AnalysisResult:
    """Run all rules against a summary.

    Args:
        summary: Aggregated campaign metrics.
        config: Rule thresholds and deltas.

    Returns:
        AnalysisResult. Pure function.
    """
    score = config.base_score
    recommendations: list[Recommendation] = []

    if not summary.is_empty:
        score += _ctr_rule(summary, config, recommendations)
        score += _conversion_rule(summary, config, recommendations)
        score += _cost_efficiency_rule(summary, config, recommendations)
        _best_performer_rule(summary, recommendations)

    _status_rule(config, recommendations)

    return AnalysisResult(
        overall_score=clamp_score(score),
        recommendations=recommendations,
        summary=AnalysisSummary(
            total_campaigns=summary.total_campaigns,
            avg_ctr=summary.avg_ctr,
            avg_conversion_rate=summary.avg_conversion_rate,
            total_cost=summary.total_cost,
            total_conversions=summary.total_conversions,
        ),
    )


def clamp_score(score: float) -> int:
    """Clamp a raw score into [0, 100]."""
    return int(min(max(score, SCORE_FLOOR), SCORE_CEILING))


def _ctr_rule(
    summary: CampaignSummary,
    config: ScoringConfig,
    out: list[Recommendation],
) -> int:
    """High CTR bonus, else low CTR penalty."""
    avg_ctr = summary.avg_ctr

    if avg_ctr > config.ctr_high_threshold:
        out.append(
            Recommendation(
                type="success",
                title="Strong CTR performance",
                description=(
                    f"Average CTR of {avg_ctr:.2f}% is above the "
                    f"{config.ctr_high_threshold:.2f}% benchmark"
                ),
                action="Roll out the successful ad copy to further campaigns",
                priority=config.ctr_high_priority,
            )
        )
        return config.bonus_ctr_high

    if avg_ctr < config.ctr_low_threshold:
        out.append(
            Recommendation(
                type="warning",
                title="CTR needs optimisation",
                description=(
                    f"CTR of {avg_ctr:.2f}% is below the "
                    f"{config.ctr_low_threshold:.2f}% benchmark"
                ),
                action="Review ad copy and keywords",
                priority="high",
            )
        )
        return -config.penalty_ctr_low

    return 0


def _conversion_rule(
    summary: CampaignSummary,
    config: ScoringConfig,
    out: list[Recommendation],
) -> int:
    """High conversion bonus, optional low conversion penalty or solid note."""
    rate = summary.avg_conversion_rate

    if rate > config.conversion_high_threshold:
        out.append(
            Recommendation(
                type="success",
                title="Excellent conversion rate",
                description=f"Conversion rate of {rate:.2f}% shows effective landing pages",
                action="Increase budget for top performers",
                priority="high",
            )
        )
        return config.bonus_conversion_high

    low = config.conversion_low_threshold
    if low is not None and rate < low:
        out.append(
            Recommendation(
                type="warning",
                title="Conversion rate below target",
                description=(
                    f"Conversion rate of {rate:.2f}% is below the "
                    f"{low:.2f}% target"
                ),
                action="Test landing pages and tighten targeting",
                priority="high",
            )
        )
        return -config.penalty_conversion_low

    if config.acknowledge_solid_conversion:
        out.append(
            Recommendation(
                type="success",
                title="Solid conversion rate",
                description=f"Conversion rate of {rate:.2f}% is within the expected range",
                action="Keep monitoring and test incremental landing page changes",
                priority="medium",
            )
        )
    return 0


def _cost_efficiency_rule(
    summary: CampaignSummary,
    config: ScoringConfig,
    out: list[Recommendation],
) -> int:
    """Small bonus for a competitive cost per conversion."""
    if config.cost_per_conversion_threshold is None:
        return 0

    cpa = cost_per_conversion(summary.total_cost, summary.total_conversions)
    if cpa is None or not 0 < cpa < config.cost_per_conversion_threshold:
        return 0

    out.append(
        Recommendation(
            type="info",
            title="Efficient CPA",
            description=f"Cost per acquisition of {cpa:.2f} is competitive",
            action="Check whether the successful campaigns can be scaled",
            priority="medium",
        )
    )
    return config.bonus_cost_efficiency


def _best_performer_rule(summary: CampaignSummary, out: list[Recommendation]) -> None:
    best = summary.best_performer
    if best is None:
        return

    rate = best.conversion_rate or 0.0
    out.append(
        Recommendation(
            type="info",
            title="Top performer",
            description=f'"{best.name}" shows the best performance with a {rate:.2f}% conversion rate',
            action=f'Analyse the success factors of "{best.name}"',
            priority="medium",
        )
    )


def _status_rule(config: ScoringConfig, out: list[Recommendation]) -> None:
    message = config.status_message
    out.append(
        Recommendation(
            type=message.type,
            title=message.title,
            description=message.description,
            action=message.action,
            priority="low",
        )
    )

"""Pydantic models for the adscore API.

Field names are snake_case in Python and camelCase on the wire,
matching what the frontend sends and expects.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from adscore.core.rates import compute_conversion_rate, compute_ctr

CampaignStatus = Literal["ENABLED", "PAUSED", "REMOVED", "UNKNOWN"]
RecommendationType = Literal["success", "warning", "info"]
Priority = Literal["high", "medium", "low"]

KNOWN_STATUSES = ("ENABLED", "PAUSED", "REMOVED", "UNKNOWN")

# Rates arrive rounded to 2 decimals by the frontend
RATE_TOLERANCE = 0.01


class CampaignRecord(BaseModel):
    """One campaign's observed metrics over a reporting window.

    ``ctr`` and ``conversion_rate`` are derived from the base counters when
    omitted. When supplied alongside a non-zero base counter they must agree
    with the derived value.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = ""
    name: str = ""
    status: CampaignStatus = "UNKNOWN"
    impressions: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    cost: float = Field(default=0.0, ge=0)
    conversions: float = Field(default=0.0, ge=0)
    ctr: float | None = None
    cpc: float = Field(default=0.0, ge=0)
    conversion_rate: float | None = Field(default=None, alias="conversionRate")

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> str:
        if isinstance(value, str) and value.upper() in KNOWN_STATUSES:
            return value.upper()
        return "UNKNOWN"

    @field_validator("impressions", "clicks", "cost", "conversions", "cpc", mode="before")
    @classmethod
    def _null_counter_is_zero(cls, value: object) -> object:
        return 0 if value is None or value == "" else value

    @model_validator(mode="after")
    def _derive_rates(self) -> "CampaignRecord":
        derived_ctr = compute_ctr(self.clicks, self.impressions)
        if self.ctr is None:
            self.ctr = derived_ctr
        elif self.impressions > 0 and abs(self.ctr - derived_ctr) > RATE_TOLERANCE:
            raise ValueError(
                f"ctr={self.ctr} inconsistent with clicks/impressions ({derived_ctr:.2f})"
            )

        derived_rate = compute_conversion_rate(self.conversions, self.clicks)
        if self.conversion_rate is None:
            self.conversion_rate = derived_rate
        elif self.clicks > 0 and abs(self.conversion_rate - derived_rate) > RATE_TOLERANCE:
            raise ValueError(
                f"conversionRate={self.conversion_rate} inconsistent with "
                f"conversions/clicks ({derived_rate:.2f})"
            )
        return self


class Recommendation(BaseModel):
    """One actionable insight produced by a scoring rule."""

    type: RecommendationType
    title: str
    description: str
    action: str
    priority: Priority


class AnalysisSummary(BaseModel):
    """Summary view returned alongside the score."""

    model_config = ConfigDict(populate_by_name=True)

    total_campaigns: int = Field(alias="totalCampaigns")
    avg_ctr: float = Field(alias="avgCTR")
    avg_conversion_rate: float = Field(alias="avgConversionRate")
    total_cost: float = Field(alias="totalCost")
    total_conversions: float = Field(alias="totalConversions")


class AnalysisResult(BaseModel):
    """Top-level analysis response."""

    model_config = ConfigDict(populate_by_name=True)

    overall_score: int = Field(alias="overallScore", ge=0, le=100)
    recommendations: list[Recommendation]
    summary: AnalysisSummary


class AnalyzeRequest(BaseModel):
    """Body of POST /api/analyze."""

    model_config = ConfigDict(populate_by_name=True)

    session: str | None = None
    # Raw records; validated only once the session is known to be live
    campaign_data: list[dict[str, Any]] | None = Field(default=None, alias="campaignData")


class LogoutRequest(BaseModel):
    """Body of POST /auth/logout."""

    session: str


class AuthUrlResponse(BaseModel):
    """Consent URL for starting the OAuth flow."""

    model_config = ConfigDict(populate_by_name=True)

    auth_url: str = Field(alias="authUrl")

"""Analysis API endpoint.

POST /api/analyze - Score campaigns and return recommendations
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import TypeAdapter, ValidationError

from adscore.api.app import get_scoring_config, get_session_store
from adscore.core.errors import UnauthorizedError
from adscore.models.types import AnalysisResult, AnalyzeRequest, CampaignRecord
from adscore.scoring.config import ScoringConfig
from adscore.scoring.engine import analyze_campaigns
from adscore.sessions.store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()

campaign_list = TypeAdapter(list[CampaignRecord])


@router.post("/analyze", response_model=AnalysisResult)
def analyze(
    body: AnalyzeRequest,
    store: SessionStore = Depends(get_session_store),
    config: ScoringConfig = Depends(get_scoring_config),
) -> AnalysisResult:
    """Analyse campaign data for an authenticated session.

    Args:
        body: Session id and campaign records.

    Returns:
        AnalysisResult with score, recommendations and summary.

    Raises:
        HTTPException: 401 without a valid session, 422 for malformed
            campaign records, 500 if analysis fails.
    """
    session_valid = bool(body.session) and store.get(body.session) is not None

    records = None
    if session_valid:
        try:
            records = campaign_list.validate_python(body.campaign_data or [])
        except ValidationError as e:
            raise HTTPException(
                status_code=422,
                detail=e.errors(include_url=False, include_context=False),
            ) from e

    try:
        return analyze_campaigns(records, config, session_valid=session_valid)
    except UnauthorizedError as e:
        raise HTTPException(status_code=401, detail="Unauthorized") from e
    except Exception as e:
        logger.exception("Analysis error")
        raise HTTPException(status_code=500, detail="Analysis failed") from e

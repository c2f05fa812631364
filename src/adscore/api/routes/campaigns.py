"""Campaigns API endpoint.

GET /api/campaigns?session=... - Top campaigns for the session's account
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from adscore.api.app import get_data_source, require_session
from adscore.core.identity import redact
from adscore.models.domain import SessionEntity
from adscore.models.types import CampaignRecord
from adscore.providers.base import CampaignDataSource

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/campaigns", response_model=list[CampaignRecord])
def list_campaigns(
    session: SessionEntity = Depends(require_session),
    source: CampaignDataSource = Depends(get_data_source),
) -> list[CampaignRecord]:
    """List campaigns for an authenticated session.

    Returns:
        Campaign records. Live-fetch failures are served with demo data
        by the configured data source, never as an error.

    Raises:
        HTTPException: 401 if the session is missing or invalid.
    """
    logger.info(f"Campaign request for session {redact(session.session_id)}")
    return source.fetch_campaigns(session.tokens)

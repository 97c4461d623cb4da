from __future__ import annotations
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from captionboard.db import get_session
from captionboard.schemas.analytics import AnalyticsResponse
from captionboard.services.analytics import load_caption_analytics

router = APIRouter(tags=["analytics"])

@router.get("/caption-analytics", response_model=AnalyticsResponse)
async def caption_analytics(session: AsyncSession = Depends(get_session)):
    data = await load_caption_analytics(session)
    return AnalyticsResponse(data=data, timestamp=datetime.now(timezone.utc))

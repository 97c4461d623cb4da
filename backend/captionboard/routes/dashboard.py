from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from captionboard.db import get_session
from captionboard.auth_deps import get_principal
from captionboard.errors import PersistenceFailure
from captionboard.models.caption import Caption, CaptionLike
from captionboard.schemas.caption import CaptionSummary, FlavorRef
from captionboard.schemas.common import Envelope
from captionboard.schemas.dashboard import Dashboard, DashboardStats
from captionboard.security import Principal

log = structlog.get_logger()

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_CAPTIONS = 10

@router.get("", response_model=Envelope[Dashboard])
async def my_dashboard(session: AsyncSession = Depends(get_session), principal: Principal = Depends(get_principal)):
    try:
        recent = (await session.execute(
            select(Caption)
            .where(Caption.profile_id == principal.id)
            .options(selectinload(Caption.humor_flavor))
            .order_by(Caption.created_datetime_utc.desc())
            .limit(RECENT_CAPTIONS)
        )).scalars().all()
        likes_given = await session.scalar(
            select(func.count()).select_from(CaptionLike).where(CaptionLike.profile_id == principal.id)
        )
    except SQLAlchemyError as e:
        log.error("dashboard_fetch_failed", error=str(e))
        raise PersistenceFailure("Failed to load dashboard") from e

    # Stats describe the same recent window the page shows
    stats = DashboardStats(
        total_captions=len(recent),
        total_likes=sum(c.like_count or 0 for c in recent),
        likes_given=int(likes_given or 0),
    )
    return Envelope(data=Dashboard(
        user_id=str(principal.id),
        email=principal.email,
        captions=[
            CaptionSummary(
                id=c.id,
                content=c.content,
                like_count=c.like_count or 0,
                created_datetime_utc=c.created_datetime_utc,
                humor_flavor=FlavorRef.model_validate(c.humor_flavor) if c.humor_flavor else None,
            )
            for c in recent
        ],
        stats=stats,
    ))

from __future__ import annotations
import json
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from captionboard.db import get_session
from captionboard.errors import PersistenceFailure
from captionboard.models.image import Image
from captionboard.schemas.common import Envelope
from captionboard.schemas.image import ImagePublic

log = structlog.get_logger()

router = APIRouter(prefix="/images", tags=["images"])

def celebrity_name(recognition: str | None) -> str | None:
    # Vision model output looks like {"content": [{"name": ...}, ...]}
    if not recognition:
        return None
    try:
        parsed = json.loads(recognition)
        return parsed["content"][0]["name"] or None
    except (ValueError, TypeError, KeyError, IndexError):
        return None

@router.get("", response_model=Envelope[list[ImagePublic]])
async def list_public_images(
    limit: int = Query(default=50, ge=1, le=200),
    session: AsyncSession = Depends(get_session),
):
    try:
        rows = (await session.execute(
            select(Image)
            .where(Image.is_public.is_(True))
            .order_by(Image.created_datetime_utc.desc())
            .limit(limit)
        )).scalars().all()
    except SQLAlchemyError as e:
        log.error("images_fetch_failed", error=str(e))
        raise PersistenceFailure("Failed to fetch images") from e
    return Envelope(data=[
        ImagePublic(
            id=i.id,
            url=i.url,
            image_description=i.image_description,
            celebrity_name=celebrity_name(i.celebrity_recognition),
            additional_context=i.additional_context,
            created_datetime_utc=i.created_datetime_utc,
        )
        for i in rows
    ])

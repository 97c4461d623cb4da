from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from datetime import datetime, timezone
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from captionboard.config import settings
from captionboard.db import get_session
from captionboard.errors import PersistenceFailure
from captionboard.models.image import Image

log = structlog.get_logger()

router = APIRouter()

@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("x-request-id") or request.state.request_id,
    }

@router.get("/health/db")
async def health_db(session: AsyncSession = Depends(get_session)):
    try:
        public_images = await session.scalar(
            select(func.count()).select_from(Image).where(Image.is_public.is_(True))
        )
    except SQLAlchemyError as e:
        log.error("db_probe_failed", error=str(e))
        raise PersistenceFailure("Database connection failed") from e
    return {"success": True, "message": "Database connection successful", "data": {"totalImages": int(public_images or 0)}}

@router.get("/version")
async def version():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
        "build": "docker",
    }

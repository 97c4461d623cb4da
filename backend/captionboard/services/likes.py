from __future__ import annotations
from uuid import UUID
import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from captionboard.errors import NotFound, PersistenceFailure
from captionboard.models.caption import Caption, CaptionLike
from captionboard.schemas.caption import LikeResult

log = structlog.get_logger()


async def like_caption(session: AsyncSession, caption_id: UUID, profile_id: UUID) -> LikeResult:
    """One like per user per caption. A repeat like is a no-op, never a second increment."""
    try:
        caption = await session.get(Caption, caption_id)
        if caption is None:
            raise NotFound("Caption not found")

        exists = await session.scalar(
            select(CaptionLike).where(CaptionLike.caption_id == caption_id, CaptionLike.profile_id == profile_id)
        )
        if exists:
            return LikeResult(caption_id=caption_id, action="unchanged", like_count=caption.like_count or 0)

        session.add(CaptionLike(caption_id=caption_id, profile_id=profile_id))
        # Increment in SQL so concurrent likes from different users don't lose updates
        await session.execute(
            update(Caption).where(Caption.id == caption_id).values(like_count=Caption.like_count + 1)
        )
        await session.commit()
        like_count = await session.scalar(select(Caption.like_count).where(Caption.id == caption_id))
    except SQLAlchemyError as e:
        await session.rollback()
        log.error("like_failed", caption_id=str(caption_id), error=str(e))
        raise PersistenceFailure("Failed to save like") from e

    log.info("caption_liked", caption_id=str(caption_id), like_count=like_count)
    return LikeResult(caption_id=caption_id, action="created", like_count=int(like_count or 0))

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone as dt_tz
from typing import Iterable, Literal
from uuid import UUID
import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from captionboard.errors import InvalidInput, NotFound, PersistenceFailure, Unauthenticated
from captionboard.models.caption import Caption
from captionboard.models.vote import CaptionVote
from captionboard.services.votes import VALID_VOTE_VALUES

log = structlog.get_logger()


@dataclass
class VoteOutcome:
    action: Literal["created", "updated"]
    vote: CaptionVote
    previous_vote: int | None = None


def validate_vote_value(value) -> int:
    # bool is an int subclass; True must not sneak in as an upvote
    if isinstance(value, bool) or not isinstance(value, int) or value not in VALID_VOTE_VALUES:
        raise InvalidInput("vote_value must be 1 (upvote), -1 (downvote), or 0 (neutral)")
    return value


async def get_vote(session: AsyncSession, caption_id: UUID, voter_id: UUID) -> CaptionVote | None:
    try:
        return await session.scalar(
            select(CaptionVote).where(CaptionVote.caption_id == caption_id, CaptionVote.profile_id == voter_id)
        )
    except SQLAlchemyError as e:
        log.error("vote_lookup_failed", caption_id=str(caption_id), error=str(e))
        raise PersistenceFailure("Failed to load vote") from e


async def vote_rows_for(session: AsyncSession, caption_ids: Iterable[UUID]) -> list[tuple[UUID, int]]:
    """All ``(caption_id, vote_value)`` pairs for the given captions."""
    ids = list(caption_ids)
    if not ids:
        return []
    try:
        rows = (await session.execute(
            select(CaptionVote.caption_id, CaptionVote.vote_value).where(CaptionVote.caption_id.in_(ids))
        )).all()
    except SQLAlchemyError as e:
        log.error("vote_rows_failed", captions=len(ids), error=str(e))
        raise PersistenceFailure("Failed to load votes") from e
    return [(cid, int(v)) for cid, v in rows]


async def voter_votes_for(session: AsyncSession, voter_id: UUID, caption_ids: Iterable[UUID]) -> dict[UUID, int]:
    ids = list(caption_ids)
    if not ids:
        return {}
    try:
        rows = (await session.execute(
            select(CaptionVote.caption_id, CaptionVote.vote_value)
            .where(CaptionVote.profile_id == voter_id, CaptionVote.caption_id.in_(ids))
        )).all()
    except SQLAlchemyError as e:
        log.error("voter_votes_failed", captions=len(ids), error=str(e))
        raise PersistenceFailure("Failed to load votes") from e
    return {cid: int(v) for cid, v in rows}


async def submit_vote(session: AsyncSession, caption_id: UUID | None, voter_id: UUID | None, value) -> VoteOutcome:
    """
    Create or overwrite the caller's vote on a caption.

    Check-then-write: not atomic by itself. Two racing first votes from the same
    voter both see "no vote"; the unique constraint on (caption_id, profile_id)
    rejects the second insert and it surfaces as PersistenceFailure.
    """
    if voter_id is None:
        raise Unauthenticated()
    if caption_id is None or value is None:
        raise InvalidInput("caption_id and vote_value are required")
    value = validate_vote_value(value)

    try:
        caption = await session.get(Caption, caption_id)
        if caption is None:
            raise NotFound("Caption not found")

        existing = await session.scalar(
            select(CaptionVote).where(CaptionVote.caption_id == caption_id, CaptionVote.profile_id == voter_id)
        )
        if existing is not None:
            previous = existing.vote_value
            existing.vote_value = value
            existing.modified_datetime_utc = datetime.now(dt_tz.utc)
            await session.commit()
            await session.refresh(existing)
            log.info("vote_updated", caption_id=str(caption_id), previous=previous, value=value)
            return VoteOutcome(action="updated", vote=existing, previous_vote=previous)

        vote = CaptionVote(caption_id=caption_id, profile_id=voter_id, vote_value=value)
        session.add(vote)
        await session.commit()
        await session.refresh(vote)
        log.info("vote_created", caption_id=str(caption_id), value=value)
        return VoteOutcome(action="created", vote=vote)
    except SQLAlchemyError as e:
        await session.rollback()
        log.error("vote_write_failed", caption_id=str(caption_id), error=str(e))
        raise PersistenceFailure("Failed to save vote") from e

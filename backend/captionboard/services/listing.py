"""
Caption listing: ordering, pagination and vote enrichment.

``random`` has no database-side equivalent we rely on, so it is approximated:
a bounded superset (``settings.random_superset_cap`` rows, newest first) is
shuffled in memory and the requested window sliced out of it. For that mode
``pagination.total`` is the superset size, not the global caption count.
"""
from __future__ import annotations
import random
from typing import MutableSequence, TypeVar
from uuid import UUID
import structlog
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from captionboard.config import settings
from captionboard.errors import InvalidInput, PersistenceFailure
from captionboard.models.caption import Caption
from captionboard.schemas.caption import SORT_MODES, CaptionPage, CaptionPublic, FlavorRef, ImageRef, Pagination
from captionboard.services.votes import aggregate_votes
from captionboard.services.vote_store import vote_rows_for, voter_votes_for

log = structlog.get_logger()

T = TypeVar("T")


def fisher_yates_shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """In-place unbiased shuffle: for i from last down to 1, swap i with a uniform j in [0, i]."""
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def page_window(items: list[T], offset: int, limit: int) -> list[T]:
    return items[offset:offset + limit]


def has_more(offset: int, limit: int, total: int) -> bool:
    return (offset + limit) < total


def validate_page(sort: str, limit: int, offset: int) -> None:
    if sort not in SORT_MODES:
        raise InvalidInput(f"sort must be one of: {', '.join(SORT_MODES)}")
    if limit < 1 or limit > settings.max_page_limit:
        raise InvalidInput(f"limit must be between 1 and {settings.max_page_limit}")
    if offset < 0:
        raise InvalidInput("offset must be >= 0")


def _with_content():
    return [Caption.content.is_not(None), Caption.content != ""]


def _base_query():
    return (
        select(Caption)
        .where(*_with_content())
        .options(selectinload(Caption.humor_flavor), selectinload(Caption.image))
    )


async def _fetch_window(session: AsyncSession, sort: str, limit: int, offset: int) -> tuple[list[Caption], int]:
    q = _base_query()
    if sort == "oldest":
        q = q.order_by(Caption.created_datetime_utc.asc(), Caption.id.asc())
    elif sort == "most_liked":
        q = q.order_by(Caption.like_count.desc(), Caption.created_datetime_utc.desc(), Caption.id.asc())
    else:
        q = q.order_by(Caption.created_datetime_utc.desc(), Caption.id.asc())
    rows = list((await session.execute(q.offset(offset).limit(limit))).scalars().all())
    total = await session.scalar(select(func.count()).select_from(Caption).where(*_with_content()))
    return rows, int(total or 0)


async def _fetch_superset(session: AsyncSession) -> list[Caption]:
    q = _base_query().order_by(Caption.created_datetime_utc.desc(), Caption.id.asc()).limit(settings.random_superset_cap)
    return list((await session.execute(q)).scalars().all())


async def list_captions(
    session: AsyncSession,
    sort: str = "newest",
    limit: int = 20,
    offset: int = 0,
    voter_id: UUID | None = None,
    rng: random.Random | None = None,
) -> CaptionPage:
    validate_page(sort, limit, offset)
    try:
        if sort == "random":
            superset = await _fetch_superset(session)
            fisher_yates_shuffle(superset, rng)
            total = len(superset)
            window = page_window(superset, offset, limit)
        else:
            window, total = await _fetch_window(session, sort, limit, offset)
    except SQLAlchemyError as e:
        log.error("captions_fetch_failed", sort=sort, error=str(e))
        raise PersistenceFailure("Failed to fetch captions") from e

    # Only the returned window needs vote data
    ids = [c.id for c in window]
    counts = aggregate_votes(await vote_rows_for(session, ids), ids)
    mine = await voter_votes_for(session, voter_id, ids) if voter_id else {}

    captions = [
        CaptionPublic(
            id=c.id,
            content=c.content,
            like_count=c.like_count or 0,
            created_datetime_utc=c.created_datetime_utc,
            humor_flavor_id=c.humor_flavor_id,
            image_id=c.image_id,
            humor_flavor=FlavorRef.model_validate(c.humor_flavor) if c.humor_flavor else None,
            image=ImageRef.model_validate(c.image) if c.image else None,
            vote_counts=counts[c.id],
            user_vote=mine.get(c.id),
            total_votes=counts[c.id].total,
        )
        for c in window
    ]
    log.info("captions_listed", sort=sort, limit=limit, offset=offset, returned=len(captions), total=total)
    return CaptionPage(
        captions=captions,
        pagination=Pagination(total=total, limit=limit, offset=offset, has_more=has_more(offset, limit, total)),
    )

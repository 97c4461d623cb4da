"""
Platform-wide caption analytics.

``compute_caption_analytics`` is pure and recomputes everything from the rows
it is given. ``load_caption_analytics`` feeds it from the database, reading at
most ``settings.analytics_row_cap`` rows per table.
"""
from __future__ import annotations
from typing import Iterable, Mapping, NamedTuple
from uuid import UUID
import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from captionboard.config import settings
from captionboard.errors import PersistenceFailure
from captionboard.models.caption import Caption, HumorFlavor
from captionboard.models.vote import CaptionVote
from captionboard.schemas.analytics import (
    BasicStats, CaptionAnalytics, EngagementMetrics, HumorFlavorStats, TopCaption,
)
from captionboard.schemas.vote import VoteCounts
from captionboard.services.votes import count_votes, upvote_ratio

log = structlog.get_logger()

TOP_N = 10


class CaptionStat(NamedTuple):
    id: UUID
    content: str | None
    like_count: int | None
    humor_flavor_id: int | None


class FlavorInfo(NamedTuple):
    id: int
    slug: str | None
    description: str | None


def _flavor_stats(captions: list[CaptionStat], flavors: Mapping[int, FlavorInfo]) -> list[HumorFlavorStats]:
    groups: dict[int, dict] = {}
    for c in captions:
        if c.humor_flavor_id is None:
            continue
        g = groups.get(c.humor_flavor_id)
        if g is None:
            info = flavors.get(c.humor_flavor_id)
            g = groups[c.humor_flavor_id] = {
                "id": c.humor_flavor_id,
                "slug": (info.slug if info else None) or "unknown",
                "description": (info.description if info else None) or "No description",
                "caption_count": 0,
                "total_likes": 0,
            }
        g["caption_count"] += 1
        g["total_likes"] += c.like_count or 0

    stats = [
        HumorFlavorStats(
            **g,
            avg_likes=(g["total_likes"] / g["caption_count"]) if g["caption_count"] > 0 else 0.0,
        )
        for g in groups.values()
    ]
    stats.sort(key=lambda s: s.avg_likes, reverse=True)
    return stats[:TOP_N]


def _engagement(captions: list[CaptionStat]) -> EngagementMetrics:
    liked = [c.like_count for c in captions if (c.like_count or 0) > 0]
    total = len(captions)
    return EngagementMetrics(
        captions_with_likes=len(liked),
        avg_likes_per_caption=(sum(liked) / len(liked)) if liked else 0.0,
        max_likes=max(liked) if liked else 0,
        like_rate=(len(liked) / total * 100) if total > 0 else 0.0,
    )


def build_insights(basic: BasicStats, votes: VoteCounts, engagement: EngagementMetrics) -> list[str]:
    insights = [
        f"Out of {basic.total_captions} captions, {engagement.captions_with_likes} received likes "
        f"({engagement.like_rate:.1f}% like rate)",
        f"Top performing caption has {engagement.max_likes} likes",
    ]
    ratio = upvote_ratio(votes)
    decided = votes.upvotes + votes.downvotes
    if ratio is not None:
        insights.append(f"{decided} votes cast with {ratio * 100:.1f}% upvote ratio")
    insights.append(f"Average {engagement.avg_likes_per_caption:.1f} likes per engaging caption")
    return insights


def compute_caption_analytics(
    captions: Iterable[CaptionStat],
    vote_values: Iterable[int],
    flavors: Mapping[int, FlavorInfo] | None = None,
) -> CaptionAnalytics:
    captions = list(captions)
    flavors = flavors or {}
    vote_stats = count_votes(vote_values)

    basic = BasicStats(
        total_captions=len(captions),
        total_likes=sum(c.like_count or 0 for c in captions),
        total_votes=vote_stats.total,
    )
    engagement = _engagement(captions)

    ranked = sorted(captions, key=lambda c: c.like_count or 0, reverse=True)[:TOP_N]
    top = [
        TopCaption(
            id=c.id,
            content=c.content,
            like_count=c.like_count or 0,
            humor_flavor_id=c.humor_flavor_id,
            humor_flavor_slug=flavors[c.humor_flavor_id].slug if c.humor_flavor_id in flavors else None,
        )
        for c in ranked
    ]

    return CaptionAnalytics(
        basic_stats=basic,
        top_captions=top,
        humor_flavor_stats=_flavor_stats(captions, flavors),
        vote_stats=vote_stats,
        engagement_metrics=engagement,
        insights=build_insights(basic, vote_stats, engagement),
    )


async def load_caption_analytics(session: AsyncSession) -> CaptionAnalytics:
    cap = settings.analytics_row_cap
    try:
        caption_rows = (await session.execute(
            select(Caption.id, Caption.content, Caption.like_count, Caption.humor_flavor_id)
            .order_by(Caption.created_datetime_utc.desc())
            .limit(cap)
        )).all()
        vote_values = (await session.execute(select(CaptionVote.vote_value).limit(cap))).scalars().all()
        flavor_rows = (await session.execute(
            select(HumorFlavor.id, HumorFlavor.slug, HumorFlavor.description)
        )).all()
    except SQLAlchemyError as e:
        log.error("analytics_fetch_failed", error=str(e))
        raise PersistenceFailure("Failed to load analytics data") from e

    captions = [CaptionStat(*row) for row in caption_rows]
    flavors = {row[0]: FlavorInfo(*row) for row in flavor_rows}
    if len(captions) >= cap or len(vote_values) >= cap:
        log.warning("analytics_row_cap_reached", cap=cap, captions=len(captions), votes=len(vote_values))
    return compute_caption_analytics(captions, (int(v) for v in vote_values), flavors)

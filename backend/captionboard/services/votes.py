"""
Vote aggregation.

Counts are never stored: they are rebuilt from the raw ``caption_votes`` rows on
every read. ``bucket_for`` is the single bucketing rule; the client widget's
optimistic update goes through ``apply_vote_change`` so its local numbers match
what a fresh server-side recount would produce.
"""
from __future__ import annotations
from typing import Iterable, Literal
from uuid import UUID
from captionboard.schemas.vote import VoteCounts

Bucket = Literal["upvotes", "downvotes", "neutrals"]
VALID_VOTE_VALUES = (-1, 0, 1)


def bucket_for(value: int) -> Bucket:
    if value > 0:
        return "upvotes"
    if value < 0:
        return "downvotes"
    return "neutrals"


def count_votes(values: Iterable[int]) -> VoteCounts:
    counts = {"upvotes": 0, "downvotes": 0, "neutrals": 0}
    for v in values:
        counts[bucket_for(v)] += 1
    return VoteCounts(**counts)


def aggregate_votes(
    rows: Iterable[tuple[UUID, int]],
    caption_ids: Iterable[UUID] = (),
) -> dict[UUID, VoteCounts]:
    """
    Group ``(caption_id, vote_value)`` rows into per-caption counts.
    Every id in ``caption_ids`` is present in the result, zero-filled if it has no votes.
    """
    values: dict[UUID, list[int]] = {cid: [] for cid in caption_ids}
    for caption_id, value in rows:
        values.setdefault(caption_id, []).append(value)
    return {cid: count_votes(vs) for cid, vs in values.items()}


def upvote_ratio(counts: VoteCounts) -> float | None:
    """Share of up votes among non-neutral votes; None when there are none."""
    decided = counts.upvotes + counts.downvotes
    if decided == 0:
        return None
    return counts.upvotes / decided


def apply_vote_change(counts: VoteCounts, previous: int | None, new: int) -> VoteCounts:
    data = counts.model_dump()
    if previous is not None:
        data[bucket_for(previous)] = max(0, data[bucket_for(previous)] - 1)
    data[bucket_for(new)] += 1
    return VoteCounts(**data)

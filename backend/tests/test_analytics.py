from __future__ import annotations
import uuid
import pytest
from captionboard.services.analytics import CaptionStat, FlavorInfo, compute_caption_analytics


def _cap(likes, flavor=None, content="c"):
    return CaptionStat(id=uuid.uuid4(), content=content, like_count=likes, humor_flavor_id=flavor)


def test_engagement_example():
    """like counts [0, 0, 5, 10] -> 2 liked captions, avg 7.5, max 10, 50% like rate"""
    a = compute_caption_analytics([_cap(0), _cap(0), _cap(5), _cap(10)], [])
    em = a.engagement_metrics
    assert em.captions_with_likes == 2
    assert em.avg_likes_per_caption == pytest.approx(7.5)
    assert em.max_likes == 10
    assert em.like_rate == pytest.approx(50.0)
    assert a.basic_stats.total_captions == 4
    assert a.basic_stats.total_likes == 15


def test_no_captions_has_zero_rates():
    a = compute_caption_analytics([], [])
    assert a.basic_stats.total_captions == 0
    assert a.engagement_metrics.like_rate == 0
    assert a.engagement_metrics.avg_likes_per_caption == 0
    assert a.engagement_metrics.max_likes == 0
    assert a.humor_flavor_stats == []
    assert a.top_captions == []


def test_vote_breakdown_and_totals():
    a = compute_caption_analytics([_cap(1)], [1, 1, -1, 0, 0])
    assert a.vote_stats.upvotes == 2
    assert a.vote_stats.downvotes == 1
    assert a.vote_stats.neutrals == 2
    assert a.basic_stats.total_votes == 5
    assert any("66.7% upvote ratio" in s for s in a.insights)


def test_ratio_insight_omitted_without_decided_votes():
    a = compute_caption_analytics([_cap(3)], [0, 0])
    assert not any("upvote ratio" in s for s in a.insights)
    assert not any("nan" in s.lower() for s in a.insights)


def test_flavor_stats_grouped_and_sorted_by_average():
    flavors = {
        1: FlavorInfo(1, "dry", "Deadpan"),
        2: FlavorInfo(2, "pun", None),
    }
    caps = [_cap(2, 1), _cap(4, 1), _cap(10, 2), _cap(0, None), _cap(7, 3)]
    stats = compute_caption_analytics(caps, [], flavors).humor_flavor_stats

    assert [s.slug for s in stats] == ["pun", "unknown", "dry"]
    dry = next(s for s in stats if s.id == 1)
    assert dry.caption_count == 2
    assert dry.total_likes == 6
    assert dry.avg_likes == pytest.approx(3.0)
    pun = next(s for s in stats if s.id == 2)
    assert pun.description == "No description"


def test_top_captions_ordered_by_likes():
    caps = [_cap(n, content=f"c{n}") for n in (3, 12, 0, 7)]
    top = compute_caption_analytics(caps, []).top_captions
    assert [t.like_count for t in top] == [12, 7, 3, 0]


def test_serialized_keys_are_camel_case():
    body = compute_caption_analytics([_cap(1)], [1]).model_dump(by_alias=True)
    assert set(body) == {"basicStats", "topCaptions", "humorFlavorStats", "voteStats", "engagementMetrics", "insights"}
    assert "likeRate" in body["engagementMetrics"]
    assert "captionsWithLikes" in body["engagementMetrics"]


def test_recompute_is_deterministic():
    caps = [_cap(1, 1), _cap(4)]
    flavors = {1: FlavorInfo(1, "dry", None)}
    assert compute_caption_analytics(caps, [1, -1], flavors) == compute_caption_analytics(caps, [1, -1], flavors)

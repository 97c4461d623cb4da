from __future__ import annotations
import random
import uuid
import pytest
from captionboard.schemas.vote import VoteCounts
from captionboard.services.votes import aggregate_votes, apply_vote_change, bucket_for, count_votes, upvote_ratio


def test_example_counts_and_ratio():
    """[+1, +1, -1, 0] -> 2 up, 1 down, 1 neutral; ratio ignores neutrals"""
    counts = count_votes([1, 1, -1, 0])
    assert counts == VoteCounts(upvotes=2, downvotes=1, neutrals=1)
    assert counts.total == 4
    assert upvote_ratio(counts) == pytest.approx(2 / 3)
    assert round(upvote_ratio(counts) * 100, 1) == 66.7


def test_no_votes_is_all_zero_and_ratio_undefined():
    counts = count_votes([])
    assert counts == VoteCounts(upvotes=0, downvotes=0, neutrals=0)
    assert counts.total == 0
    assert upvote_ratio(counts) is None


def test_only_neutrals_ratio_undefined():
    assert upvote_ratio(count_votes([0, 0, 0])) is None


@pytest.mark.parametrize("value,bucket", [(1, "upvotes"), (5, "upvotes"), (-1, "downvotes"), (-3, "downvotes"), (0, "neutrals")])
def test_bucket_by_sign(value, bucket):
    assert bucket_for(value) == bucket


def test_aggregate_groups_per_caption_and_zero_fills():
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    rows = [(a, 1), (a, -1), (b, 0), (a, 1)]
    result = aggregate_votes(rows, [a, b, c])
    assert result[a] == VoteCounts(upvotes=2, downvotes=1, neutrals=0)
    assert result[b] == VoteCounts(upvotes=0, downvotes=0, neutrals=1)
    assert result[c] == VoteCounts()


def test_buckets_sum_to_record_count_for_random_sets():
    rng = random.Random(7)
    for _ in range(200):
        values = [rng.choice((-1, 0, 1)) for _ in range(rng.randint(0, 50))]
        counts = count_votes(values)
        assert counts.upvotes >= 0 and counts.downvotes >= 0 and counts.neutrals >= 0
        assert counts.upvotes + counts.downvotes + counts.neutrals == len(values)


def test_recount_is_idempotent():
    cid = uuid.uuid4()
    rows = [(cid, 1), (cid, 0), (cid, -1), (cid, -1)]
    assert aggregate_votes(rows) == aggregate_votes(rows)
    assert count_votes([1, 0, -1]) == count_votes([1, 0, -1])


def test_optimistic_update_matches_recount():
    """Replaying one voter's changes locally ends where a server recount would"""
    rng = random.Random(11)
    for _ in range(100):
        others = [rng.choice((-1, 0, 1)) for _ in range(rng.randint(0, 20))]
        local = count_votes(others)
        mine = None
        for _ in range(rng.randint(1, 8)):
            new = rng.choice((-1, 0, 1))
            local = apply_vote_change(local, mine, new)
            mine = new
        assert local == count_votes(others + [mine])


def test_apply_vote_change_does_not_mutate_input():
    before = VoteCounts(upvotes=1)
    after = apply_vote_change(before, 1, -1)
    assert before == VoteCounts(upvotes=1)
    assert after == VoteCounts(upvotes=0, downvotes=1)

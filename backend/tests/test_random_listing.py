from __future__ import annotations
import random
from collections import Counter
from captionboard.services.listing import fisher_yates_shuffle, has_more, page_window


def test_shuffle_is_a_permutation():
    items = list(range(50))
    shuffled = fisher_yates_shuffle(list(items), random.Random(1))
    assert sorted(shuffled) == items


def test_shuffle_is_deterministic_for_a_seed():
    a = fisher_yates_shuffle(list(range(30)), random.Random(42))
    b = fisher_yates_shuffle(list(range(30)), random.Random(42))
    assert a == b


def test_shuffle_handles_tiny_inputs():
    assert fisher_yates_shuffle([], random.Random(0)) == []
    assert fisher_yates_shuffle(["only"], random.Random(0)) == ["only"]


def test_windows_cover_superset_uniformly():
    """Over many shuffles every element shows up in each page about equally often"""
    superset = list(range(20))
    limit = 5
    trials = 4000
    rng = random.Random(2024)
    first, second = Counter(), Counter()
    for _ in range(trials):
        shuffled = fisher_yates_shuffle(list(superset), rng)
        first.update(page_window(shuffled, 0, limit))
        second.update(page_window(shuffled, limit, limit))

    expected = trials * limit / len(superset)  # 1000
    for element in superset:
        assert abs(first[element] - expected) < expected * 0.2
        assert abs(second[element] - expected) < expected * 0.2


def test_each_position_is_uniform():
    n, trials = 4, 8000
    rng = random.Random(99)
    at_zero = Counter()
    for _ in range(trials):
        at_zero[fisher_yates_shuffle(list(range(n)), rng)[0]] += 1
    for element in range(n):
        assert abs(at_zero[element] - trials / n) < trials / n * 0.1


def test_window_past_the_end_is_empty():
    items = list(range(10))
    assert page_window(items, 10, 5) == []
    assert page_window(items, 25, 5) == []
    assert has_more(10, 5, 10) is False
    assert has_more(0, 5, 10) is True
    assert has_more(5, 5, 10) is False

from __future__ import annotations

import random

import pytest

from chart_quiz.config import CATEGORY_NAMES
from chart_quiz.dataset import synthesize
from chart_quiz.errors import InvalidConfiguration

from conftest import SEEDS


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_values_sum_to_100(n):
    for seed in SEEDS:
        data = synthesize(n, random.Random(seed))
        assert len(data) == n
        assert sum(item.value for item in data) == 100


@pytest.mark.parametrize("n", [3, 4, 5, 10])
def test_values_within_default_bounds(n):
    for seed in SEEDS:
        data = synthesize(n, random.Random(seed))
        assert all(5 <= item.value <= 49 for item in data)
        assert all(isinstance(item.value, int) for item in data)


def test_two_categories_use_relaxed_bounds():
    seen_high = False
    for seed in SEEDS:
        data = synthesize(2, random.Random(seed))
        assert all(1 <= item.value <= 99 for item in data)
        seen_high = seen_high or any(item.value > 55 for item in data)
    # the [5, 49] clamp does not apply to two categories
    assert seen_high


def test_two_categories_spread_over_whole_range():
    datasets = [synthesize(2, random.Random(seed)) for seed in SEEDS]
    assert all(sum(item.value for item in data) == 100 for data in datasets)
    firsts = [data[0].value for data in datasets]
    assert min(firsts) < 10
    assert max(firsts) > 90
    # both halves of the range are drawn about equally often
    low = sum(1 for v in firsts if v < 50)
    assert 60 <= low <= 140


def test_two_categories_respect_custom_bounds():
    for seed in SEEDS:
        data = synthesize(2, random.Random(seed), minimum=30, maximum=60)
        assert all(30 <= item.value <= 60 for item in data)
        assert sum(item.value for item in data) == 100



def test_names_follow_alphabet_order(rng):
    data = synthesize(4, rng)
    assert [item.name for item in data] == list(CATEGORY_NAMES[:4])


def test_same_seed_same_dataset():
    assert synthesize(4, random.Random(7)) == synthesize(4, random.Random(7))


def test_custom_bounds_respected():
    for seed in SEEDS:
        data = synthesize(4, random.Random(seed), minimum=20, maximum=30)
        assert sum(item.value for item in data) == 100
        assert all(20 <= item.value <= 30 for item in data)


def test_tight_bounds_fill_exactly():
    data = synthesize(4, random.Random(0), minimum=25, maximum=25)
    assert [item.value for item in data] == [25, 25, 25, 25]


@pytest.mark.parametrize(
    "n, minimum, maximum",
    [
        (1, None, None),
        (0, None, None),
        (11, 1, 50),
        (21, None, None),
        (3, 40, 49),
        (4, 5, 20),
        (3, 30, 20),
        (3, -1, 49),
    ],
)
def test_invalid_configuration_rejected(n, minimum, maximum):
    with pytest.raises(InvalidConfiguration):
        synthesize(n, random.Random(0), minimum=minimum, maximum=maximum)


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        synthesize(30)

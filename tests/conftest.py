from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chart_quiz.models import CategoryValue  # noqa: E402


SEEDS = range(200)


def make_dataset(**values):
    """make_dataset(A=30, B=70) -> (CategoryValue("A", 30), CategoryValue("B", 70))"""
    return tuple(CategoryValue(name=name, value=value) for name, value in values.items())


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tied_dataset():
    return make_dataset(A=30, B=30, C=20, D=20)


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()

from __future__ import annotations

import random

import pytest

from chart_quiz.composer import compose_percentage_question, compose_rank_question
from chart_quiz.dataset import synthesize

from conftest import SEEDS, make_dataset


# ------------------------------------------------------------
# rank questions
# ------------------------------------------------------------
def test_rank_ties_keep_original_order(tied_dataset):
    for seed in range(20):
        q = compose_rank_question(tied_dataset, random.Random(seed), rank=1)
        assert q.correct_answer == "A"
    assert compose_rank_question(tied_dataset, rank=2).correct_answer == "B"
    assert compose_rank_question(tied_dataset, rank=3).correct_answer == "C"


def test_rank_answer_matches_sorted_position():
    for seed in SEEDS:
        rng = random.Random(seed)
        data = synthesize(4, rng)
        q = compose_rank_question(data, rng)
        ranked = sorted(data, key=lambda item: -item.value)
        assert 1 <= q.question_param <= 3
        assert q.correct_answer == ranked[q.question_param - 1].name


def test_rank_is_capped_by_category_count():
    data = make_dataset(A=60, B=40)
    ranks = {compose_rank_question(data, random.Random(s)).question_param for s in SEEDS}
    assert ranks == {1, 2}


def test_rank_covers_one_to_three():
    data = make_dataset(A=10, B=20, C=30, D=40)
    ranks = {compose_rank_question(data, random.Random(s)).question_param for s in SEEDS}
    assert ranks == {1, 2, 3}


def test_rank_options_in_original_order():
    data = make_dataset(A=10, B=40, C=30, D=20)
    q = compose_rank_question(data, rank=1)
    assert q.options == ("A", "B", "C", "D")
    assert q.correct_answer == "B"
    assert q.question_type == "rank"
    assert q.text == "1番目に割合が大きいと思う領域はどれですか？"


def test_rank_out_of_range_rejected(tied_dataset):
    with pytest.raises(ValueError):
        compose_rank_question(tied_dataset, rank=5)


# ------------------------------------------------------------
# percentage questions
# ------------------------------------------------------------
def test_percentage_answer_is_target_value():
    data = make_dataset(A=12, B=33, C=55)
    for seed in SEEDS:
        q = compose_percentage_question(data, random.Random(seed))
        value = {item.name: item.value for item in data}[q.target_category]
        assert q.correct_answer == f"{value}%"
        assert q.options == ()
        assert q.question_param is None
        assert q.question_type == "percentage"


def test_percentage_explicit_target():
    data = make_dataset(A=12, B=33, C=55)
    q = compose_percentage_question(data, target="C")
    assert q.correct_answer == "55%"
    assert q.text == "Cは全体の何パーセントぐらいだと思いますか？"


def test_percentage_unknown_target_rejected():
    with pytest.raises(ValueError):
        compose_percentage_question(make_dataset(A=50, B=50), target="Z")


def test_percentage_random_target_reaches_every_category():
    data = make_dataset(A=20, B=30, C=50)
    targets = {compose_percentage_question(data, random.Random(s)).target_category for s in SEEDS}
    assert targets == {"A", "B", "C"}


# ------------------------------------------------------------
# chart tag
# ------------------------------------------------------------
def test_chart_override_does_not_change_answer(tied_dataset):
    pie = compose_rank_question(tied_dataset, rank=2, chart="pie")
    bar = compose_rank_question(tied_dataset, rank=2, chart="bar")
    assert pie.chart_type == "pie"
    assert bar.chart_type == "bar"
    assert pie.correct_answer == bar.correct_answer


def test_random_chart_tag_uses_both_kinds(tied_dataset):
    charts = {compose_rank_question(tied_dataset, random.Random(s)).chart_type for s in SEEDS}
    assert charts == {"pie", "bar"}


def test_unknown_chart_rejected(tied_dataset):
    with pytest.raises(ValueError):
        compose_percentage_question(tied_dataset, chart="line")

"""
composer.py
======================

データセットから 1 問分の Question を組み立てる。

- compose_percentage_question(): 「X は全体の何パーセントか」（自由入力）
- compose_rank_question(): 「n 番目に割合が大きい領域はどれか」（選択式）

グラフ種別 (pie / bar) は見た目だけの区別で、正解には影響しない。
"""

from __future__ import annotations

import random
from typing import Optional

from .models import CHART_TYPES, ChartType, Dataset, Question

MAX_RANK = 3


def _pick_chart(rng, chart: Optional[ChartType]) -> ChartType:
    if chart is not None:
        if chart not in CHART_TYPES:
            raise ValueError(f"不明なグラフ種別です: {chart!r}")
        return chart
    return rng.choice(CHART_TYPES)


# ------------------------------------------------------------
# パーセンテージ問題
# ------------------------------------------------------------
def compose_percentage_question(
    data: Dataset,
    rng: Optional[random.Random] = None,
    *,
    target: Optional[str] = None,
    chart: Optional[ChartType] = None,
) -> Question:
    """
    問うカテゴリを 1 つ選び、その値を "<値>%" として正解にする。

    target を指定すればそのカテゴリを問う。省略時はランダム。
    選択肢は空（自由入力）。
    """
    rng = rng or random

    if target is None:
        subject = rng.choice(data)
    else:
        subject = next((item for item in data if item.name == target), None)
        if subject is None:
            raise ValueError(f"カテゴリ {target!r} はデータにありません。")

    return Question(
        data=tuple(data),
        chart_type=_pick_chart(rng, chart),
        question_type="percentage",
        question_param=None,
        options=(),
        correct_answer=f"{subject.value}%",
        target_category=subject.name,
    )


# ------------------------------------------------------------
# ランク問題
# ------------------------------------------------------------
def compose_rank_question(
    data: Dataset,
    rng: Optional[random.Random] = None,
    *,
    rank: Optional[int] = None,
    chart: Optional[ChartType] = None,
    max_rank: int = MAX_RANK,
) -> Question:
    """
    値の降順で rank 番目のカテゴリ名を正解にする。

    - 同値は元の順序を保つ（sorted は安定ソート）ので正解は一意に決まる
    - rank 省略時は 1..min(カテゴリ数, max_rank) から一様に選ぶ
    - 選択肢は元の順序のカテゴリ名（順位が選択肢から漏れないように）
    """
    rng = rng or random

    limit = min(len(data), max_rank)
    if rank is None:
        rank = rng.randint(1, limit)
    elif not 1 <= rank <= len(data):
        raise ValueError(f"rank は 1〜{len(data)} で指定してください: {rank}")

    ranked = sorted(data, key=lambda item: item.value, reverse=True)

    return Question(
        data=tuple(data),
        chart_type=_pick_chart(rng, chart),
        question_type="rank",
        question_param=rank,
        options=tuple(item.name for item in data),
        correct_answer=ranked[rank - 1].name,
    )

"""
dataset.py
===========================

グラフ用のランダムデータ（合計 100%）を生成するモジュール。

生成ポリシー:
- 全カテゴリに最小値を割り当てる
- 残り (100 - カテゴリ数 × 最小値) を 1 ずつ、まだ最大値に達していない
  カテゴリからランダムに選んで加算する
- 既定の上下限は [5, 49]。2 カテゴリの場合のみ [1, 99] に緩める
- 2 カテゴリは 1 つ目を上下限内から一様に引き、2 つ目を残りとする

5% 未満の領域はグラフ上で読み取れず、50% 以上の領域があると
ランク問題が自明になるため、この範囲に収める。
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .config import CATEGORY_NAMES, TOTAL_PERCENT, QuizConfig, validate_bounds
from .models import CategoryValue, Dataset

_DEFAULTS = QuizConfig()


def default_bounds(category_count: int) -> Tuple[int, int]:
    return _DEFAULTS.bounds_for(category_count)


def synthesize(
    category_count: int,
    rng: Optional[random.Random] = None,
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Dataset:
    """
    category_count 個のカテゴリ (A, B, C, ...) に合計 100 の整数値を割り当てる。

    minimum / maximum を省略した場合はカテゴリ数に応じた既定値を使う。
    合計 100 に到達できない設定は、生成を始める前に InvalidConfiguration。
    """
    rng = rng or random

    default_min, default_max = default_bounds(category_count)
    minimum = default_min if minimum is None else minimum
    maximum = default_max if maximum is None else maximum
    validate_bounds(category_count, minimum, maximum)

    # 2 カテゴリは 1 つ目を一様に引き、残りを 2 つ目にする
    if category_count == 2:
        first = rng.randint(
            max(minimum, TOTAL_PERCENT - maximum),
            min(maximum, TOTAL_PERCENT - minimum),
        )
        values = [first, TOTAL_PERCENT - first]
        return tuple(
            CategoryValue(name=name, value=value)
            for name, value in zip(CATEGORY_NAMES, values)
        )

    values: List[int] = [minimum] * category_count
    remaining = TOTAL_PERCENT - category_count * minimum

    # 1 回の加算で remaining は必ず 1 減るので、最大 100 回で止まる
    while remaining > 0:
        open_slots = [i for i, v in enumerate(values) if v < maximum]
        if not open_slots:
            break
        values[rng.choice(open_slots)] += 1
        remaining -= 1

    # 全カテゴリが最大値に達しても残りがある場合（設定検査を通れば起きない）
    for i in range(category_count):
        if remaining <= 0:
            break
        add = min(remaining, maximum - values[i])
        values[i] += add
        remaining -= add

    return tuple(
        CategoryValue(name=name, value=value)
        for name, value in zip(CATEGORY_NAMES, values)
    )

"""
quiz_set.py
===========================

1 回分のクイズセット（既定 20 問）を組み立てるモジュール。

構成:
- 円グラフ: パーセンテージ問題 5 問 + ランク問題 5 問
- 帯グラフ: パーセンテージ問題 5 問 + ランク問題 5 問
- 各問題のデータは毎回独立に生成する
  （パーセンテージ問題は 3〜4 カテゴリ、ランク問題は 4 カテゴリ）
- 最後に全体をシャッフルし、グラフ種別と問題種別を混ぜる

set_id は画面表示・ログ用の小さな整数で、一意性は保証しない。
"""

from __future__ import annotations

import json
import logging
import random
from typing import List, Optional

from .composer import compose_percentage_question, compose_rank_question
from .config import QuizConfig
from .dataset import synthesize
from .models import CHART_TYPES, Question, QuizSet

logger = logging.getLogger(__name__)


def build_quiz_set(
    rng: Optional[random.Random] = None,
    config: Optional[QuizConfig] = None,
) -> QuizSet:
    """
    グラフ種別ごとに問題を生成し、シャッフルした QuizSet を返す。
    config が生成不能な構成なら InvalidConfiguration。
    """
    rng = rng or random
    config = config or QuizConfig()
    config.validate()

    questions: List[Question] = []
    low, high = config.percentage_category_range

    for chart in CHART_TYPES:
        for _ in range(config.percentage_per_chart):
            count = rng.randint(low, high)
            data = synthesize(count, rng, **_bounds_kwargs(config, count))
            questions.append(compose_percentage_question(data, rng, chart=chart))

        for _ in range(config.rank_per_chart):
            count = config.rank_category_count
            data = synthesize(count, rng, **_bounds_kwargs(config, count))
            questions.append(
                compose_rank_question(data, rng, chart=chart, max_rank=config.max_rank)
            )

    rng.shuffle(questions)
    set_id = rng.randint(*config.set_id_range)

    logger.info("Built quiz set %d with %d questions", set_id, len(questions))
    return QuizSet(set_id=set_id, questions=tuple(questions))


def quiz_set_from_json(text: str) -> QuizSet:
    """
    保存した問題セット (QuizSet.to_dict() の JSON) を読み込む。
    壊れている場合は ValueError。
    """
    try:
        return QuizSet.from_dict(json.loads(text))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"問題セットを読み込めません: {e}") from e


def _bounds_kwargs(config: QuizConfig, category_count: int) -> dict:
    minimum, maximum = config.bounds_for(category_count)
    return {"minimum": minimum, "maximum": maximum}

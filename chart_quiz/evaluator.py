"""
evaluator.py
======================

解答の正誤判定。

- パーセンテージ問題: 数値として読み、正解との差が ±5 ポイント以内なら正解
- ランク問題: 文字列の完全一致（大文字小文字・空白も区別）

利用者の入力は何が来るか分からないので、数値として読めない入力は
例外にせず「不正解」として扱う。evaluate() は必ず bool を返す。
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from .models import Question

logger = logging.getLogger(__name__)

TOLERANCE = 5.0


def _parse_percentage(text) -> Optional[float]:
    """"40", "40%", " 40.5 % " などを数値にする。読めなければ None。"""
    if not isinstance(text, str):
        return None
    text = text.strip()
    if text.endswith("%"):
        text = text[:-1].rstrip()
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


# ------------------------------------------------------------
# 正誤判定
# ------------------------------------------------------------
def evaluate(question: Question, submitted_answer: str, tolerance: float = TOLERANCE) -> bool:
    """submitted_answer が question の正解とみなせるかを返す。"""
    if question.question_type == "percentage":
        user_value = _parse_percentage(submitted_answer)
        correct_value = _parse_percentage(question.correct_answer)
        if user_value is None or correct_value is None:
            logger.debug(
                "Unparsable percentage answer %r (correct %r)",
                submitted_answer,
                question.correct_answer,
            )
            return False

        difference = abs(user_value - correct_value)
        is_correct = difference <= tolerance
        logger.debug(
            "Percentage answer %s vs %s: difference=%s tolerance=%s correct=%s",
            user_value,
            correct_value,
            difference,
            tolerance,
            is_correct,
        )
        return is_correct

    return submitted_answer == question.correct_answer


# ------------------------------------------------------------
# 入力欄の検証
# ------------------------------------------------------------
def parse_percentage_input(raw: str) -> Tuple[Optional[str], Optional[str]]:
    """
    パーセンテージ入力欄の値を検証する。

    戻り値: (回答文字列, エラーメッセージ)
        ""       → (None, None)          未入力
        "abc"    → (None, "数値を入力してください")
        "120"    → (None, "0から100の間の数値を入力してください")
        "25"     → ("25%", None)
    """
    if raw is None or raw.strip() == "":
        return None, None

    value = _parse_percentage(raw)
    if value is None:
        return None, "数値を入力してください"
    if value < 0 or value > 100:
        return None, "0から100の間の数値を入力してください"

    return f"{_format_number(value)}%", None

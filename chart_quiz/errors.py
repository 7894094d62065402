"""
errors.py
======================

chart_quiz パッケージの例外定義。

- ChartQuizError: パッケージ共通の基底例外
- InvalidConfiguration: 合計 100 に到達できない生成設定など、
  データ生成を始める前に検出できる設定ミス

利用者の自由入力（パーセンテージ回答など）の不正は例外にしない。
evaluator は常に True / False を返す。
"""

from __future__ import annotations


class ChartQuizError(Exception):
    """chart_quiz の基底例外"""


class InvalidConfiguration(ChartQuizError, ValueError):
    """
    データ生成設定が不正な場合に送出する。

    例:
    - カテゴリ数 × 最小値 > 100
    - カテゴリ数 × 最大値 < 100
    - カテゴリ名のアルファベットを超えるカテゴリ数
    """

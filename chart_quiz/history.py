"""
history.py
=====================================

1 セッション分の解答履歴を管理するモジュール。

- 解答結果 (QuizResult) を順番に追加する（追加後は変更しない）
- 正解数・正解率・合計時間のサマリ
- 1 行 1 問の表 (pandas.DataFrame)。その問題までの累積正解率と累積所要時間を含む
- CSV 出力（Excel で文字化けしないよう BOM 付き UTF-8）

永続化はしない。ブラウザセッションが終われば消える。
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from .models import CHART_LABELS, QuizResult, describe_dataset

ANONYMOUS = "匿名"

CSV_COLUMNS = [
    "ユーザー名",
    "問題番号",
    "グラフタイプ",
    "問題文",
    "データ詳細",
    "ユーザー回答",
    "正解",
    "正誤",
    "問題所要時間(秒)",
    "全体正解率",
    "全体所要時間(秒)",
]


class ResultHistory:
    """
    解答履歴。append() 以外で内容を変えない。
    """

    def __init__(self, user_name: str = ""):
        self.user_name = user_name
        self._results: List[QuizResult] = []

    # ---------------------------------------------------------
    # 履歴を追加
    # ---------------------------------------------------------
    def append(self, result: QuizResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> Tuple[QuizResult, ...]:
        return tuple(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[QuizResult]:
        return iter(self.results)

    # ---------------------------------------------------------
    # サマリ（結果画面用）
    # ---------------------------------------------------------
    def summary(self) -> Dict[str, Any]:
        total = len(self._results)
        correct = sum(1 for r in self._results if r.is_correct)
        return {
            "correct": correct,
            "total": total,
            "accuracy": (correct / total * 100.0) if total else 0.0,
            "total_time": sum(r.time_spent for r in self._results),
        }

    def display_name(self) -> str:
        if self._results and self._results[0].user_name:
            return self._results[0].user_name
        return self.user_name or ANONYMOUS

    # ---------------------------------------------------------
    # 表形式
    # ---------------------------------------------------------
    def to_dataframe(self) -> pd.DataFrame:
        """
        1 行 1 問の DataFrame を返す。

        全体正解率 (%) と 全体所要時間(秒) は、その問題までの累積値。
        """
        if not self._results:
            return pd.DataFrame(columns=CSV_COLUMNS)

        user_name = self.display_name()
        rows = []
        for r in self._results:
            rows.append(
                {
                    "ユーザー名": user_name,
                    "問題番号": r.question_number,
                    "グラフタイプ": CHART_LABELS.get(r.chart_type, r.chart_type),
                    "問題文": r.question_text,
                    "データ詳細": describe_dataset(r.data),
                    "ユーザー回答": r.user_answer,
                    "正解": r.correct_answer,
                    "正誤": "正解" if r.is_correct else "不正解",
                    "問題所要時間(秒)": round(r.time_spent, 2),
                    "_correct": int(r.is_correct),
                    "_time": r.time_spent,
                }
            )

        df = pd.DataFrame(rows)
        answered = pd.Series(range(1, len(df) + 1), index=df.index)
        df["全体正解率"] = (df["_correct"].cumsum() / answered * 100.0).round(1)
        df["全体所要時間(秒)"] = df["_time"].cumsum().round(1)
        return df[CSV_COLUMNS]

    def to_csv(self) -> bytes:
        """ダウンロード用の CSV（BOM 付き UTF-8）"""
        df = self.to_dataframe()
        if not df.empty:
            df = df.copy()
            df["全体正解率"] = df["全体正解率"].map(lambda v: f"{v:.1f}%")
        return df.to_csv(index=False).encode("utf-8-sig")

    def export_filename(self, today: Optional[date] = None) -> str:
        today = today or date.today()
        return f"quiz-results-{self.display_name()}-{today.isoformat()}.csv"

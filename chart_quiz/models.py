"""
models.py
======================

クイズで扱うデータ構造の定義。

- CategoryValue: カテゴリ名と割合 (%) の組
- Dataset: CategoryValue のタプル（合計 100）
- Question: 1 問分のデータ・グラフ種別・問題種別・選択肢・正解
- QuizSet: セット ID と問題列
- QuizResult: 1 問分の解答記録

いずれも生成後は変更しない（frozen dataclass）。
to_dict() / from_dict() で JSON に保存・復元できる。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

from .config import TOTAL_PERCENT

ChartType = Literal["pie", "bar"]
QuestionType = Literal["percentage", "rank"]

CHART_TYPES: Tuple[ChartType, ...] = ("pie", "bar")
QUESTION_TYPES: Tuple[QuestionType, ...] = ("percentage", "rank")

CHART_LABELS: Dict[str, str] = {"pie": "円グラフ", "bar": "帯グラフ"}


@dataclass(frozen=True)
class CategoryValue:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryValue":
        _require_dict(data, "カテゴリ")
        value = data["value"]
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"カテゴリの値は 0 以上の整数にしてください: {value!r}")
        return cls(name=str(data["name"]), value=value)


Dataset = Tuple[CategoryValue, ...]


def _require_dict(data: Any, label: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"{label}の形式が不正です: {data!r}")


def dataset_from_list(items: List[Dict[str, Any]]) -> Dataset:
    """
    保存データからデータセットを復元する。
    名前の重複・合計が 100 にならないデータは ValueError。
    """
    if not isinstance(items, list):
        raise ValueError(f"データの形式が不正です: {items!r}")
    data = tuple(CategoryValue.from_dict(d) for d in items)

    names = [item.name for item in data]
    if len(set(names)) != len(names):
        raise ValueError(f"カテゴリ名が重複しています: {names}")
    total = sum(item.value for item in data)
    if total != TOTAL_PERCENT:
        raise ValueError(f"値の合計が {TOTAL_PERCENT} ではありません: {total}")
    return data


def describe_dataset(data: Dataset) -> str:
    """CSV 出力用の表記。例: "A:30%; B:70%" """
    return "; ".join(f"{item.name}:{item.value}%" for item in data)


@dataclass(frozen=True)
class Question:
    """
    1 問分の問題。

    question_param:
        rank 問題では「何番目に大きいか」(1 始まり)、percentage 問題では None
    target_category:
        percentage 問題で問うカテゴリ名
    options:
        rank 問題ではカテゴリ名（元の順序）、percentage 問題では空
    correct_answer:
        percentage 問題は "<値>%"、rank 問題はカテゴリ名
    """

    data: Dataset
    chart_type: ChartType
    question_type: QuestionType
    correct_answer: str
    question_param: Optional[int] = None
    options: Tuple[str, ...] = ()
    target_category: Optional[str] = None

    @property
    def text(self) -> str:
        """画面・CSV に表示する問題文"""
        if self.question_type == "percentage":
            target = self.target_category or "この領域"
            return f"{target}は全体の何パーセントぐらいだと思いますか？"
        return f"{self.question_param}番目に割合が大きいと思う領域はどれですか？"

    @property
    def chart_label(self) -> str:
        return CHART_LABELS.get(self.chart_type, self.chart_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [item.to_dict() for item in self.data],
            "chart_type": self.chart_type,
            "question_type": self.question_type,
            "question_param": self.question_param,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "target_category": self.target_category,
        }

    def validate(self) -> None:
        """
        正解・選択肢がデータと整合しているかを検査する。
        読み込んだ問題セットの正解が書き換えられていれば ValueError。
        """
        names = tuple(item.name for item in self.data)

        if self.question_type == "percentage":
            target = next((item for item in self.data if item.name == self.target_category), None)
            if target is None:
                raise ValueError(f"問うカテゴリがデータにありません: {self.target_category!r}")
            if self.correct_answer != f"{target.value}%":
                raise ValueError(f"正解がデータと一致しません: {self.correct_answer!r}")
            if self.options:
                raise ValueError("パーセンテージ問題に選択肢は不要です。")
            return

        if self.options != names:
            raise ValueError(f"選択肢がカテゴリ名と一致しません: {self.options}")
        if self.question_param is None or not 1 <= self.question_param <= len(names):
            raise ValueError(f"順位が不正です: {self.question_param!r}")
        ranked = sorted(self.data, key=lambda item: item.value, reverse=True)
        if self.correct_answer != ranked[self.question_param - 1].name:
            raise ValueError(f"正解がデータと一致しません: {self.correct_answer!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        """保存データから復元し、validate() を通す。"""
        _require_dict(data, "問題")
        chart_type = data.get("chart_type")
        question_type = data.get("question_type")
        if chart_type not in CHART_TYPES:
            raise ValueError(f"不明なグラフ種別です: {chart_type!r}")
        if question_type not in QUESTION_TYPES:
            raise ValueError(f"不明な問題種別です: {question_type!r}")

        param = data.get("question_param")
        options = data.get("options", [])
        if not isinstance(options, list):
            raise ValueError(f"選択肢の形式が不正です: {options!r}")

        question = cls(
            data=dataset_from_list(data.get("data", [])),
            chart_type=chart_type,
            question_type=question_type,
            correct_answer=str(data["correct_answer"]),
            question_param=int(param) if param is not None else None,
            options=tuple(options),
            target_category=data.get("target_category"),
        )
        question.validate()
        return question


@dataclass(frozen=True)
class QuizSet:
    set_id: int
    questions: Tuple[Question, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.questions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "set_id": self.set_id,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizSet":
        _require_dict(data, "問題セット")
        questions = data.get("questions", [])
        if not isinstance(questions, list):
            raise ValueError(f"問題リストの形式が不正です: {questions!r}")
        return cls(
            set_id=int(data["set_id"]),
            questions=tuple(Question.from_dict(q) for q in questions),
        )


@dataclass(frozen=True)
class QuizResult:
    """1 問分の解答記録。time_spent は秒。"""

    question_number: int
    chart_type: ChartType
    question_text: str
    data: Dataset
    user_answer: str
    correct_answer: str
    is_correct: bool
    time_spent: float
    user_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question_number": self.question_number,
            "chart_type": self.chart_type,
            "question_text": self.question_text,
            "data": [item.to_dict() for item in self.data],
            "user_answer": self.user_answer,
            "correct_answer": self.correct_answer,
            "is_correct": self.is_correct,
            "time_spent": self.time_spent,
            "user_name": self.user_name,
        }

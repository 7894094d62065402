"""
session.py
======================

クイズ 1 回分の進行状態を持つクラス。

画面側 (app.py) が st.session_state に 1 つだけ保持し、
「スタート → 回答 → 次の問題 → ... → 結果」の流れを管理する。
問題生成・採点そのものは quiz_set / evaluator に任せる。

時刻は clock（既定 time.monotonic）から取るので、テストでは差し替えられる。
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from .config import QuizConfig
from .evaluator import evaluate
from .history import ResultHistory
from .models import Question, QuizResult, QuizSet
from .quiz_set import build_quiz_set

logger = logging.getLogger(__name__)


class QuizSession:
    """
    主な操作:
    - start(): ユーザー名を受け取り、新しいクイズセットで開始
    - submit(): 現在の問題に回答し、QuizResult を履歴に追加
    - next_question(): 次の問題へ（最後なら completed になる）
    - reset(): クイズセットと履歴を破棄
    """

    def __init__(
        self,
        config: Optional[QuizConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or QuizConfig()
        self.rng = rng
        self.clock = clock
        self.reset()

    # ------------------------------------------------------------
    # 状態
    # ------------------------------------------------------------
    @property
    def started(self) -> bool:
        return self.quiz_set is not None

    @property
    def current_question(self) -> Optional[Question]:
        if self.quiz_set is None or self.completed or not self.quiz_set.questions:
            return None
        return self.quiz_set.questions[self.current_index]

    @property
    def is_answered(self) -> bool:
        return self.current_result is not None

    @property
    def total_questions(self) -> int:
        return len(self.quiz_set) if self.quiz_set is not None else 0

    @property
    def progress_ratio(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.current_index / self.total_questions

    def total_elapsed(self) -> float:
        """開始から（完了していれば完了時点まで）の経過秒数"""
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self.clock()
        return end - self._started_at

    # ------------------------------------------------------------
    # 操作
    # ------------------------------------------------------------
    def start(self, user_name: str, quiz_set: Optional[QuizSet] = None) -> QuizSet:
        user_name = (user_name or "").strip()
        if not user_name:
            raise ValueError("ユーザー名を入力してください。")

        self.reset()
        self.user_name = user_name
        self.quiz_set = quiz_set or build_quiz_set(self.rng, self.config)
        self.history = ResultHistory(user_name=user_name)
        now = self.clock()
        self._started_at = now
        self._question_started_at = now

        logger.info(
            "Quiz started: user=%s set=%d questions=%d",
            user_name,
            self.quiz_set.set_id,
            len(self.quiz_set),
        )
        return self.quiz_set

    def submit(self, answer: str) -> QuizResult:
        question = self.current_question
        if question is None:
            raise RuntimeError("回答できる問題がありません。")
        if self.is_answered:
            raise RuntimeError("この問題はすでに回答済みです。")

        result = QuizResult(
            question_number=self.current_index + 1,
            chart_type=question.chart_type,
            question_text=question.text,
            data=question.data,
            user_answer=answer,
            correct_answer=question.correct_answer,
            is_correct=evaluate(question, answer, self.config.tolerance),
            time_spent=self.clock() - self._question_started_at,
            user_name=self.user_name,
        )
        self.history.append(result)
        self.current_result = result
        return result

    def next_question(self) -> Optional[Question]:
        if self.quiz_set is None or self.completed:
            return None

        if self.current_index < len(self.quiz_set) - 1:
            self.current_index += 1
            self.current_result = None
            self._question_started_at = self.clock()
            return self.current_question

        self.completed = True
        self._finished_at = self.clock()
        summary = self.history.summary()
        logger.info(
            "Quiz completed: user=%s correct=%d/%d",
            self.user_name,
            summary["correct"],
            summary["total"],
        )
        return None

    def reset(self) -> None:
        self.user_name = ""
        self.quiz_set: Optional[QuizSet] = None
        self.current_index = 0
        self.current_result: Optional[QuizResult] = None
        self.completed = False
        self.history = ResultHistory()
        self._started_at: Optional[float] = None
        self._question_started_at: Optional[float] = None
        self._finished_at: Optional[float] = None

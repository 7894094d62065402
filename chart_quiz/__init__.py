"""
chart_quiz パッケージ
======================

このパッケージは、グラフ読み取りクイズアプリの内部ロジックを提供する。

主な役割:
- 設定管理（config）
- ランダムデータ生成（dataset）
- 問題の組み立て（composer）
- クイズセットの生成（quiz_set）
- 正誤判定（evaluator）
- 進行状態と解答履歴（session / history）
- グラフ描画（charts）と UI コンポーネント（ui）

app.py は Streamlit UI のみを担当し、内部ロジックはすべて本パッケージから呼ぶ。
ui は streamlit を読み込むため、ここでは再エクスポートしない。
"""

from .config import AppConfig, QuizConfig
from .errors import ChartQuizError, InvalidConfiguration
from .models import CategoryValue, Question, QuizResult, QuizSet
from .dataset import synthesize
from .composer import compose_percentage_question, compose_rank_question
from .quiz_set import build_quiz_set
from .evaluator import evaluate, parse_percentage_input
from .history import ResultHistory
from .session import QuizSession

__all__ = [
    "AppConfig",
    "QuizConfig",
    "ChartQuizError",
    "InvalidConfiguration",
    "CategoryValue",
    "Question",
    "QuizResult",
    "QuizSet",
    "synthesize",
    "compose_percentage_question",
    "compose_rank_question",
    "build_quiz_set",
    "evaluate",
    "parse_percentage_input",
    "ResultHistory",
    "QuizSession",
]

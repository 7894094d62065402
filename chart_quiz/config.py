"""
config.py
=========

アプリ全体で利用する設定値を一元管理する。
クイズ構成（問題数・カテゴリ数・パーセンテージの上下限・採点許容誤差）、
ログレベル、config.toml のパスはすべてこのモジュールを通じて取得する。

config.toml の例:

    [app]
    name = "グラフ読み取りクイズ"
    log_level = "DEBUG"

    [quiz]
    percentage_per_chart = 5
    rank_per_chart = 5
    percentage_category_range = [3, 4]
    rank_category_count = 4
    min_percent = 5
    max_percent = 49
    tolerance = 5
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import toml

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# 基本定義
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT_DIR / "config.toml"

# カテゴリ名は固定の順序付きアルファベット
CATEGORY_NAMES: Tuple[str, ...] = ("A", "B", "C", "D", "E", "F", "G", "H", "I", "J")
TOTAL_PERCENT = 100

LOG_LEVEL_ENV = "CHART_QUIZ_LOG_LEVEL"


def validate_bounds(category_count: int, minimum: int, maximum: int) -> None:
    """
    カテゴリ数と上下限の組み合わせで合計 100 が作れるかを検査する。
    作れない場合は InvalidConfiguration を送出する。
    """
    if category_count < 2:
        raise InvalidConfiguration(
            f"カテゴリ数は 2 以上が必要です: {category_count}"
        )
    if category_count > len(CATEGORY_NAMES):
        raise InvalidConfiguration(
            f"カテゴリ数は {len(CATEGORY_NAMES)} 以下にしてください: {category_count}"
        )
    if minimum < 0 or minimum > maximum:
        raise InvalidConfiguration(
            f"上下限が不正です: min={minimum}, max={maximum}"
        )
    if category_count * minimum > TOTAL_PERCENT:
        raise InvalidConfiguration(
            f"最小値 {minimum}% × {category_count} カテゴリが {TOTAL_PERCENT} を超えます"
        )
    if category_count * maximum < TOTAL_PERCENT:
        raise InvalidConfiguration(
            f"最大値 {maximum}% × {category_count} カテゴリでは {TOTAL_PERCENT} に届きません"
        )


# ------------------------------------------------------------
# QuizConfig
# ------------------------------------------------------------

@dataclass
class QuizConfig:
    """
    クイズセットの構成。

    既定値は「円グラフ・帯グラフそれぞれにパーセンテージ問題 5 問と
    ランク問題 5 問、合計 20 問」。
    """

    # ---------- 問題数 ----------
    percentage_per_chart: int = 5
    rank_per_chart: int = 5

    # ---------- カテゴリ数 ----------
    percentage_category_range: Tuple[int, int] = (3, 4)
    rank_category_count: int = 4

    # ---------- データ生成の上下限 ----------
    min_percent: int = 5
    max_percent: int = 49
    # 2 カテゴリの場合は上限を緩める
    two_category_min: int = 1
    two_category_max: int = 99

    # ---------- 出題・採点 ----------
    tolerance: float = 5.0
    max_rank: int = 3
    set_id_range: Tuple[int, int] = (1, 10)

    @property
    def total_questions(self) -> int:
        return 2 * (self.percentage_per_chart + self.rank_per_chart)

    def bounds_for(self, category_count: int) -> Tuple[int, int]:
        """カテゴリ数に応じた (最小値, 最大値) を返す。"""
        if category_count == 2:
            return self.two_category_min, self.two_category_max
        return self.min_percent, self.max_percent

    def validate(self) -> None:
        """生成不能な構成なら InvalidConfiguration を送出する。"""
        if self.percentage_per_chart < 0 or self.rank_per_chart < 0:
            raise InvalidConfiguration("問題数は 0 以上にしてください。")

        low, high = self.percentage_category_range
        if low > high:
            raise InvalidConfiguration(
                f"percentage_category_range が不正です: {self.percentage_category_range}"
            )
        for n in range(low, high + 1):
            validate_bounds(n, *self.bounds_for(n))
        validate_bounds(self.rank_category_count, *self.bounds_for(self.rank_category_count))

        if self.tolerance < 0:
            raise InvalidConfiguration(f"tolerance は 0 以上にしてください: {self.tolerance}")
        if self.max_rank < 1:
            raise InvalidConfiguration(f"max_rank は 1 以上にしてください: {self.max_rank}")

        id_low, id_high = self.set_id_range
        if id_low < 1 or id_low > id_high:
            raise InvalidConfiguration(f"set_id_range が不正です: {self.set_id_range}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizConfig":
        """
        config.toml の [quiz] セクションから生成する。
        未知のキーは無視し、型変換できない値は InvalidConfiguration にする。
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown quiz option: %s", key)
                continue
            try:
                if key in ("percentage_category_range", "set_id_range"):
                    low, high = value
                    kwargs[key] = (int(low), int(high))
                elif key == "tolerance":
                    kwargs[key] = float(value)
                else:
                    kwargs[key] = int(value)
            except (TypeError, ValueError) as e:
                raise InvalidConfiguration(f"{key} の値が不正です: {value!r}") from e
        return cls(**kwargs)


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    アプリ設定クラス。

    - config.toml の読み取り（無ければ既定値）
    - ログレベル（環境変数 CHART_QUIZ_LOG_LEVEL が最優先）
    - クイズ構成 (QuizConfig)
    """

    app_name: str = "グラフ読み取りクイズ"
    log_level: str = "INFO"
    config_path: Path = CONFIG_PATH
    quiz: QuizConfig = field(default_factory=QuizConfig)

    # ============================================================
    # 初期化処理
    # ============================================================

    def __post_init__(self):
        raw = self._load_toml()

        app_section = raw.get("app")
        if isinstance(app_section, dict):
            self.app_name = str(app_section.get("name", self.app_name))
            self.log_level = str(app_section.get("log_level", self.log_level))

        quiz_section = raw.get("quiz")
        if isinstance(quiz_section, dict):
            self.quiz = QuizConfig.from_dict(quiz_section)

        env_level = os.environ.get(LOG_LEVEL_ENV)
        if env_level:
            self.log_level = env_level

        self.quiz.validate()

    # ============================================================
    # 内部関数
    # ============================================================

    def _load_toml(self) -> Dict[str, Any]:
        """
        config.toml を読み込む。
        ファイルが無ければ空 dict、壊れていれば警告を出して空 dict。
        """
        path = Path(self.config_path)
        if not path.exists():
            return {}

        try:
            return toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Could not read %s, using defaults: %s", path, e)
            return {}

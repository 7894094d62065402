"""
logging_config.py
======================

アプリ全体のロガー初期化。

各モジュールは logging.getLogger(__name__) を使い、
ハンドラの設定はここで 1 回だけ行う（Streamlit は再実行のたびに
app.py を評価し直すため、ハンドラの二重登録を避ける）。
"""

from __future__ import annotations

import logging
from typing import Union

LOGGER_NAME = "chart_quiz"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(
    name: str = LOGGER_NAME, level: Union[int, str] = logging.INFO
) -> logging.Logger:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)
    return logger

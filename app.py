"""
app.py
======================

グラフ読み取りクイズ（Streamlit）エントリーポイント。

特徴:
- スタート → 問題 20 問 → 結果 の 3 画面構成
- 円グラフ / 帯グラフ × パーセンテージ問題 / ランク問題
- 結果は CSV でダウンロード可能（累積正解率・累積所要時間つき）

起動:
    streamlit run app.py

前提:
- config.toml があれば [app] / [quiz] を読み込む（無ければ既定値）
- 環境変数 CHART_QUIZ_LOG_LEVEL でログレベルを上書きできる
"""

from __future__ import annotations

import logging

import streamlit as st

from chart_quiz.config import AppConfig
from chart_quiz.logging_config import setup_logger
from chart_quiz.quiz_set import quiz_set_from_json
from chart_quiz.session import QuizSession
from chart_quiz.ui import (
    inject_css,
    render_quiz_page,
    render_results_page,
    render_start_page,
)

logger = logging.getLogger("chart_quiz.app")


# ----------------------------------------------------------------------
#  アプリ設定読み込み
# ----------------------------------------------------------------------
def load_app_config() -> AppConfig:
    """AppConfig をセッションに保持して返す。"""
    if "app_config" not in st.session_state:
        cfg = AppConfig()
        setup_logger(level=cfg.log_level)
        st.session_state["app_config"] = cfg
    return st.session_state["app_config"]


# ----------------------------------------------------------------------
#  QuizSession のラッパー
# ----------------------------------------------------------------------
def get_session_state() -> QuizSession:
    """QuizSession をセッションに保持して返す。"""
    if "quiz_session" not in st.session_state:
        cfg = load_app_config()
        st.session_state["quiz_session"] = QuizSession(config=cfg.quiz)
    return st.session_state["quiz_session"]


def set_page(page: str) -> None:
    st.session_state["page"] = page


def get_page() -> str:
    return st.session_state.get("page", "start")


# ----------------------------------------------------------------------
#  ページ: スタート
# ----------------------------------------------------------------------
def render_start() -> None:
    cfg = load_app_config()
    session = get_session_state()

    ui_result = render_start_page(cfg.app_name, cfg.quiz.total_questions)
    if not ui_result["clicked_start"]:
        return

    quiz_set = None
    if ui_result["uploaded_quiz_set"]:
        try:
            quiz_set = quiz_set_from_json(ui_result["uploaded_quiz_set"])
        except ValueError as e:
            logger.warning("Rejected uploaded quiz set: %s", e)
            st.error("問題セットのファイルを読み込めませんでした。新しい問題で開始します。")

    try:
        session.start(ui_result["user_name"], quiz_set=quiz_set)
    except ValueError as e:
        st.error(str(e))
        return

    set_page("quiz")
    st.rerun()


# ----------------------------------------------------------------------
#  ページ: クイズ
# ----------------------------------------------------------------------
def render_quiz() -> None:
    session = get_session_state()
    if not session.started:
        set_page("start")
        st.rerun()

    ui_result = render_quiz_page(session)

    if ui_result["clicked_submit"] and ui_result["answer"] is not None:
        session.submit(ui_result["answer"])
        st.rerun()
    elif ui_result["clicked_next"]:
        session.next_question()
        if session.completed:
            set_page("results")
        st.rerun()


# ----------------------------------------------------------------------
#  ページ: 結果
# ----------------------------------------------------------------------
def render_results() -> None:
    session = get_session_state()
    ui_result = render_results_page(session)

    if ui_result["clicked_restart"]:
        session.reset()
        set_page("start")
        st.rerun()


# ----------------------------------------------------------------------
#  メイン
# ----------------------------------------------------------------------
def main() -> None:
    st.set_page_config(
        page_title="グラフ読み取りクイズ",
        page_icon="📊",
        layout="centered",
    )

    cfg = load_app_config()
    st.title(cfg.app_name)
    inject_css()

    page = get_page()

    if page == "quiz":
        render_quiz()
    elif page == "results":
        render_results()
    else:
        set_page("start")
        render_start()


if __name__ == "__main__":
    main()

"""
ui.py
======================

Streamlit ベースの UI コンポーネントをまとめたモジュール。

責務:
- スタート画面（ユーザー名入力）
- 問題画面（グラフ・問題文・回答入力・正誤表示）
- 結果画面（正解数・正解率・問題別結果・CSV ダウンロード）

ここでは「見た目」と「ユーザー操作の入力」だけを扱い、
出題・採点・履歴の更新は app.py 側から QuizSession を通じて行う。

各 render_* は「何が押されたか」「どんな回答が入力されたか」を dict で返す。
"""

from __future__ import annotations

import html
import json
from typing import Any, Dict, Optional

import streamlit as st

from .charts import build_chart
from .evaluator import parse_percentage_input
from .models import Question, QuizResult
from .session import QuizSession

# ----------------------------------------------------------------------
#  配色
# ----------------------------------------------------------------------

THEME: Dict[str, str] = {
    "text": "#1c1c1e",
    "surface": "#f2f2f7",
    "border": "#d1d1d6",
    "correct": "#34c759",
    "incorrect": "#ff3b30",
}


def _generate_css(theme: Dict[str, str]) -> str:
    return f"""
    <style>
    .cq-question-box {{
        background: {theme['surface']};
        padding: 1rem;
        border-radius: 12px;
        border: 1px solid {theme['border']};
        font-size: 1.1rem;
        line-height: 1.6;
        margin: 0.5rem 0 0.75rem 0;
    }}

    .cq-feedback {{
        padding: 0.9rem;
        border-radius: 10px;
        font-size: 0.95rem;
        margin-top: 0.75rem;
    }}

    .cq-feedback-correct {{
        background: {theme['correct']}22;
        border: 1px solid {theme['correct']};
    }}

    .cq-feedback-incorrect {{
        background: {theme['incorrect']}22;
        border: 1px solid {theme['incorrect']};
    }}

    .cq-score {{
        text-align: center;
        font-size: 3rem;
        font-weight: 700;
    }}

    .cq-footer {{
        margin-top: 0.75rem;
        font-size: 0.8rem;
        color: {theme['text']}aa;
        text-align: center;
    }}
    </style>
    """


def inject_css() -> None:
    st.markdown(_generate_css(THEME), unsafe_allow_html=True)


# ----------------------------------------------------------------------
#  スタート画面
# ----------------------------------------------------------------------
def render_start_page(app_name: str, total_questions: int) -> Dict[str, Any]:
    """
    戻り値:
        {"user_name": str, "uploaded_quiz_set": Optional[str], "clicked_start": bool}
    """
    st.markdown(f"## {app_name}へようこそ！")
    st.write(
        "このクイズでは、円グラフまたは帯グラフが表示され、"
        "そのグラフから情報を読み取って回答していただきます。"
    )
    st.write(
        "「○○は全体の何パーセントか」を推測する問題と、"
        "「n番目に大きい領域」を選ぶ問題があります。"
    )
    st.write(f"全{total_questions}問あります。準備ができたらスタートボタンを押してください。")

    user_name = st.text_input(
        "ユーザー名を入力してください（結果出力に使用されます）",
        key="cq_user_name",
        placeholder="ユーザー名を入力",
    )

    uploaded_text: Optional[str] = None
    with st.expander("保存した問題セットで解く"):
        uploaded = st.file_uploader("問題セット (JSON)", type="json", key="cq_upload")
        if uploaded is not None:
            uploaded_text = uploaded.getvalue().decode("utf-8")

    clicked_start = st.button(
        "クイズをスタート",
        key="cq_start",
        type="primary",
        disabled=user_name.strip() == "",
        width="stretch",
    )
    return {
        "user_name": user_name,
        "uploaded_quiz_set": uploaded_text,
        "clicked_start": clicked_start,
    }


# ----------------------------------------------------------------------
#  問題画面
# ----------------------------------------------------------------------
def render_quiz_page(session: QuizSession) -> Dict[str, Any]:
    """
    戻り値:
        {
          "answer": Optional[str],   # 検証済みの回答（未入力・不正なら None）
          "clicked_submit": bool,
          "clicked_next": bool,
        }
    """
    q = session.current_question
    if q is None:
        st.error("問題がまだ選択されていません。")
        return {"answer": None, "clicked_submit": False, "clicked_next": False}

    idx = session.current_index
    answered = session.is_answered

    # ----------------------------------------
    # 進捗
    # ----------------------------------------
    col_left, col_right = st.columns([3, 1])
    with col_left:
        st.markdown(f"**問題 {idx + 1} / {session.total_questions}**")
    with col_right:
        st.caption(f"セット {session.quiz_set.set_id}")
    st.progress(session.progress_ratio)

    # ----------------------------------------
    # グラフ
    # ----------------------------------------
    with st.container(border=True):
        st.markdown(f"#### {q.chart_label}を読み取ってください")
        st.plotly_chart(build_chart(q), key=f"cq_chart_{idx}", width="stretch")

    # ----------------------------------------
    # 問題文・回答
    # ----------------------------------------
    st.markdown(question_box_html(q), unsafe_allow_html=True)

    answer: Optional[str] = None
    if q.question_type == "percentage":
        raw = st.text_input(
            "パーセンテージを入力（例: 25）",
            key=f"cq_input_{idx}",
            disabled=answered,
        )
        answer, error = parse_percentage_input(raw)
        if error:
            st.caption(f":red[{error}]")
    else:
        answer = st.radio(
            "選択肢",
            list(q.options),
            index=None,
            key=f"cq_choice_{idx}",
            disabled=answered,
            label_visibility="collapsed",
        )

    # ----------------------------------------
    # 正誤表示（回答済みの場合のみ）
    # ----------------------------------------
    if answered:
        _render_feedback(session)

    clicked_submit = False
    clicked_next = False
    if not answered:
        clicked_submit = st.button(
            "回答する",
            key=f"cq_submit_{idx}",
            type="primary",
            disabled=answer is None,
            width="stretch",
        )
    else:
        clicked_next = st.button(
            "次の問題へ",
            key=f"cq_next_{idx}",
            type="primary",
            width="stretch",
        )

    return {
        "answer": answer,
        "clicked_submit": clicked_submit,
        "clicked_next": clicked_next,
    }


def question_box_html(question: Question) -> str:
    """問題文の枠。問題文は読み込んだ JSON 由来なのでエスケープする。"""
    return f"<div class='cq-question-box'>{html.escape(question.text)}</div>"


def feedback_html(result: QuizResult) -> str:
    answer = html.escape(result.correct_answer)
    if result.is_correct:
        css = "cq-feedback cq-feedback-correct"
        message = f"正解です！実際の値は「{answer}」でした。"
    else:
        css = "cq-feedback cq-feedback-incorrect"
        message = f"不正解です。正解は「{answer}」です。"
    return f"<div class='{css}'>{message}</div>"


def _render_feedback(session: QuizSession) -> None:
    result = session.current_result
    if result is None:
        return
    st.markdown(feedback_html(result), unsafe_allow_html=True)


# ----------------------------------------------------------------------
#  結果画面
# ----------------------------------------------------------------------
def render_results_page(session: QuizSession) -> Dict[str, Any]:
    """
    戻り値:
        {"clicked_restart": bool}
    """
    history = session.history
    summary = history.summary()

    st.markdown("## クイズ結果")
    st.markdown(
        f"<div class='cq-score'>{summary['correct']} / {summary['total']}</div>",
        unsafe_allow_html=True,
    )

    col1, col2 = st.columns(2)
    col1.metric("正解率", f"{summary['accuracy']:.1f}%")
    col2.metric("合計時間", f"{session.total_elapsed():.1f}秒")

    st.markdown("### 問題別結果")
    df = history.to_dataframe()
    st.dataframe(
        df[["問題番号", "グラフタイプ", "問題文", "ユーザー回答", "正解", "正誤", "問題所要時間(秒)"]],
        hide_index=True,
        width="stretch",
    )

    col_dl, col_json = st.columns(2)
    with col_dl:
        st.download_button(
            "結果をダウンロード",
            data=history.to_csv(),
            file_name=history.export_filename(),
            mime="text/csv",
            width="stretch",
        )
    with col_json:
        if session.quiz_set is not None:
            st.download_button(
                "問題セットを保存 (JSON)",
                data=json.dumps(session.quiz_set.to_dict(), ensure_ascii=False, indent=2),
                file_name=f"quiz-set-{session.quiz_set.set_id}.json",
                mime="application/json",
                width="stretch",
            )

    clicked_restart = st.button("もう一度挑戦", key="cq_restart", type="primary", width="stretch")

    st.markdown(
        "<div class='cq-footer'>グラフ読み取りクイズ</div>",
        unsafe_allow_html=True,
    )
    return {"clicked_restart": clicked_restart}

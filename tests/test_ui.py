from __future__ import annotations

from chart_quiz.composer import compose_percentage_question
from chart_quiz.models import QuizResult
from chart_quiz.ui import THEME, _generate_css, feedback_html, question_box_html

from conftest import make_dataset

MARKUP_NAME = "<img src=x onerror=alert(1)>"


def _result(correct_answer, is_correct):
    return QuizResult(
        question_number=1,
        chart_type="pie",
        question_text="",
        data=make_dataset(A=30, B=70),
        user_answer="",
        correct_answer=correct_answer,
        is_correct=is_correct,
        time_spent=1.0,
    )


def test_question_box_escapes_category_name():
    data = make_dataset(**{"A": 40, MARKUP_NAME: 60})
    question = compose_percentage_question(data, target=MARKUP_NAME, chart="pie")
    box = question_box_html(question)
    assert "<img" not in box
    assert "&lt;img src=x onerror=alert(1)&gt;" in box
    assert box.startswith("<div class='cq-question-box'>")


def test_feedback_escapes_correct_answer():
    for is_correct in (True, False):
        html_text = feedback_html(_result(MARKUP_NAME, is_correct))
        assert "<img" not in html_text
        assert "&lt;img" in html_text


def test_feedback_marks_correctness():
    assert "cq-feedback-correct" in feedback_html(_result("30%", True))
    assert "cq-feedback-incorrect" in feedback_html(_result("30%", False))
    assert "30%" in feedback_html(_result("30%", False))


def test_theme_keys_are_all_used_by_css():
    css = _generate_css(THEME)
    for key in THEME:
        assert THEME[key] in css

from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from chart_quiz.history import CSV_COLUMNS, ResultHistory
from chart_quiz.models import QuizResult

from conftest import make_dataset


def _result(number, correct, seconds, chart="pie", user="hanako"):
    return QuizResult(
        question_number=number,
        chart_type=chart,
        question_text="Aは全体の何パーセントぐらいだと思いますか？",
        data=make_dataset(A=30, B=70),
        user_answer="30%",
        correct_answer="30%" if correct else "70%",
        is_correct=correct,
        time_spent=seconds,
        user_name=user,
    )


@pytest.fixture
def history():
    h = ResultHistory(user_name="hanako")
    h.append(_result(1, True, 2.0))
    h.append(_result(2, False, 3.0, chart="bar"))
    h.append(_result(3, True, 1.5))
    h.append(_result(4, True, 0.5))
    return h


def test_summary(history):
    summary = history.summary()
    assert summary["correct"] == 3
    assert summary["total"] == 4
    assert summary["accuracy"] == pytest.approx(75.0)
    assert summary["total_time"] == pytest.approx(7.0)


def test_empty_summary():
    summary = ResultHistory().summary()
    assert summary == {"correct": 0, "total": 0, "accuracy": 0.0, "total_time": 0}


def test_dataframe_has_cumulative_columns(history):
    df = history.to_dataframe()
    assert list(df.columns) == CSV_COLUMNS
    assert list(df["全体正解率"]) == [100.0, 50.0, 66.7, 75.0]
    assert list(df["全体所要時間(秒)"]) == [2.0, 5.0, 6.5, 7.0]
    assert list(df["グラフタイプ"]) == ["円グラフ", "帯グラフ", "円グラフ", "円グラフ"]
    assert list(df["正誤"]) == ["正解", "不正解", "正解", "正解"]
    assert df["データ詳細"].iloc[0] == "A:30%; B:70%"


def test_csv_export(history):
    raw = history.to_csv()
    assert raw.startswith(b"\xef\xbb\xbf")

    rows = list(csv.reader(io.StringIO(raw.decode("utf-8-sig"))))
    assert rows[0] == CSV_COLUMNS
    assert len(rows) == 5
    assert rows[2][0] == "hanako"
    assert rows[2][9] == "50.0%"


def test_empty_history_exports_header_only():
    rows = list(csv.reader(io.StringIO(ResultHistory().to_csv().decode("utf-8-sig"))))
    assert rows == [CSV_COLUMNS]


def test_results_are_read_only_snapshot(history):
    snapshot = history.results
    history.append(_result(5, False, 1.0))
    assert len(snapshot) == 4
    assert len(history) == 5


def test_export_filename(history):
    assert history.export_filename(date(2025, 6, 23)) == "quiz-results-hanako-2025-06-23.csv"
    assert ResultHistory().export_filename(date(2025, 6, 23)) == "quiz-results-匿名-2025-06-23.csv"

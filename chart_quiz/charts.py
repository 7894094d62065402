"""
charts.py
======================

問題データを plotly の図にする。

- 円グラフ: 領域ごとにカテゴリ名だけを表示
- 帯グラフ: 100% 積み上げの横棒 1 本

どちらも数値・パーセンテージは表示しない（ホバーでもカテゴリ名のみ）。
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models import Dataset, Question

COLORS = [
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
    "#8AC926",
    "#1982C4",
    "#6A4C93",
    "#FF595E",
]

NAME_ONLY_HOVER = "%{label}<extra></extra>"


def _to_frame(data: Dataset) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "name": [item.name for item in data],
            "value": [item.value for item in data],
            "row": ["全体"] * len(data),
        }
    )


def build_pie_chart(data: Dataset) -> go.Figure:
    df = _to_frame(data)
    fig = px.pie(
        df,
        names="name",
        values="value",
        color="name",
        color_discrete_sequence=COLORS,
        category_orders={"name": list(df["name"])},
    )
    fig.update_traces(
        sort=False,
        direction="clockwise",
        textinfo="label",
        hovertemplate=NAME_ONLY_HOVER,
    )
    fig.update_layout(height=360, margin=dict(l=10, r=10, t=10, b=10))
    return fig


def build_band_chart(data: Dataset) -> go.Figure:
    df = _to_frame(data)
    fig = px.bar(
        df,
        x="value",
        y="row",
        color="name",
        orientation="h",
        text="name",
        color_discrete_sequence=COLORS,
        category_orders={"name": list(df["name"])},
    )
    fig.update_traces(
        textposition="inside",
        texttemplate="%{text}",
        hovertemplate="%{text}<extra></extra>",
    )
    fig.update_layout(
        barmode="stack",
        xaxis=dict(visible=False, range=[0, 100]),
        yaxis=dict(visible=False),
        height=160,
        margin=dict(l=10, r=10, t=10, b=10),
        legend=dict(orientation="h"),
        legend_title_text="",
    )
    return fig


def build_chart(question: Question) -> go.Figure:
    """question.chart_type に応じた図を返す。"""
    if question.chart_type == "pie":
        return build_pie_chart(question.data)
    return build_band_chart(question.data)

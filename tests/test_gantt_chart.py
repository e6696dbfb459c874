"""
Gantt 차트 Figure 및 색상 테스트
"""

from __future__ import annotations

from unittest.mock import patch

import pandas as pd
import pytest

from gantt_timeline.planning.layout import build_gantt_layout
from gantt_timeline.ui.colors import (
    COMPLETED_COLOR,
    DEFAULT_COLOR,
    KIND_COLORS,
    bar_color,
    bar_hover_color,
    hex_to_rgb,
    tint,
    to_rgba,
)
from gantt_timeline.ui.gantt_chart import NBSP, build_gantt_figure, render_gantt_chart
from gantt_timeline.ui.plotly_helpers import visible_x_range


def _bar_shapes(fig):
    return [s for s in fig.layout.shapes if s.type == "rect" and s.yref == "y"]


# ============================================================
# 색상
# ============================================================


def test_bar_color_by_kind_and_completion():
    assert bar_color("milestone") == KIND_COLORS["milestone"]
    assert bar_color("task", completed=True) == COMPLETED_COLOR
    assert bar_color("unknown") == DEFAULT_COLOR


def test_hover_color_is_darker():
    base = hex_to_rgb(KIND_COLORS["deliverable"])
    hover = hex_to_rgb(bar_hover_color("deliverable"))

    assert all(h <= b for h, b in zip(hover, base))
    assert hover != base


def test_color_helpers():
    assert hex_to_rgb("#fff") == (255, 255, 255)
    assert tint("#000000", 1.5) == "#808080"
    assert to_rgba("#3B82F6", 0.5) == "rgba(59, 130, 246, 0.5)"


# ============================================================
# Figure
# ============================================================


def test_figure_has_one_bar_per_visible_row(today, nested_items):
    layout = build_gantt_layout(nested_items, "day", today=today, expanded=None)

    fig = build_gantt_figure(layout)

    bars = _bar_shapes(fig)
    # 태스크는 마감일만 있어도 1일 막대로 그려짐
    assert len(bars) == int(layout.rows["visible"].sum()) == 4
    assert bars[0].x0 == pytest.approx(layout.rows.iloc[0]["left"])
    # 완료된 마일스톤은 초록색
    assert bars[0].fillcolor.startswith("rgba(16, 185, 129")


def test_figure_rows_are_indented_by_level(today, nested_items):
    assert NBSP == "\u00a0"

    layout = build_gantt_layout(nested_items, "day", today=today, expanded=None)

    fig = build_gantt_figure(layout)

    assert list(fig.layout.yaxis.ticktext) == [
        "Kickoff",
        NBSP * 4 + "Project brief",
        NBSP * 8 + "Interviews",
        "Design",
    ]
    assert fig.layout.yaxis.range[0] > fig.layout.yaxis.range[1]


def test_day_view_highlights_today_column(today, nested_items):
    layout = build_gantt_layout(nested_items, "day", today=today)

    fig = build_gantt_figure(layout)

    x0 = layout.today_column * layout.grid.cell_width
    today_rects = [
        s for s in fig.layout.shapes
        if s.type == "rect" and s.yref == "paper" and s.x0 == x0
        and s.x1 == x0 + layout.grid.cell_width and "248, 113, 113" in str(s.fillcolor)
    ]
    assert len(today_rects) == 1


def test_week_view_draws_today_line(today, nested_items):
    layout = build_gantt_layout(nested_items, "week", today=today)

    fig = build_gantt_figure(layout)

    lines = [
        s for s in fig.layout.shapes
        if s.type == "line" and s.x0 == layout.today_position and s.line.width == 2
    ]
    assert len(lines) == 1


def test_month_view_uses_month_ticks_and_year_headers(today, nested_items):
    layout = build_gantt_layout(nested_items, "month", today=today)

    fig = build_gantt_figure(layout)

    assert list(fig.layout.xaxis.ticktext) == [h.label for h in layout.grid.headers.secondary]
    header_texts = [a.text for a in fig.layout.annotations if a.yref == "paper"]
    assert "<b>2024</b>" in header_texts
    assert "<b>2025</b>" in header_texts


def test_initial_range_places_today_in_view(today):
    items = [
        {"_id": "m1", "name": "Long", "calculatedStartDate": "2024-11-01",
         "calculatedEndDate": "2025-01-31"}
    ]
    layout = build_gantt_layout(items, "day", today=today)

    fig = build_gantt_figure(layout, viewport_width=600)

    start, end = fig.layout.xaxis.range
    assert end - start == 600
    assert start <= layout.today_position <= end


def test_visible_x_range_clamps_to_total_width():
    assert visible_x_range(0, 1200, 500) == (0.0, 500.0)
    assert visible_x_range(900, 600, 1000) == (400, 1000)
    assert visible_x_range(-50, 600, 1000) == (0.0, 600.0)


# ============================================================
# Streamlit 렌더링
# ============================================================


def test_render_empty_layout_shows_info(today):
    layout = build_gantt_layout([], "auto", today=today)

    with patch("gantt_timeline.ui.gantt_chart.st") as mock_st:
        render_gantt_chart(layout)

    mock_st.info.assert_called_once()
    mock_st.plotly_chart.assert_not_called()


def test_render_layout_calls_plotly_chart(today, nested_items):
    layout = build_gantt_layout(nested_items, "auto", today=today)

    with patch("gantt_timeline.ui.gantt_chart.st") as mock_st:
        render_gantt_chart(layout, key="chart")

    mock_st.plotly_chart.assert_called_once()
    _, kwargs = mock_st.plotly_chart.call_args
    assert kwargs["key"] == "chart"

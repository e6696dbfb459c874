"""
Gantt 레이아웃 빌더 테스트

GanttLayoutBuilder와 build_gantt_layout의 단계 연결과 행 생성을 검증합니다.
"""

from __future__ import annotations

import pandas as pd
import pytest

from gantt_timeline.domain.exceptions import TimelineError, ValidationError
from gantt_timeline.domain.models import ROW_COLUMNS, KIND_TASK, TimedItem
from gantt_timeline.planning.geometry import calculate_bar_position
from gantt_timeline.planning.layout import (
    GanttContext,
    GanttLayoutBuilder,
    build_gantt_layout,
)


def test_layout_rows_follow_expanded_state(today, nested_items):
    collapsed = build_gantt_layout(nested_items, "day", today=today)
    expanded = build_gantt_layout(nested_items, "day", today=today, expanded={"m1", "d1"})
    everything = build_gantt_layout(nested_items, "day", today=today, expanded=None)

    assert list(collapsed.rows["item_id"]) == ["m1", "m2"]
    assert list(expanded.rows["item_id"]) == ["m1", "d1", "t1", "m2"]
    assert list(everything.rows["item_id"]) == ["m1", "d1", "t1", "m2"]
    assert list(expanded.rows["level"]) == [0, 1, 2, 0]


def test_layout_rows_columns(today, nested_items):
    layout = build_gantt_layout(nested_items, "week", today=today)

    assert list(layout.rows.columns) == ROW_COLUMNS
    first = layout.rows.iloc[0]
    assert bool(first["has_children"]) is True
    assert bool(first["expanded"]) is False
    assert bool(first["completed"]) is True


def test_layout_bars_match_geometry(today, nested_items):
    layout = build_gantt_layout(nested_items, "day", today=today)
    row = layout.rows.iloc[1]

    expected = calculate_bar_position(
        row["start"], row["end"], layout.window.min_date,
        layout.grid.cell_width, layout.grid.interval,
    )
    assert row["left"] == expected.left
    assert row["width"] == expected.width


def test_today_marker_uses_same_today(today, nested_items):
    layout = build_gantt_layout(nested_items, "day", today=today)

    assert layout.today == today
    expected = (today - layout.window.min_date).days * layout.grid.cell_width
    assert layout.today_position == expected
    assert layout.today_column == (today - layout.window.min_date).days


def test_week_view_has_no_today_column(today, nested_items):
    layout = build_gantt_layout(nested_items, "week", today=today)

    assert layout.today_column == -1
    assert layout.grid.interval == 7


def test_due_date_only_task_is_drawn_as_one_day(today):
    task = TimedItem("t1", "Review", KIND_TASK, end=pd.Timestamp("2025-01-20"))

    layout = build_gantt_layout([task], "day", today=today)
    row = layout.rows.iloc[0]

    assert bool(row["visible"]) is True
    assert row["width"] == layout.grid.cell_width
    assert row["start"] is None or pd.isna(row["start"])


def test_item_without_dates_is_not_visible(today):
    layout = build_gantt_layout(
        [TimedItem("m1", "Someday"), TimedItem("m2", "Dated",
         start=pd.Timestamp("2025-01-10"), end=pd.Timestamp("2025-01-12"))],
        "day",
        today=today,
    )

    assert list(layout.rows["visible"]) == [False, True]
    assert list(layout.visible_rows()["item_id"]) == ["m2"]


def test_raw_records_are_normalized(today, milestone_records):
    layout = build_gantt_layout(milestone_records, "auto", today=today, expanded=None)

    assert list(layout.rows["kind"]) == ["milestone", "deliverable", "task", "milestone"]
    assert not layout.is_empty


def test_empty_items_give_default_window_and_no_rows(today):
    layout = build_gantt_layout([], "month", today=today)

    assert layout.is_empty
    assert list(layout.rows.columns) == ROW_COLUMNS
    assert layout.window.min_date == pd.Timestamp("2024-11-01")
    assert len(layout.grid.labels) == 6


def test_builder_with_context(today, nested_items):
    builder = GanttLayoutBuilder(GanttContext(view_mode="Month", today=today))

    layout = builder.build(nested_items)

    assert layout.view_mode == "month"
    assert layout.grid.interval == 30


def test_invalid_view_mode_propagates_validation_error(today):
    with pytest.raises(ValidationError):
        build_gantt_layout([], "year", today=today)


def test_unexpected_failure_is_wrapped(today, nested_items, monkeypatch):
    def _boom(*args, **kwargs):
        raise ValueError("broken label generator")

    monkeypatch.setattr("gantt_timeline.planning.layout.generate_date_labels", _boom)

    with pytest.raises(TimelineError, match="broken label generator"):
        build_gantt_layout(nested_items, "day", today=today)

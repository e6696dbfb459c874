"""Planning layer exports for the Gantt timeline."""

from .date_range import calculate_date_range
from .geometry import (
    calculate_bar_position,
    calculate_today_position,
    initial_scroll_left,
    today_column_index,
)
from .labels import build_headers, generate_date_labels, group_consecutive
from .layout import GanttContext, GanttLayoutBuilder, build_gantt_layout

__all__ = [
    "calculate_date_range",
    "generate_date_labels",
    "build_headers",
    "group_consecutive",
    "calculate_bar_position",
    "calculate_today_position",
    "today_column_index",
    "initial_scroll_left",
    "GanttContext",
    "GanttLayoutBuilder",
    "build_gantt_layout",
]

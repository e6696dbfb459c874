"""Pixel geometry for bars and the today marker.

Bars and the today marker share ``_offset_pixels`` so that a bar starting
today lines up with the marker on the same axis.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import pandas as pd

from ..core.config import CONFIG, DAILY_INTERVAL, TimelineConfig
from ..domain.dates import days_between, resolve_today, to_timestamp
from ..domain.exceptions import ValidationError
from ..domain.models import BarGeometry
from ..domain.validation import validate_grid_inputs

EMPTY_BAR = BarGeometry(left=0.0, width=0.0)


def _require_min_date(min_date: Any) -> pd.Timestamp:
    ts = to_timestamp(min_date)
    if ts is None:
        raise ValidationError(f"축 시작일이 올바르지 않습니다: {min_date!r}")
    return ts


def _offset_pixels(
    date: pd.Timestamp, min_date: pd.Timestamp, cell_width: float, interval: float
) -> float:
    pixels_per_day = cell_width / interval
    return max(0.0, days_between(min_date, date)) * pixels_per_day


def calculate_bar_position(
    start: Any,
    end: Any,
    min_date: Any,
    cell_width: float,
    interval: float,
    *,
    config: Optional[TimelineConfig] = None,
) -> BarGeometry:
    """
    항목의 기간을 픽셀 좌표(left, width)로 변환합니다.

    - 시작일이나 종료일이 없으면 (0, 0): 호출 측에서 그리지 않음
    - 축 시작일보다 앞선 시작일은 축 시작 위치로 잘림
    - 기간이 0일 이하이면 1일로 간주
    - 너비는 최소 셀 너비의 10%

    Args:
        start: 시작일
        end: 종료일
        min_date: 축 시작일
        cell_width: 셀 너비 (픽셀)
        interval: 셀 하나의 일수

    Returns:
        BarGeometry(left, width)

    Examples:
        >>> calculate_bar_position("2025-01-10", "2025-01-10", "2025-01-03", 60, 1)
        BarGeometry(left=420.0, width=60.0)
    """
    config = config or CONFIG.timeline
    validate_grid_inputs(cell_width, interval)
    axis_start = _require_min_date(min_date)

    start_ts = to_timestamp(start)
    end_ts = to_timestamp(end)
    if start_ts is None or end_ts is None:
        return EMPTY_BAR

    pixels_per_day = cell_width / interval
    duration = max(config.min_bar_duration_days, days_between(start_ts, end_ts))

    left = _offset_pixels(start_ts, axis_start, cell_width, interval)
    width = max(cell_width * config.min_bar_width_ratio, duration * pixels_per_day)
    return BarGeometry(left=left, width=width)


def calculate_today_position(
    min_date: Any,
    cell_width: float,
    interval: float,
    *,
    today: Any = None,
) -> float:
    """
    오늘(자정 기준) 표시선의 x 좌표를 계산합니다.

    calculate_bar_position과 같은 오프셋 공식을 사용하며 0 미만은 0으로 잘립니다.
    """
    validate_grid_inputs(cell_width, interval)
    axis_start = _require_min_date(min_date)
    return _offset_pixels(resolve_today(today), axis_start, cell_width, interval)


def today_column_index(min_date: Any, interval: float, *, today: Any = None) -> int:
    """
    일 단위 축에서 오늘이 속한 셀 인덱스.

    일 단위가 아니거나 오늘이 축 시작 이전이면 -1을 반환합니다.
    """
    if interval != DAILY_INTERVAL:
        return -1
    axis_start = _require_min_date(min_date)
    offset = math.floor(days_between(axis_start, resolve_today(today)))
    return offset if offset >= 0 else -1


def initial_scroll_left(
    today_position: float,
    viewport_width: float,
    *,
    name_column_width: float = CONFIG.ui.name_column_width,
    viewport_fraction: float = CONFIG.ui.today_viewport_fraction,
) -> float:
    """오늘 표시선이 뷰포트 왼쪽에서 1/3 지점에 오도록 하는 스크롤 위치"""
    if today_position < 0:
        return 0.0
    target = today_position - viewport_width * viewport_fraction + name_column_width
    return max(0.0, target)

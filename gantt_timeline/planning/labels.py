"""
타임라인 축 라벨 및 헤더 생성

날짜 범위(DateWindow)를 받아 고정 너비 셀 단위의 라벨과
월/연도 헤더 그룹을 계산합니다.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple, TypeVar

import pandas as pd

from ..core.config import (
    CONFIG,
    DAILY_INTERVAL,
    SCALE_BY_MODE,
    WEEKLY_INTERVAL,
    ScaleSpec,
    TimelineConfig,
    ViewMode,
)
from ..domain.dates import (
    days_between,
    is_weekend,
    next_month_start,
    to_timestamp,
    whole_days,
)
from ..domain.exceptions import ValidationError
from ..domain.models import DateLabel, HeaderGroup, LabelGrid, TimelineHeaders
from ..domain.validation import validate_view_mode

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

Run = Tuple[Any, int, int]


# ========================================
# 셀 크기 결정
# ========================================


def resolve_scale(
    view_mode: str,
    total_days: int,
    config: TimelineConfig = CONFIG.timeline,
) -> ScaleSpec:
    """
    뷰 모드에 맞는 셀 너비와 간격을 반환합니다.

    auto 모드는 total_days로 결정합니다 (30일 이하 일 단위, 90일 이하 주 단위,
    그 외 월 단위).

    Examples:
        >>> resolve_scale("week", 10)
        ScaleSpec(cell_width=100, interval=7)
        >>> resolve_scale("auto", 45)
        ScaleSpec(cell_width=100, interval=7)
    """
    view_mode = validate_view_mode(view_mode)
    if view_mode in SCALE_BY_MODE:
        return SCALE_BY_MODE[view_mode]
    if total_days <= config.auto_daily_max_days:
        return SCALE_BY_MODE[ViewMode.DAY.value]
    if total_days <= config.auto_weekly_max_days:
        return SCALE_BY_MODE[ViewMode.WEEK.value]
    return SCALE_BY_MODE[ViewMode.MONTH.value]


# ========================================
# 라벨 텍스트
# ========================================


def month_abbreviation(ts: pd.Timestamp) -> str:
    """영문 3글자 월 약어 (예: "Jan")"""
    return ts.month_name()[:3]


def month_year_label(year: int, month: int) -> str:
    """영문 월 이름 + 연도 (예: "January 2025")"""
    return f"{pd.Timestamp(year=year, month=month, day=1).month_name()} {year}"


def format_date_label(ts: pd.Timestamp, interval: int) -> str:
    """
    셀 라벨 텍스트를 만듭니다.

    - 일 단위: 일(day) 숫자만 ("5")
    - 주 단위: 시작일-6일 후 ("29-4"처럼 월이 바뀌어도 일 숫자만)
    - 월 단위: 월 약어 ("Jan")
    """
    if interval == DAILY_INTERVAL:
        return str(ts.day)
    if interval == WEEKLY_INTERVAL:
        week_last = ts + pd.Timedelta(days=6)
        return f"{ts.day}-{week_last.day}"
    return month_abbreviation(ts)


# ========================================
# 연속 구간 그룹화
# ========================================


def group_consecutive(values: Sequence[T], key: Callable[[T], K]) -> List[Run]:
    """
    같은 key가 연속되는 구간을 (key, start_index, end_index) 목록으로 묶습니다.

    떨어져 있는 같은 key는 별개의 구간이 됩니다.

    Examples:
        >>> group_consecutive([1, 1, 2, 2, 2, 1], key=lambda v: v)
        [(1, 0, 1), (2, 2, 4), (1, 5, 5)]
    """
    runs: List[Run] = []
    for index, value in enumerate(values):
        value_key = key(value)
        if runs and runs[-1][0] == value_key:
            runs[-1] = (value_key, runs[-1][1], index)
        else:
            runs.append((value_key, index, index))
    return runs


def _headers_from_runs(
    runs: Sequence[Run], cell_width: int, format_key: Callable[[Any], str]
) -> Tuple[HeaderGroup, ...]:
    return tuple(
        HeaderGroup(
            label=format_key(run_key),
            start_index=start,
            end_index=end,
            left=start * cell_width,
            width=(end - start + 1) * cell_width,
        )
        for run_key, start, end in runs
    )


def build_headers(
    labels: Sequence[DateLabel], cell_width: int, interval: int
) -> TimelineHeaders:
    """
    라벨 목록으로 헤더 계층을 만듭니다.

    일/주 단위: 월별 그룹 한 단계 ("January 2025")
    월 단위: 연도별 그룹(primary) + 월별 그룹(secondary, "Jan")
    """
    by_month = group_consecutive(labels, key=lambda label: (label.year, label.month))

    if interval in (DAILY_INTERVAL, WEEKLY_INTERVAL):
        primary = _headers_from_runs(
            by_month, cell_width, lambda ym: month_year_label(*ym)
        )
        return TimelineHeaders(primary=primary, secondary=None)

    by_year = group_consecutive(labels, key=lambda label: label.year)
    primary = _headers_from_runs(by_year, cell_width, str)
    secondary = _headers_from_runs(
        by_month,
        cell_width,
        lambda ym: month_abbreviation(pd.Timestamp(year=ym[0], month=ym[1], day=1)),
    )
    return TimelineHeaders(primary=primary, secondary=secondary)


# ========================================
# 라벨 그리드
# ========================================


def _advance(cursor: pd.Timestamp, interval: int) -> pd.Timestamp:
    if interval == DAILY_INTERVAL:
        return cursor + pd.Timedelta(days=1)
    if interval == WEEKLY_INTERVAL:
        return cursor + pd.Timedelta(days=7)
    # 월 단위는 다음 달 1일로 이동 (실제 일수는 달마다 다름)
    return next_month_start(cursor)


def generate_date_labels(
    min_date: Any,
    max_date: Any,
    total_days: Optional[int] = None,
    view_mode: str = ViewMode.AUTO.value,
    *,
    config: Optional[TimelineConfig] = None,
) -> LabelGrid:
    """
    날짜 범위에 대한 축 라벨, 셀 크기, 헤더를 계산합니다.

    min_date부터 interval 단위로 셀을 만들고, 커서가 max_date를 넘으면
    멈춥니다. 모든 셀은 같은 픽셀 너비를 가집니다.

    Args:
        min_date: 축 시작일 (calculate_date_range 결과)
        max_date: 축 종료일
        total_days: 범위 일수 (None이면 min/max로 계산, auto 모드에서 사용)
        view_mode: "day" / "week" / "month" / "auto"
        config: 타임라인 설정

    Returns:
        LabelGrid(labels, cell_width, total_width, interval, headers)

    Raises:
        ValidationError: 날짜를 해석할 수 없거나 뷰 모드가 잘못된 경우

    Examples:
        >>> grid = generate_date_labels("2025-01-01", "2025-01-31", 30, "day")
        >>> len(grid.labels), grid.total_width
        (31, 1860)
    """
    config = config or CONFIG.timeline
    start = to_timestamp(min_date)
    end = to_timestamp(max_date)
    if start is None or end is None:
        raise ValidationError(f"라벨을 만들 날짜 범위가 올바르지 않습니다: {min_date!r} ~ {max_date!r}")

    if total_days is None:
        total_days = whole_days(start, end)

    scale = resolve_scale(view_mode, total_days, config)
    interval = scale.interval

    labels: List[DateLabel] = []
    cursor = start
    while cursor <= end:
        labels.append(
            DateLabel(
                date=cursor,
                day_offset=days_between(start, cursor),
                index=len(labels),
                label=format_date_label(cursor, interval),
                is_weekend=is_weekend(cursor),
                month=cursor.month,
                year=cursor.year,
                day=cursor.day,
            )
        )
        cursor = _advance(cursor, interval)

    headers = build_headers(labels, scale.cell_width, interval)
    grid = LabelGrid(
        labels=tuple(labels),
        cell_width=scale.cell_width,
        total_width=scale.cell_width * len(labels),
        interval=interval,
        headers=headers,
    )
    logger.debug(
        f"Generated {len(labels)} labels (interval={interval}, "
        f"cell_width={scale.cell_width}, total_width={grid.total_width})"
    )
    return grid

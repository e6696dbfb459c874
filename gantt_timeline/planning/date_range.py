"""Date-window inference for the Gantt timeline axis."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Tuple

import pandas as pd

from ..core.config import CONFIG, TimelineConfig, ViewMode
from ..domain.dates import (
    add_months,
    month_end,
    month_end_on_or_before,
    month_start,
    month_start_on_or_after,
    resolve_today,
    to_timestamp,
    week_end,
    week_end_on_or_before,
    week_start,
    week_start_on_or_after,
    whole_days,
)
from ..domain.hierarchy import SpanExtractor, iter_spans
from ..domain.models import DateWindow
from ..domain.validation import validate_view_mode

logger = logging.getLogger(__name__)

GRANULARITY_DAY = "day"
GRANULARITY_WEEK = "week"
GRANULARITY_MONTH = "month"


def padding_days(
    view_mode: str, raw_days: int, config: TimelineConfig = CONFIG.timeline
) -> int:
    """Padding added on both sides of the observed span."""

    if view_mode in config.padding_days:
        return config.padding_days[view_mode]
    if raw_days <= config.auto_daily_max_days:
        return config.padding_days[ViewMode.DAY.value]
    if raw_days <= config.auto_weekly_max_days:
        return config.padding_days[ViewMode.WEEK.value]
    return config.padding_days[ViewMode.MONTH.value]


def window_ceiling(view_mode: str, config: TimelineConfig = CONFIG.timeline) -> int:
    """Largest number of days the window may span in ``view_mode``."""

    return config.max_window_days[view_mode]


def snap_granularity(
    view_mode: str, span_days: int, config: TimelineConfig = CONFIG.timeline
) -> str:
    """Boundary the window snaps to; ``auto`` decides from ``span_days``."""

    if view_mode == ViewMode.MONTH.value or (
        view_mode == ViewMode.AUTO.value and span_days > config.auto_weekly_max_days
    ):
        return GRANULARITY_MONTH
    if view_mode == ViewMode.WEEK.value or (
        view_mode == ViewMode.AUTO.value and span_days > config.auto_daily_max_days
    ):
        return GRANULARITY_WEEK
    return GRANULARITY_DAY


def snap_window(
    min_date: pd.Timestamp, max_date: pd.Timestamp, granularity: str
) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Round both bounds outward to the granularity boundary.

    Month snaps to the 1st / last day of the month, week to the preceding
    Sunday / following Saturday. Day granularity leaves the bounds alone.
    """

    if granularity == GRANULARITY_MONTH:
        return month_start(min_date), month_end(max_date)
    if granularity == GRANULARITY_WEEK:
        return week_start(min_date), week_end(max_date)
    return min_date, max_date


def snap_window_inward(
    min_date: pd.Timestamp, max_date: pd.Timestamp, granularity: str
) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Round both bounds inward, staying on granularity boundaries."""

    if granularity == GRANULARITY_MONTH:
        return month_start_on_or_after(min_date), month_end_on_or_before(max_date)
    if granularity == GRANULARITY_WEEK:
        return week_start_on_or_after(min_date), week_end_on_or_before(max_date)
    return min_date, max_date


def _scan_spans(
    items: Iterable[Any], extract_spans: SpanExtractor
) -> Tuple[Optional[pd.Timestamp], Optional[pd.Timestamp], int]:
    earliest: Optional[pd.Timestamp] = None
    latest: Optional[pd.Timestamp] = None
    count = 0

    for raw_start, raw_end in extract_spans(items):
        count += 1
        start = to_timestamp(raw_start)
        end = to_timestamp(raw_end)
        if start is not None and (earliest is None or start < earliest):
            earliest = start
        if end is not None and (latest is None or end > latest):
            latest = end

    return earliest, latest, count


def _centered_window(
    today: pd.Timestamp, view_mode: str, config: TimelineConfig
) -> Tuple[pd.Timestamp, pd.Timestamp]:
    ceiling = window_ceiling(view_mode, config)
    half = pd.Timedelta(days=ceiling // 2)
    centered_min, centered_max = today - half, today + half

    granularity = snap_granularity(view_mode, ceiling, config)
    min_date, max_date = snap_window(centered_min, centered_max, granularity)
    if whole_days(min_date, max_date) > ceiling:
        min_date, max_date = snap_window_inward(centered_min, centered_max, granularity)
    return min_date, max_date


def _clamp(
    window: DateWindow, today: pd.Timestamp, view_mode: str, config: TimelineConfig
) -> DateWindow:
    ceiling = window_ceiling(view_mode, config)
    if window.total_days <= ceiling:
        return window

    min_date, max_date = _centered_window(today, view_mode, config)
    clamped = DateWindow(min_date, max_date, whole_days(min_date, max_date))
    logger.info(
        f"Window of {window.total_days} days exceeds the {ceiling}-day limit "
        f"for '{view_mode}' view; re-centered on {today.date()} "
        f"({clamped.min_date.date()} to {clamped.max_date.date()})"
    )
    return clamped


def calculate_date_range(
    items: Optional[Iterable[Any]],
    view_mode: str = ViewMode.AUTO.value,
    *,
    today: Any = None,
    extract_spans: SpanExtractor = iter_spans,
    config: Optional[TimelineConfig] = None,
) -> DateWindow:
    """
    항목 목록으로부터 타임라인 축의 표시 범위를 계산합니다.

    처리 순서:
    1. 항목이 없으면 오늘 기준 2개월 전 1일 ~ 3개월 후 말일
       (이 기본 범위도 5단계의 최대 범위 제한을 거침: 빈 일 단위 보기는 오늘 ±45일)
    2. 모든 항목(하위 포함)의 시작일 최솟값과 종료일 최댓값 수집
    3. 뷰 모드에 맞는 패딩을 양쪽에 추가
    4. 뷰 모드 단위 경계(월/주)로 스냅
    5. 최대 표시 범위를 넘으면 오늘을 중심으로 다시 계산

    Args:
        items: 항목 목록 (TimedItem 트리 또는 calculatedStartDate/calculatedEndDate 키를 가진 레코드)
        view_mode: "day" / "week" / "month" / "auto"
        today: 오늘 날짜 (None이면 현재 날짜)
        extract_spans: items → (start, end) 목록을 만드는 함수
        config: 타임라인 설정 (None이면 CONFIG.timeline)

    Returns:
        DateWindow(min_date, max_date, total_days)

    Raises:
        ValidationError: 알 수 없는 뷰 모드

    Examples:
        >>> window = calculate_date_range([], "month", today="2025-03-15")
        >>> window.min_date, window.max_date
        (Timestamp('2025-01-01 00:00:00'), Timestamp('2025-06-30 00:00:00'))
    """
    config = config or CONFIG.timeline
    view_mode = validate_view_mode(view_mode)
    today = resolve_today(today)
    items = list(items) if items is not None else []

    # ========================================
    # 1단계: 항목이 없으면 기본 범위
    # ========================================
    if not items:
        min_date = month_start(add_months(today, -config.empty_months_before))
        max_date = month_end(add_months(today, config.empty_months_after))
        window = DateWindow(min_date, max_date, whole_days(min_date, max_date))
        logger.debug(f"No items; default window {min_date.date()} to {max_date.date()}")
        return _clamp(window, today, view_mode, config)

    # ========================================
    # 2단계: 시작/종료일 수집
    # ========================================
    earliest, latest, span_count = _scan_spans(items, extract_spans)
    logger.debug(
        f"Scanned {span_count} spans: earliest={earliest}, latest={latest}"
    )

    raw_days = (
        whole_days(earliest, latest)
        if earliest is not None and latest is not None
        else config.fallback_raw_days
    )

    # ========================================
    # 3단계: 날짜가 없을 때 기본값
    # ========================================
    if earliest is None:
        earliest = add_months(today, -config.missing_start_months_before)
    if latest is None:
        latest = add_months(today, config.missing_end_months_after)
    if latest < earliest:
        earliest, latest = latest, earliest

    # ========================================
    # 4단계: 패딩 및 스냅
    # ========================================
    padding = pd.Timedelta(days=padding_days(view_mode, raw_days, config))
    granularity = snap_granularity(view_mode, raw_days, config)
    min_date, max_date = snap_window(earliest - padding, latest + padding, granularity)

    window = DateWindow(min_date, max_date, whole_days(min_date, max_date))

    # ========================================
    # 5단계: 최대 표시 범위 제한
    # ========================================
    window = _clamp(window, today, view_mode, config)
    logger.debug(
        f"Date window ({view_mode}): {window.min_date} to {window.max_date}, "
        f"{window.total_days} days"
    )
    return window

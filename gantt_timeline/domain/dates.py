"""
날짜 변환 및 경계 스냅 헬퍼

레이아웃 엔진 전체가 이 모듈의 함수로만 날짜를 다룹니다.
모든 값은 타임존 없는 pd.Timestamp이며, 변환할 수 없는 값은 None입니다.

주(week)는 일요일에 시작해 토요일에 끝납니다.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

ONE_DAY = pd.Timedelta(days=1)


# ========================================
# 변환 헬퍼
# ========================================


def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """
    임의의 날짜 값을 타임존 없는 Timestamp로 변환합니다.

    ISO 문자열, datetime, date, Timestamp를 받습니다. 타임존이 있는 값은
    UTC 기준 시각으로 바꾼 뒤 타임존 정보를 제거합니다.

    Args:
        value: 변환할 날짜 값

    Returns:
        변환된 Timestamp. 값이 없거나 해석할 수 없으면 None.

    Examples:
        >>> to_timestamp("2025-01-10")
        Timestamp('2025-01-10 00:00:00')
        >>> to_timestamp("not a date") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, bool):
        return None

    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Unparsable date value ignored: {value!r}")
        return None

    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None

    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts


def resolve_today(today: Any = None) -> pd.Timestamp:
    """
    "오늘"을 자정 기준 Timestamp로 반환합니다.

    레이아웃 함수들은 벽시계를 직접 읽지 않고 이 함수를 통해 today를
    주입받습니다. today가 주어지지 않으면 현재 시각을 읽습니다.

    Args:
        today: 고정할 날짜 (None이면 현재 날짜)

    Returns:
        자정으로 정규화된 Timestamp
    """
    if today is not None:
        ts = to_timestamp(today)
        if ts is not None:
            return ts.normalize()
        logger.warning(f"Invalid today value {today!r}, falling back to wall clock")
    return pd.Timestamp.now().normalize()


# ========================================
# 일수 계산
# ========================================


def days_between(start: pd.Timestamp, end: pd.Timestamp) -> float:
    """start에서 end까지의 일수 (소수 포함, 음수 가능)"""
    return (end - start) / ONE_DAY


def whole_days(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """start에서 end까지의 일수를 올림한 정수"""
    return int(math.ceil(days_between(start, end)))


def add_months(ts: pd.Timestamp, months: int) -> pd.Timestamp:
    """달력 기준으로 months개월을 더합니다 (말일은 해당 월 말일로 맞춤)"""
    return ts + pd.DateOffset(months=months)


def is_weekend(ts: pd.Timestamp) -> bool:
    return ts.dayofweek >= 5


def _days_since_sunday(ts: pd.Timestamp) -> int:
    # pandas는 월요일=0, 일요일=6
    return (ts.dayofweek + 1) % 7


# ========================================
# 경계 스냅 (바깥쪽)
# ========================================


def month_start(ts: pd.Timestamp) -> pd.Timestamp:
    """해당 월 1일 자정"""
    return ts.normalize().replace(day=1)


def month_end(ts: pd.Timestamp) -> pd.Timestamp:
    """해당 월 말일 자정"""
    return ts.normalize() + pd.offsets.MonthEnd(0)


def next_month_start(ts: pd.Timestamp) -> pd.Timestamp:
    """다음 달 1일 자정"""
    return month_start(ts) + pd.DateOffset(months=1)


def week_start(ts: pd.Timestamp) -> pd.Timestamp:
    """직전(또는 같은 날) 일요일. 시각은 유지합니다."""
    return ts - pd.Timedelta(days=_days_since_sunday(ts))


def week_end(ts: pd.Timestamp) -> pd.Timestamp:
    """직후(또는 같은 날) 토요일. 시각은 유지합니다."""
    return ts + pd.Timedelta(days=6 - _days_since_sunday(ts))


# ========================================
# 경계 스냅 (안쪽)
# ========================================


def month_start_on_or_after(ts: pd.Timestamp) -> pd.Timestamp:
    if ts == month_start(ts):
        return ts
    return next_month_start(ts)


def month_end_on_or_before(ts: pd.Timestamp) -> pd.Timestamp:
    if ts.normalize() == month_end(ts):
        return ts.normalize()
    return month_start(ts) - ONE_DAY


def week_start_on_or_after(ts: pd.Timestamp) -> pd.Timestamp:
    if _days_since_sunday(ts) == 0:
        return ts
    return week_start(ts) + pd.Timedelta(days=7)


def week_end_on_or_before(ts: pd.Timestamp) -> pd.Timestamp:
    if _days_since_sunday(ts) == 6:
        return ts
    return week_end(ts) - pd.Timedelta(days=7)

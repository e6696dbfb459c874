"""
레이아웃 엔진 입력 검증

엔진 함수는 항목 데이터가 잘못되어도 예외를 던지지 않지만,
호출 경계의 설정 값(뷰 모드, 셀 크기)은 여기서 검증합니다.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any

from ..core.config import VIEW_MODES, ViewMode
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_view_mode(view_mode: Any) -> str:
    """
    뷰 모드를 정규화된 문자열로 반환합니다.

    Args:
        view_mode: "day" / "week" / "month" / "auto" 또는 ViewMode

    Returns:
        소문자 뷰 모드 문자열. None이면 "auto".

    Raises:
        ValidationError: 알 수 없는 뷰 모드

    Examples:
        >>> validate_view_mode("Week")
        'week'
        >>> validate_view_mode("year")
        ValidationError: 알 수 없는 보기 단위입니다: 'year'...
    """
    if view_mode is None:
        return ViewMode.AUTO.value
    if isinstance(view_mode, ViewMode):
        return view_mode.value

    normalized = str(view_mode).strip().lower()
    if normalized not in VIEW_MODES:
        logger.error(f"Unknown view mode: {view_mode!r}")
        raise ValidationError(
            f"알 수 없는 보기 단위입니다: {view_mode!r} "
            f"(사용 가능: {', '.join(VIEW_MODES)})"
        )
    return normalized


def validate_grid_inputs(cell_width: Any, interval: Any) -> None:
    """
    픽셀 변환에 쓰이는 셀 너비와 간격을 검증합니다.

    Raises:
        ValidationError: 숫자가 아니거나 0 이하인 값
    """
    for name, value in (("cell_width", cell_width), ("interval", interval)):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            logger.error(f"Invalid {name}: {value!r}")
            raise ValidationError(f"{name} 값이 숫자가 아닙니다: {value!r}")
        if value <= 0:
            logger.error(f"Non-positive {name}: {value!r}")
            raise ValidationError(f"{name} 값은 0보다 커야 합니다: {value!r}")

"""막대 색상 관리 모듈.

항목 종류(마일스톤/산출물/태스크)와 완료 여부에 따른 막대 색상,
색상 변환 유틸리티를 제공합니다.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..domain.models import KIND_DELIVERABLE, KIND_MILESTONE, KIND_TASK

# 항목 종류별 기본 색상 (차분한 톤)
KIND_COLORS: Dict[str, str] = {
    KIND_MILESTONE: "#3B82F6",
    KIND_DELIVERABLE: "#A855F7",
    KIND_TASK: "#F59E0B",
}
DEFAULT_COLOR = "#9CA3AF"
COMPLETED_COLOR = "#10B981"

# 막대 불투명도
BAR_OPACITY = 0.9
HOVER_OPACITY = 0.95

# 호버 시 어둡게 하는 계수
HOVER_SHADE = 0.85

# 오늘 표시선/열 색상
TODAY_COLOR = "#F87171"
TODAY_COLUMN_COLOR = "rgba(248, 113, 113, 0.12)"

# 격자/헤더 색상
GRID_COLOR = "rgba(229, 231, 235, 0.5)"
WEEKEND_GRID_COLOR = "rgba(229, 231, 235, 0.7)"
WEEKEND_FILL_COLOR = "rgba(243, 244, 246, 0.6)"
BOUNDARY_COLOR = "rgba(209, 213, 219, 0.8)"


def hex_to_rgb(hx: str) -> Tuple[int, int, int]:
    """16진수 색상 코드를 RGB 튜플로 변환합니다.

    Args:
        hx: "#RRGGBB" 또는 "#RGB" 형식의 16진수 색상 코드

    Returns:
        (R, G, B) 튜플 (각 값은 0-255 범위)
    """
    hx = hx.lstrip("#")
    if len(hx) == 3:
        hx = "".join(ch * 2 for ch in hx)
    return tuple(int(hx[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore


def rgb_to_hex(rgb: Tuple[float, float, float]) -> str:
    """RGB 튜플을 16진수 색상 코드로 변환합니다."""
    r, g, b = [max(0, min(255, int(round(v)))) for v in rgb]
    return f"#{r:02X}{g:02X}{b:02X}"


def tint(hex_color: str, factor: float) -> str:
    """기본 색상의 밝기를 조정합니다.

    factor가 1.0보다 크면 밝게, 작으면 어둡게 조정합니다.
    """
    r, g, b = hex_to_rgb(hex_color)
    if factor >= 1.0:
        # 밝게: 흰색(255)에 가까워짐
        r = r + (255 - r) * (factor - 1.0)
        g = g + (255 - g) * (factor - 1.0)
        b = b + (255 - b) * (factor - 1.0)
    else:
        # 어둡게: 검정색(0)에 가까워짐
        r = r * factor
        g = g * factor
        b = b * factor
    return rgb_to_hex((r, g, b))


def to_rgba(hex_color: str, alpha: float) -> str:
    """Plotly용 "rgba(r, g, b, a)" 문자열"""
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {alpha})"


def bar_color(kind: str, completed: bool = False) -> str:
    """항목 종류별 막대 색상. 완료된 항목은 종류와 관계없이 초록색."""
    if completed:
        return COMPLETED_COLOR
    return KIND_COLORS.get(kind, DEFAULT_COLOR)


def bar_hover_color(kind: str) -> str:
    """호버 시 막대 색상 (기본 색상보다 어둡게)"""
    return tint(KIND_COLORS.get(kind, DEFAULT_COLOR), HOVER_SHADE)

"""Plotly 차트 렌더링 헬퍼 함수 모듈.

Plotly 미설치 환경 처리와 축/도형 생성 헬퍼를 제공합니다.
"""

from __future__ import annotations

from typing import Dict, Tuple

import streamlit as st

try:
    import plotly.graph_objects as go  # type: ignore
except ImportError as _plotly_err:
    go = None  # type: ignore[assignment]
    _PLOTLY_IMPORT_ERROR = _plotly_err
else:
    _PLOTLY_IMPORT_ERROR = None

_PLOTLY_WARNING_EMITTED = False


def ensure_plotly_available() -> bool:
    """Plotly가 설치되어 있는지 확인하고, 없으면 경고 메시지를 한 번 표시합니다.

    Returns:
        Plotly 사용 가능 여부
    """
    global _PLOTLY_WARNING_EMITTED
    if _PLOTLY_IMPORT_ERROR is None:
        return True
    if not _PLOTLY_WARNING_EMITTED:
        st.warning(
            "Plotly가 설치되어 있지 않아 타임라인을 렌더링할 수 없습니다. "
            "requirements를 확인하세요.\n"
            f"원인: {_PLOTLY_IMPORT_ERROR}"
        )
        _PLOTLY_WARNING_EMITTED = True
    return False


def vertical_line(x: float, color: str, width: float = 1.0, **kwargs: object) -> Dict[str, object]:
    """y축 전체를 가로지르는 세로선 도형"""
    return dict(
        type="line",
        xref="x",
        yref="paper",
        x0=x,
        x1=x,
        y0=0,
        y1=1,
        line=dict(color=color, width=width),
        layer="below",
        **kwargs,
    )


def column_rect(x0: float, x1: float, color: str) -> Dict[str, object]:
    """y축 전체를 채우는 세로 영역 도형 (주말, 오늘 열 강조)"""
    return dict(
        type="rect",
        xref="x",
        yref="paper",
        x0=x0,
        x1=x1,
        y0=0,
        y1=1,
        fillcolor=color,
        line=dict(width=0),
        layer="below",
    )


def visible_x_range(
    scroll_left: float, viewport_width: float, total_width: float
) -> Tuple[float, float]:
    """스크롤 위치에서 보이는 x 범위. 전체 너비를 넘지 않도록 조정합니다."""
    if total_width <= viewport_width:
        return 0.0, float(max(total_width, 1))
    start = min(scroll_left, total_width - viewport_width)
    start = max(0.0, start)
    return start, start + viewport_width

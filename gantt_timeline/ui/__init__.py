"""
UI 레이어의 공개 API

이 모듈은 Streamlit 기반 UI 컴포넌트를 재수출합니다.
차트, 컨트롤, 어댑터 등을 포함합니다.
"""

from .adapters import handle_domain_errors
from .controls import (
    collapse_all,
    expand_all,
    render_expand_controls,
    render_view_mode_selector,
    toggle_expanded,
)
from .gantt_chart import build_gantt_figure, render_gantt_chart

__all__ = (
    # Charts
    "build_gantt_figure",
    "render_gantt_chart",
    # Controls
    "render_view_mode_selector",
    "render_expand_controls",
    "expand_all",
    "collapse_all",
    "toggle_expanded",
    # Adapters
    "handle_domain_errors",
)

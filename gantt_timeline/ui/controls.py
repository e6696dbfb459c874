"""
타임라인 조작 컨트롤

뷰 모드 선택, 전체 펼치기/접기, 항목별 펼침 상태를
Streamlit 세션 상태로 관리합니다.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import streamlit as st

from ..core.config import CONFIG, VIEW_MODES
from ..domain.hierarchy import expand_all_ids, walk_items
from ..domain.models import TimedItem
from .gantt_chart import INDENT_PER_LEVEL, NBSP

logger = logging.getLogger(__name__)

VIEW_MODE_KEY = "gantt_view_mode"
EXPANDED_KEY = "gantt_expanded_ids"
# 버튼 키(gantt_expand_all 등)와 겹치지 않는 체크박스 전용 접두사
CHECKBOX_PREFIX = "gantt_row_expand__"

VIEW_MODE_LABELS = {
    "day": "일",
    "week": "주",
    "month": "월",
    "auto": "자동",
}


def get_expanded_ids() -> frozenset:
    """세션에 저장된 펼침 항목 id 집합 (기본값: 모두 접힘)"""
    return frozenset(st.session_state.get(EXPANDED_KEY, frozenset()))


def set_expanded_ids(ids: Iterable[str]) -> None:
    st.session_state[EXPANDED_KEY] = frozenset(ids)


def _sync_checkboxes(ids: frozenset) -> None:
    # 위젯 상태가 남아 있으면 체크박스가 이전 값으로 되돌리므로 함께 갱신
    for key in list(st.session_state.keys()):
        if str(key).startswith(CHECKBOX_PREFIX):
            st.session_state[key] = str(key)[len(CHECKBOX_PREFIX):] in ids


def expand_all(items: Iterable[TimedItem]) -> frozenset:
    """하위 항목이 있는 모든 항목을 펼칩니다."""
    ids = expand_all_ids(items)
    set_expanded_ids(ids)
    _sync_checkboxes(ids)
    logger.info(f"Expanded {len(ids)} items")
    return ids


def collapse_all() -> frozenset:
    """모든 항목을 접습니다."""
    set_expanded_ids(())
    _sync_checkboxes(frozenset())
    return frozenset()


def toggle_expanded(item_id: str) -> frozenset:
    """항목 하나의 펼침 상태를 뒤집습니다."""
    current = set(get_expanded_ids())
    if item_id in current:
        current.discard(item_id)
    else:
        current.add(item_id)
    set_expanded_ids(current)
    return frozenset(current)


def render_view_mode_selector(default: Optional[str] = None) -> str:
    """뷰 모드 라디오 버튼을 렌더링하고 선택값을 반환합니다."""
    default = default or CONFIG.ui.default_view_mode
    current = st.session_state.get(VIEW_MODE_KEY, default)
    index = VIEW_MODES.index(current) if current in VIEW_MODES else VIEW_MODES.index("auto")

    selected = st.radio(
        "보기 단위",
        VIEW_MODES,
        index=index,
        horizontal=True,
        format_func=lambda mode: VIEW_MODE_LABELS.get(mode, mode),
    )
    st.session_state[VIEW_MODE_KEY] = selected
    return selected


def render_expand_controls(items: Iterable[TimedItem]) -> frozenset:
    """
    전체 펼치기/접기 버튼과 항목별 펼침 체크박스를 렌더링합니다.

    Returns:
        현재 펼쳐진 항목 id 집합
    """
    items = tuple(items)
    col_expand, col_collapse = st.columns(2)
    with col_expand:
        if st.button("전체 펼치기", key="gantt_expand_all", use_container_width=True):
            expand_all(items)
    with col_collapse:
        if st.button("전체 접기", key="gantt_collapse_all", use_container_width=True):
            collapse_all()

    expanded = get_expanded_ids()
    # 화면에 보이는 부모 항목만 체크박스로 노출
    parents = [
        (item, level)
        for item, level in walk_items(items, expanded=expanded)
        if item.has_children
    ]
    if parents:
        with st.expander("항목별 펼치기", expanded=False):
            for item, level in parents:
                checked = st.checkbox(
                    NBSP * (INDENT_PER_LEVEL * level) + item.name,
                    value=item.item_id in expanded,
                    key=f"{CHECKBOX_PREFIX}{item.item_id}",
                )
                if checked != (item.item_id in expanded):
                    expanded = toggle_expanded(item.item_id)
    return expanded

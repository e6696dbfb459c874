"""
Gantt Timeline 메인 엔트리 포인트

프로젝트 마일스톤을 불러와 Gantt 타임라인으로 표시합니다.

처리 순서:
1. 사이드바에서 데이터 소스 선택 (샘플 / JSON 업로드 / REST API)
2. 레코드 정규화 (마일스톤 → 산출물 → 태스크)
3. 보기 단위 선택, 펼치기/접기
4. 레이아웃 계산 후 차트 렌더링
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import streamlit as st

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from gantt_timeline.core.config import CONFIG
from gantt_timeline.data_sources import (
    ApiMilestoneLoader,
    JsonFileLoader,
    parse_json_records,
)
from gantt_timeline.domain import normalize_items
from gantt_timeline.planning import build_gantt_layout
from gantt_timeline.ui import (
    handle_domain_errors,
    render_expand_controls,
    render_gantt_chart,
    render_view_mode_selector,
)

SAMPLE_DATA_PATH = Path(__file__).parent / "sample_data" / "milestones.json"

SOURCE_SAMPLE = "샘플 데이터"
SOURCE_UPLOAD = "JSON 업로드"
SOURCE_API = "REST API"


def _api_base_url() -> str:
    """secrets의 [api] base_url이 있으면 우선 사용합니다."""
    try:
        return str(st.secrets["api"]["base_url"])
    except (KeyError, FileNotFoundError) as exc:
        # secrets.toml이 없거나 [api] 섹션이 없음
        logger.debug(f"No api.base_url in secrets ({exc!r}); using {CONFIG.api.base_url}")
        return CONFIG.api.base_url


def _load_records() -> List[Dict[str, Any]]:
    """
    사이드바에서 선택한 데이터 소스로부터 레코드를 불러옵니다.

    로드 실패 시 에러 메시지를 표시하고 빈 목록을 반환합니다.
    """
    records: List[Dict[str, Any]] = []

    with st.sidebar:
        st.header("데이터")
        source = st.radio("데이터 소스", [SOURCE_SAMPLE, SOURCE_UPLOAD, SOURCE_API])

        if source == SOURCE_UPLOAD:
            uploaded = st.file_uploader("마일스톤 JSON", type=["json"])
            if uploaded is None:
                st.caption("목록 또는 {\"milestones\": [...]} 형식의 JSON 파일")
                return records
            with handle_domain_errors():
                records = parse_json_records(
                    uploaded.getvalue().decode("utf-8"), source=uploaded.name
                )

        elif source == SOURCE_API:
            base_url = st.text_input("API 주소", value=_api_base_url())
            project_id = st.text_input("프로젝트 ID", value="")
            if not project_id.strip():
                st.caption("프로젝트 ID를 입력하면 마일스톤을 불러옵니다.")
                return records
            with handle_domain_errors():
                with st.spinner("마일스톤 불러오는 중..."):
                    records = ApiMilestoneLoader(project_id.strip(), base_url=base_url).load()

        else:
            with handle_domain_errors():
                records = JsonFileLoader(SAMPLE_DATA_PATH).load()

    return records


def main() -> None:
    """
    Streamlit 앱의 메인 함수.
    """
    st.set_page_config(page_title="Gantt Timeline", layout="wide")
    st.title("📅 프로젝트 타임라인")

    # ========================================
    # 1단계: 데이터 로드 및 정규화
    # ========================================
    records = _load_records()
    items = normalize_items(records)
    logger.info(f"Loaded {len(items)} milestones")

    # ========================================
    # 2단계: 보기 단위 / 펼치기 컨트롤
    # ========================================
    col_mode, col_expand = st.columns([2, 1])
    with col_mode:
        view_mode = render_view_mode_selector()
    with col_expand:
        expanded = render_expand_controls(items)

    # ========================================
    # 3단계: 레이아웃 계산 및 렌더링
    # ========================================
    layout = None
    with handle_domain_errors():
        layout = build_gantt_layout(items, view_mode, expanded=expanded)

    if layout is None:
        return

    render_gantt_chart(layout, title="Milestones", key="gantt_main")

    with st.expander("레이아웃 데이터", expanded=False):
        st.dataframe(layout.rows, use_container_width=True, hide_index=True)
        st.dataframe(layout.grid.to_frame(), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()

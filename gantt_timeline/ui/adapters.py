"""
도메인 예외 → UI 에러 메시지 어댑터

이 모듈은 도메인 계층에서 발생하는 예외를 잡아서
Streamlit 사용자 친화적인 에러 메시지로 변환합니다.

이를 통해 레이아웃 엔진은 Streamlit에 의존하지 않으면서도
UI에서 적절한 에러 메시지를 표시할 수 있습니다.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

import streamlit as st

from ..domain.exceptions import DataLoadError, TimelineError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def handle_domain_errors() -> Generator[None, None, None]:
    """
    도메인 예외를 잡아서 Streamlit 에러 메시지로 변환하는 컨텍스트 매니저.

    Yields:
        None

    Examples:
        >>> with handle_domain_errors():
        ...     layout = build_gantt_layout(items, view_mode)

    Notes:
        - ValidationError: 뷰 모드/입력 값 검증 실패
        - DataLoadError: 마일스톤 데이터 로드 실패
        - TimelineError: 타임라인 레이아웃 생성 실패
    """
    try:
        yield

    except ValidationError as e:
        st.error(f"❌ 입력 값 검증 실패: {str(e)}")

    except DataLoadError as e:
        # 데이터가 없으면 빈 타임라인이 표시되므로 경고 수준
        st.warning(f"⚠️ 데이터 로드 실패: {str(e)}")

    except TimelineError as e:
        st.error(f"❌ 타임라인 생성 실패: {str(e)}")

    except Exception as e:
        # 예상치 못한 예외: 상세 정보와 함께 표시
        logger.exception("Unexpected error while rendering the timeline")
        st.error(f"❌ 예상치 못한 오류가 발생했습니다: {type(e).__name__}: {str(e)}")
        st.exception(e)

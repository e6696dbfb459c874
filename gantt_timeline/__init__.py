"""
Gantt Timeline 패키지

프로젝트 마일스톤/산출물/태스크를 Gantt 타임라인으로 배치하는
레이아웃 엔진과 Streamlit 화면입니다.
- 날짜 창 추론 (패딩, 스냅, 최대 폭 제한)
- 셀 라벨과 2단 헤더 생성
- 막대/오늘 표시선 픽셀 좌표 계산
"""

from __future__ import annotations

__version__ = "1.0.0"

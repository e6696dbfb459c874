"""Configuration and constants for the Gantt timeline engine.

뷰 모드별 셀 크기/간격, 패딩, 최대 표시 범위 등 전역 설정을 제공합니다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


# ============================================================
# 뷰 모드
# ============================================================


class ViewMode(str, Enum):
    """타임라인 축의 단위를 결정하는 뷰 모드"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    AUTO = "auto"


VIEW_MODES: Tuple[str, ...] = tuple(mode.value for mode in ViewMode)

# 셀 하나가 나타내는 일수
DAILY_INTERVAL = 1
WEEKLY_INTERVAL = 7
MONTHLY_INTERVAL = 30


@dataclass(frozen=True)
class ScaleSpec:
    """한 셀의 픽셀 너비와 셀이 나타내는 일수"""

    cell_width: int
    interval: int

    @property
    def pixels_per_day(self) -> float:
        return self.cell_width / self.interval


# 뷰 모드별 고정 셀 크기 (auto는 total_days로 셋 중 하나를 고름)
SCALE_BY_MODE: Dict[str, ScaleSpec] = {
    ViewMode.DAY.value: ScaleSpec(cell_width=60, interval=DAILY_INTERVAL),
    ViewMode.WEEK.value: ScaleSpec(cell_width=100, interval=WEEKLY_INTERVAL),
    ViewMode.MONTH.value: ScaleSpec(cell_width=120, interval=MONTHLY_INTERVAL),
}


# ============================================================
# 타임라인 설정
# ============================================================


@dataclass(frozen=True)
class TimelineConfig:
    """날짜 범위 추론 및 막대 배치 관련 설정"""

    # 뷰 모드별 양쪽 패딩 (일)
    padding_days: Dict[str, int] = field(
        default_factory=lambda: {
            ViewMode.DAY.value: 7,
            ViewMode.WEEK.value: 14,
            ViewMode.MONTH.value: 30,
        }
    )

    # 뷰 모드별 최대 표시 범위 (일)
    # 초과하면 오늘을 중심으로 다시 잡는다
    max_window_days: Dict[str, int] = field(
        default_factory=lambda: {
            ViewMode.DAY.value: 90,
            ViewMode.WEEK.value: 180,
            ViewMode.MONTH.value: 730,
            ViewMode.AUTO.value: 365,
        }
    )

    # auto 모드 단위 전환 기준 (일)
    auto_daily_max_days: int = 30
    auto_weekly_max_days: int = 90

    # 항목이 하나도 없을 때 기본 범위 (개월)
    empty_months_before: int = 2
    empty_months_after: int = 3

    # 항목은 있지만 날짜가 없을 때 기본 범위 (개월)
    missing_start_months_before: int = 1
    missing_end_months_after: int = 2

    # 시작/종료 중 하나라도 없을 때 원본 기간으로 간주할 일수
    fallback_raw_days: int = 30

    # 막대 최소 너비 (셀 너비 대비 비율)
    min_bar_width_ratio: float = 0.1

    # 막대 최소 기간 (일)
    min_bar_duration_days: float = 1.0


@dataclass(frozen=True)
class UIConfig:
    """UI 표시 관련 설정"""

    # 이름 컬럼 너비 (픽셀)
    name_column_width: int = 280

    # 행 높이 (픽셀)
    row_height: int = 44

    # 막대 높이 (행 높이 대비 비율)
    bar_height_ratio: float = 0.64

    # 헤더 영역 높이 (픽셀)
    header_height: int = 76

    # 오늘 표시선을 뷰포트의 어느 지점에 둘지 (왼쪽 기준 비율)
    today_viewport_fraction: float = 1 / 3

    # 스크롤 계산용 기본 뷰포트 너비 (픽셀)
    default_viewport_width: int = 1200

    # 막대 안에 라벨을 표시할 최소 너비 (픽셀)
    min_label_width: int = 40

    # 기본 뷰 모드
    default_view_mode: str = ViewMode.AUTO.value


@dataclass(frozen=True)
class ApiConfig:
    """REST 백엔드 접속 설정"""

    base_url: str = field(
        default_factory=lambda: os.getenv("GANTT_API_URL", "http://localhost:5050/api")
    )

    # 요청 타임아웃 (초)
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class GanttConfig:
    """Gantt 타임라인 전역 설정"""

    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = GanttConfig()

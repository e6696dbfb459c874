"""
도메인 모델: Gantt 타임라인의 핵심 데이터 구조

이 모듈은 레이아웃 엔진이 입력으로 받는 항목 트리와,
엔진이 계산해 돌려주는 값(날짜 범위, 라벨 그리드, 막대 위치)을 정의합니다.
모든 모델은 불변(frozen) 데이터클래스로 구현되어 렌더링마다 새로 계산됩니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import pandas as pd

# 항목 종류
KIND_MILESTONE = "milestone"
KIND_DELIVERABLE = "deliverable"
KIND_TASK = "task"
KIND_GROUP = "group"

ITEM_KINDS = (KIND_MILESTONE, KIND_DELIVERABLE, KIND_TASK, KIND_GROUP)

LABEL_COLUMNS = [
    "date",
    "day_offset",
    "index",
    "label",
    "is_weekend",
    "month",
    "year",
    "day",
]

ROW_COLUMNS = [
    "item_id",
    "name",
    "label",
    "kind",
    "level",
    "start",
    "end",
    "completed",
    "has_children",
    "expanded",
    "left",
    "width",
    "visible",
]


# ============================================================
# 입력 모델
# ============================================================


@dataclass(frozen=True)
class TimedItem:
    """
    타임라인에 그려지는 하나의 항목 (마일스톤, 산출물, 태스크, 그룹).

    시작/종료일은 선택 사항입니다. 해석할 수 없는 날짜는 정규화 단계에서
    None으로 바뀌므로, 이 모델에는 유효한 Timestamp 또는 None만 들어옵니다.

    Attributes:
        item_id: 항목 식별자
        name: 표시 이름
        kind: milestone / deliverable / task / group
        start: 시작일 (없으면 None)
        end: 종료일 또는 마감일 (없으면 None)
        completed: 완료 여부
        abbreviation: 막대 안에 표시할 약어 (선택)
        children: 하위 항목 (마일스톤 → 산출물 → 태스크)

    Examples:
        >>> task = TimedItem("t1", "Review", KIND_TASK, end=pd.Timestamp("2025-01-10"))
        >>> deliverable = TimedItem(
        ...     "d1", "Brief", KIND_DELIVERABLE,
        ...     start=pd.Timestamp("2025-01-02"), end=pd.Timestamp("2025-01-12"),
        ...     children=(task,),
        ... )
    """

    item_id: str
    name: str
    kind: str = KIND_MILESTONE
    start: Optional[pd.Timestamp] = None
    end: Optional[pd.Timestamp] = None
    completed: bool = False
    abbreviation: Optional[str] = None
    children: Tuple["TimedItem", ...] = field(default_factory=tuple)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def display_label(self) -> str:
        """막대 안에 표시할 텍스트 (약어가 있으면 약어)"""
        return self.abbreviation or self.name


# ============================================================
# 계산 결과 모델
# ============================================================


@dataclass(frozen=True)
class DateWindow:
    """
    타임라인 축의 표시 범위.

    Attributes:
        min_date: 축 시작일 (뷰 모드 단위 경계로 스냅됨)
        max_date: 축 종료일
        total_days: max_date - min_date 일수 (올림)
    """

    min_date: pd.Timestamp
    max_date: pd.Timestamp
    total_days: int


@dataclass(frozen=True)
class DateLabel:
    """축 셀 하나의 라벨. month는 1-12입니다."""

    date: pd.Timestamp
    day_offset: float
    index: int
    label: str
    is_weekend: bool
    month: int
    year: int
    day: int


@dataclass(frozen=True)
class HeaderGroup:
    """연속된 셀들을 묶는 헤더 (예: "January 2025", "2025", "Jan")"""

    label: str
    start_index: int
    end_index: int
    left: float
    width: float


@dataclass(frozen=True)
class TimelineHeaders:
    """
    헤더 계층.

    일/주 단위에서는 primary(월) 하나만 있고 secondary는 None입니다.
    월 단위에서는 primary(연도)와 secondary(월)가 모두 있습니다.
    """

    primary: Tuple[HeaderGroup, ...]
    secondary: Optional[Tuple[HeaderGroup, ...]] = None


@dataclass(frozen=True)
class LabelGrid:
    """
    축 라벨과 픽셀 크기 정보.

    Attributes:
        labels: 셀별 라벨 (min_date부터 interval 단위)
        cell_width: 셀 하나의 픽셀 너비
        total_width: cell_width * 라벨 수
        interval: 셀 하나가 나타내는 일수 (1, 7, 30)
        headers: 헤더 계층
    """

    labels: Tuple[DateLabel, ...]
    cell_width: int
    total_width: int
    interval: int
    headers: TimelineHeaders

    @property
    def pixels_per_day(self) -> float:
        return self.cell_width / self.interval

    def to_frame(self) -> pd.DataFrame:
        """라벨 목록을 DataFrame으로 반환합니다."""
        if not self.labels:
            return pd.DataFrame(columns=LABEL_COLUMNS)
        return pd.DataFrame(
            [
                {column: getattr(label, column) for column in LABEL_COLUMNS}
                for label in self.labels
            ],
            columns=LABEL_COLUMNS,
        )


@dataclass(frozen=True)
class BarGeometry:
    """항목 하나의 막대 위치 (픽셀)"""

    left: float
    width: float

    @property
    def is_visible(self) -> bool:
        """너비가 0이면 날짜가 없는 항목이므로 그리지 않는다."""
        return self.width > 0

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class GanttLayout:
    """
    레이아웃 빌드 결과를 묶은 번들.

    Attributes:
        view_mode: 계산에 사용한 뷰 모드
        today: 계산에 사용한 오늘 날짜
        window: 날짜 범위
        grid: 라벨 그리드
        today_position: 오늘 표시선의 x 좌표 (픽셀)
        today_column: 일 단위 뷰에서 오늘 셀 인덱스 (없으면 -1)
        rows: 화면에 표시되는 행 (ROW_COLUMNS)
    """

    view_mode: str
    today: pd.Timestamp
    window: DateWindow
    grid: LabelGrid
    today_position: float
    today_column: int
    rows: pd.DataFrame

    @property
    def is_empty(self) -> bool:
        return self.rows.empty

    def visible_rows(self) -> pd.DataFrame:
        """막대가 있는 행만 반환합니다."""
        if self.rows.empty:
            return self.rows.copy()
        return self.rows[self.rows["visible"]].copy()

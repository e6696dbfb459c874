"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .exceptions import DataLoadError, DomainError, TimelineError, ValidationError
from .hierarchy import (
    expand_all_ids,
    iter_item_spans,
    iter_spans,
    iter_record_spans,
    walk_items,
)
from .models import (
    BarGeometry,
    DateLabel,
    DateWindow,
    GanttLayout,
    HeaderGroup,
    LabelGrid,
    TimedItem,
    TimelineHeaders,
)
from .normalization import (
    build_group_items,
    items_from_frame,
    normalize_item,
    normalize_items,
)
from .validation import validate_grid_inputs, validate_view_mode

__all__ = [
    # 예외
    "DomainError",
    "ValidationError",
    "DataLoadError",
    "TimelineError",
    # 모델
    "TimedItem",
    "DateWindow",
    "DateLabel",
    "HeaderGroup",
    "TimelineHeaders",
    "LabelGrid",
    "BarGeometry",
    "GanttLayout",
    # 계층
    "walk_items",
    "iter_item_spans",
    "iter_spans",
    "iter_record_spans",
    "expand_all_ids",
    # 정규화
    "normalize_item",
    "normalize_items",
    "build_group_items",
    "items_from_frame",
    # 검증
    "validate_view_mode",
    "validate_grid_inputs",
]

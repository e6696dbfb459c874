"""
레코드 정규화 및 계층 순회 테스트

API 레코드 → TimedItem 변환, 그룹 롤업, 평면 테이블 변환,
계층 순회와 입력 검증을 테스트합니다.
"""
from __future__ import annotations

import pandas as pd
import pytest

from gantt_timeline.core.config import ViewMode
from gantt_timeline.domain.dates import to_timestamp
from gantt_timeline.domain.exceptions import ValidationError
from gantt_timeline.domain.hierarchy import (
    expand_all_ids,
    iter_item_spans,
    iter_record_spans,
    iter_spans,
    walk_items,
)
from gantt_timeline.domain.models import (
    KIND_DELIVERABLE,
    KIND_GROUP,
    KIND_MILESTONE,
    KIND_TASK,
    TimedItem,
)
from gantt_timeline.domain.normalization import (
    build_group_items,
    items_from_frame,
    normalize_item,
    normalize_items,
)
from gantt_timeline.domain.validation import validate_grid_inputs, validate_view_mode


# ============================================================
# 날짜 변환
# ============================================================


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", True, {"a": 1}])
def test_to_timestamp_returns_none_for_unusable_values(value):
    assert to_timestamp(value) is None


def test_to_timestamp_drops_timezone():
    ts = to_timestamp("2025-01-10T09:00:00+09:00")

    assert ts == pd.Timestamp("2025-01-10 00:00:00")
    assert ts.tzinfo is None


# ============================================================
# 정규화
# ============================================================


def test_normalize_items_builds_three_levels(milestone_records):
    items = normalize_items(milestone_records)

    kickoff, design = items
    assert kickoff.kind == KIND_MILESTONE
    assert kickoff.start == pd.Timestamp("2025-01-06")
    assert kickoff.completed is True
    assert design.completed is False

    deliverable = kickoff.children[0]
    assert deliverable.kind == KIND_DELIVERABLE
    assert deliverable.name == "Project brief"

    task = deliverable.children[0]
    assert task.kind == KIND_TASK
    assert task.start is None
    assert task.end == pd.Timestamp("2025-01-08")


def test_normalize_item_defaults():
    item = normalize_item({"calculatedStartDate": "oops"}, fallback_id="milestone-3")

    assert item.item_id == "milestone-3"
    assert item.name == "Untitled Milestone"
    assert item.start is None
    assert item.end is None
    assert item.children == ()


def test_calculated_dates_take_priority():
    item = normalize_item(
        {
            "_id": "m9",
            "name": "Build",
            "startDate": "2025-02-01",
            "calculatedStartDate": "2025-02-03",
            "endDate": "2025-02-20",
        }
    )

    assert item.start == pd.Timestamp("2025-02-03")
    assert item.end == pd.Timestamp("2025-02-20")


def test_abbreviation_is_used_as_display_label():
    item = normalize_item({"_id": "m1", "name": "Discovery", "abbreviation": "DSC"})
    assert item.display_label == "DSC"

    item = normalize_item({"_id": "m2", "name": "Discovery"})
    assert item.display_label == "Discovery"


def test_normalize_items_skips_non_mappings_and_keeps_timed_items():
    existing = TimedItem("x", "Existing")

    items = normalize_items([existing, "junk", None, {"_id": "y", "name": "New"}])

    assert [item.item_id for item in items] == ["x", "y"]


def test_normalize_items_empty():
    assert normalize_items(None) == ()
    assert normalize_items([]) == ()


# ============================================================
# 그룹 롤업
# ============================================================


def test_build_group_items_rolls_up_dates():
    groups = [
        {"_id": "g1", "name": "Research"},
        {"_id": "g2", "name": "Empty group"},
    ]
    deliverables = [
        {"_id": "d1", "title": "Audit", "group": "g1",
         "calculatedStartDate": "2025-01-10", "calculatedEndDate": "2025-01-20"},
        {"_id": "d2", "title": "Survey", "group": "g1",
         "calculatedStartDate": "2025-01-05", "calculatedEndDate": "2025-01-15",
         "completed": True},
    ]
    tasks = {"d1": [{"_id": "t1", "title": "Kickoff call", "dueDate": "2025-01-11"}]}

    (group,) = build_group_items(groups, deliverables, tasks)

    assert group.kind == KIND_GROUP
    assert group.name == "Research"
    assert group.start == pd.Timestamp("2025-01-05")
    assert group.end == pd.Timestamp("2025-01-20")
    assert group.completed is False
    assert [child.item_id for child in group.children] == ["d1", "d2"]
    assert group.children[0].children[0].name == "Kickoff call"


# ============================================================
# 평면 테이블
# ============================================================


def test_items_from_frame_builds_tree():
    frame = pd.DataFrame(
        {
            "item_id": ["m1", "d1", "t1", "m2"],
            "parent_id": [None, "m1", "d1", None],
            "name": ["Kickoff", "Brief", "Interviews", None],
            "start": ["2025-01-06", "2025-01-06", None, "2025-01-20"],
            "end": ["2025-01-17", "2025-01-10", "2025-01-08", "bad"],
        }
    )

    kickoff, second = items_from_frame(frame)

    assert kickoff.kind == KIND_MILESTONE
    assert kickoff.children[0].kind == KIND_DELIVERABLE
    assert kickoff.children[0].children[0].kind == KIND_TASK
    assert second.name == "Untitled Milestone"
    assert second.end is None


def test_items_from_frame_orphans_become_top_level():
    frame = pd.DataFrame({"item_id": ["a", "b"], "parent_id": [None, "missing"]})

    items = items_from_frame(frame)

    assert [item.item_id for item in items] == ["a", "b"]


def test_items_from_frame_empty():
    assert items_from_frame(pd.DataFrame()) == ()


# ============================================================
# 계층 순회
# ============================================================


def test_walk_items_all_levels(nested_items):
    walked = [(item.item_id, level) for item, level in walk_items(nested_items)]

    assert walked == [("m1", 0), ("d1", 1), ("t1", 2), ("m2", 0)]


def test_walk_items_respects_expanded(nested_items):
    collapsed = [item.item_id for item, _ in walk_items(nested_items, expanded=frozenset())]
    partly = [item.item_id for item, _ in walk_items(nested_items, expanded={"m1"})]

    assert collapsed == ["m1", "m2"]
    assert partly == ["m1", "d1", "m2"]


def test_expand_all_ids(nested_items):
    assert expand_all_ids(nested_items) == frozenset({"m1", "d1"})


def test_iter_item_spans_visits_every_depth(nested_items):
    spans = list(iter_item_spans(nested_items))

    assert len(spans) == 4
    assert (None, pd.Timestamp("2025-01-08")) in spans


def test_iter_record_spans_skips_non_mappings(milestone_records):
    spans = list(iter_record_spans(milestone_records + ["junk"]))

    # 마일스톤 2 + 산출물 1 + 태스크 1
    assert len(spans) == 4
    assert spans[0] == ("2025-01-06", "2025-01-17")


def test_iter_spans_accepts_items_and_records(nested_items, milestone_records):
    mixed = list(nested_items) + milestone_records + ["junk", 3]

    spans = list(iter_spans(mixed))

    # TimedItem 4 + 레코드 4, 그 외 값은 건너뜀
    assert len(spans) == 8
    assert spans[4] == ("2025-01-06", "2025-01-17")


# ============================================================
# 검증
# ============================================================


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "auto"),
        ("Week", "week"),
        (" month ", "month"),
        (ViewMode.DAY, "day"),
    ],
)
def test_validate_view_mode(value, expected):
    assert validate_view_mode(value) == expected


def test_validate_view_mode_rejects_unknown():
    with pytest.raises(ValidationError, match="quarter"):
        validate_view_mode("quarter")


def test_validate_grid_inputs():
    validate_grid_inputs(60, 1)
    validate_grid_inputs(100.5, 7)

    with pytest.raises(ValidationError):
        validate_grid_inputs("60", 1)

"""
데이터 정규화 유틸리티

이 모듈은 REST API 응답(camelCase dict)이나 평면 테이블을
레이아웃 엔진이 사용하는 TimedItem 트리로 변환합니다.
해석할 수 없는 날짜는 예외 없이 None으로 바뀝니다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .dates import to_timestamp
from .models import (
    ITEM_KINDS,
    KIND_DELIVERABLE,
    KIND_GROUP,
    KIND_MILESTONE,
    KIND_TASK,
    TimedItem,
)

logger = logging.getLogger(__name__)

# 레코드에서 값을 찾을 키 후보 (앞에 있을수록 우선)
FIELD_ALIASES: dict[str, Sequence[str]] = {
    "item_id": ("_id", "id"),
    "name": ("name", "title"),
    "start": ("calculatedStartDate", "startDate"),
    "end": ("calculatedEndDate", "endDate"),
    "due": ("calculatedDueDate", "dueDate"),
    "abbreviation": ("abbreviation",),
}

# 종류별 하위 항목 키와 하위 항목의 종류
CHILD_KEYS: dict[str, Tuple[str, str]] = {
    KIND_MILESTONE: ("deliverables", KIND_DELIVERABLE),
    KIND_GROUP: ("deliverables", KIND_DELIVERABLE),
    KIND_DELIVERABLE: ("tasks", KIND_TASK),
}

# 이름이 없을 때 기본 표시 이름
UNTITLED: dict[str, str] = {
    KIND_MILESTONE: "Untitled Milestone",
    KIND_GROUP: "Untitled Group",
}
DEFAULT_UNTITLED = "Untitled"

FRAME_COLUMNS = ("item_id", "parent_id", "name", "kind", "start", "end", "completed")

# kind 컬럼이 비어 있을 때 깊이로 추정
DEPTH_KINDS = (KIND_MILESTONE, KIND_DELIVERABLE, KIND_TASK)


def _pick(record: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _is_completed(record: Mapping[str, Any]) -> bool:
    if "completed" in record and record["completed"] is not None:
        return bool(record["completed"])
    return str(record.get("status", "")).strip().lower() == "completed"


def normalize_item(
    record: Mapping[str, Any],
    *,
    kind: str = KIND_MILESTONE,
    fallback_id: str = "",
) -> TimedItem:
    """
    API 레코드 하나를 TimedItem으로 변환합니다 (하위 항목 포함).

    태스크처럼 마감일만 있는 항목은 마감일을 종료일로 사용합니다.

    Args:
        record: camelCase 키를 가진 레코드
        kind: 항목 종류
        fallback_id: 레코드에 id가 없을 때 사용할 id

    Returns:
        정규화된 TimedItem
    """
    item_id = _pick(record, "item_id")
    item_id = str(item_id) if item_id is not None else fallback_id

    name = _pick(record, "name")
    name = str(name) if name is not None else UNTITLED.get(kind, DEFAULT_UNTITLED)

    start = to_timestamp(_pick(record, "start"))
    end = to_timestamp(_pick(record, "end"))
    if end is None:
        end = to_timestamp(_pick(record, "due"))

    children: Tuple[TimedItem, ...] = ()
    child_spec = CHILD_KEYS.get(kind)
    if child_spec is not None:
        child_key, child_kind = child_spec
        raw_children = record.get(child_key) or ()
        children = tuple(
            normalize_item(
                child,
                kind=child_kind,
                fallback_id=f"{item_id}/{child_kind}-{index}",
            )
            for index, child in enumerate(raw_children)
            if isinstance(child, Mapping)
        )

    abbreviation = _pick(record, "abbreviation")

    return TimedItem(
        item_id=item_id,
        name=name,
        kind=kind,
        start=start,
        end=end,
        completed=_is_completed(record),
        abbreviation=str(abbreviation) if abbreviation is not None else None,
        children=children,
    )


def normalize_items(
    records: Optional[Iterable[Any]],
    *,
    kind: str = KIND_MILESTONE,
) -> Tuple[TimedItem, ...]:
    """
    API 레코드 목록을 TimedItem 튜플로 변환합니다.

    이미 TimedItem인 값은 그대로 통과시키고, dict가 아닌 값은 건너뜁니다.

    Examples:
        >>> items = normalize_items([
        ...     {"_id": "m1", "name": "Kickoff",
        ...      "calculatedStartDate": "2025-01-06",
        ...      "calculatedEndDate": "2025-01-17",
        ...      "deliverables": [{"_id": "d1", "title": "Brief"}]},
        ... ])
        >>> items[0].children[0].kind
        'deliverable'
    """
    if not records:
        return ()

    result: List[TimedItem] = []
    skipped = 0
    for index, record in enumerate(records):
        if isinstance(record, TimedItem):
            result.append(record)
        elif isinstance(record, Mapping):
            result.append(normalize_item(record, kind=kind, fallback_id=f"{kind}-{index}"))
        else:
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} records that are not mappings")
    logger.debug(f"Normalized {len(result)} {kind} records")
    return tuple(result)


def build_group_items(
    groups: Iterable[Mapping[str, Any]],
    deliverables: Iterable[Mapping[str, Any]],
    tasks_by_deliverable: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None,
) -> Tuple[TimedItem, ...]:
    """
    산출물 그룹 뷰용 항목 트리를 만듭니다.

    그룹 자체에는 날짜가 없으므로, 그룹의 시작/종료일은 소속 산출물의
    가장 이른 시작일과 가장 늦은 종료일로 계산합니다.
    산출물이 하나도 없는 그룹은 제외합니다.

    Args:
        groups: 그룹 레코드 (_id, name)
        deliverables: 산출물 레코드 (group 키로 그룹을 가리킴)
        tasks_by_deliverable: 산출물 id → 태스크 레코드 목록

    Returns:
        그룹 TimedItem 튜플 (하위에 산출물 → 태스크)
    """
    tasks_by_deliverable = tasks_by_deliverable or {}
    deliverables = [d for d in deliverables or () if isinstance(d, Mapping)]

    result: List[TimedItem] = []
    for group_index, group in enumerate(groups or ()):
        group_id = str(_pick(group, "item_id") or f"group-{group_index}")

        members: List[TimedItem] = []
        for index, record in enumerate(deliverables):
            if str(record.get("group")) != group_id:
                continue
            deliverable_id = str(_pick(record, "item_id") or f"{group_id}/deliverable-{index}")
            tasks = [
                t
                for t in tasks_by_deliverable.get(deliverable_id, ())
                if isinstance(t, Mapping)
            ]
            merged = {**record, "tasks": tasks}
            members.append(
                normalize_item(merged, kind=KIND_DELIVERABLE, fallback_id=deliverable_id)
            )

        if not members:
            continue

        starts = [m.start for m in members if m.start is not None]
        ends = [m.end for m in members if m.end is not None]

        name = _pick(group, "name")
        result.append(
            TimedItem(
                item_id=group_id,
                name=str(name) if name is not None else UNTITLED[KIND_GROUP],
                kind=KIND_GROUP,
                start=min(starts) if starts else None,
                end=max(ends) if ends else None,
                completed=all(m.completed for m in members),
                children=tuple(members),
            )
        )

    return tuple(result)


def items_from_frame(frame: pd.DataFrame) -> Tuple[TimedItem, ...]:
    """
    평면 테이블(CSV/엑셀)을 TimedItem 트리로 변환합니다.

    필수 컬럼은 item_id이며, parent_id가 비어 있는 행이 최상위 항목이 됩니다.
    나머지 컬럼(name, kind, start, end, completed)은 없으면 기본값을 씁니다.
    부모를 찾을 수 없는 행은 최상위로 올립니다.

    Args:
        frame: FRAME_COLUMNS 형식의 DataFrame

    Returns:
        최상위 TimedItem 튜플 (원본 행 순서 유지)
    """
    if frame is None or frame.empty or "item_id" not in frame.columns:
        return ()

    df = frame.copy()
    for column in FRAME_COLUMNS:
        if column not in df.columns:
            df[column] = None

    df["item_id"] = df["item_id"].astype(str)
    df["parent_id"] = df["parent_id"].map(
        lambda v: None if v is None or v == "" or pd.isna(v) else str(v)
    )

    known_ids = set(df["item_id"])
    children_of: Dict[Optional[str], List[pd.Series]] = {}
    for _, row in df.iterrows():
        parent = row["parent_id"] if row["parent_id"] in known_ids else None
        children_of.setdefault(parent, []).append(row)

    def _build(row: pd.Series, depth: int) -> TimedItem:
        kind = row["kind"] if row["kind"] in ITEM_KINDS else None
        if kind is None:
            kind = DEPTH_KINDS[min(depth, len(DEPTH_KINDS) - 1)]
        name = row["name"] if isinstance(row["name"], str) and row["name"] else None
        completed = row["completed"]
        return TimedItem(
            item_id=row["item_id"],
            name=name or UNTITLED.get(kind, DEFAULT_UNTITLED),
            kind=kind,
            start=to_timestamp(row["start"]),
            end=to_timestamp(row["end"]),
            completed=bool(completed) if not pd.isna(completed) else False,
            children=tuple(
                _build(child, depth + 1)
                for child in children_of.get(row["item_id"], ())
                if child["item_id"] != row["item_id"]
            ),
        )

    return tuple(_build(row, 0) for row in children_of.get(None, ()))

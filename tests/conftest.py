import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gantt_timeline.domain.models import KIND_DELIVERABLE, KIND_TASK, TimedItem  # noqa: E402


@pytest.fixture
def today() -> pd.Timestamp:
    """테스트용 고정 "오늘" (수요일)"""
    return pd.Timestamp("2025-01-15")


@pytest.fixture
def milestone_records() -> list:
    """API 응답 형식(camelCase)의 마일스톤 레코드"""
    return [
        {
            "_id": "m1",
            "name": "Kickoff",
            "calculatedStartDate": "2025-01-06",
            "calculatedEndDate": "2025-01-17",
            "status": "completed",
            "deliverables": [
                {
                    "_id": "d1",
                    "title": "Project brief",
                    "calculatedStartDate": "2025-01-06",
                    "calculatedEndDate": "2025-01-10",
                    "tasks": [
                        {"_id": "t1", "title": "Interviews", "dueDate": "2025-01-08"},
                    ],
                },
            ],
        },
        {
            "_id": "m2",
            "name": "Design",
            "calculatedStartDate": "2025-01-20",
            "calculatedEndDate": "2025-02-14",
            "deliverables": [],
        },
    ]


@pytest.fixture
def nested_items() -> tuple:
    """마일스톤 → 산출물 → 태스크 3단계 TimedItem 트리"""
    task = TimedItem("t1", "Interviews", KIND_TASK, end=pd.Timestamp("2025-01-08"))
    deliverable = TimedItem(
        "d1",
        "Project brief",
        KIND_DELIVERABLE,
        start=pd.Timestamp("2025-01-06"),
        end=pd.Timestamp("2025-01-10"),
        children=(task,),
    )
    kickoff = TimedItem(
        "m1",
        "Kickoff",
        start=pd.Timestamp("2025-01-06"),
        end=pd.Timestamp("2025-01-17"),
        completed=True,
        children=(deliverable,),
    )
    design = TimedItem(
        "m2",
        "Design",
        start=pd.Timestamp("2025-01-20"),
        end=pd.Timestamp("2025-02-14"),
    )
    return (kickoff, design)

"""Unified data loading interfaces for in-memory records, JSON files and the REST API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ..common.performance import measure_time_context
from ..core.config import CONFIG
from ..domain.exceptions import DataLoadError

logger = logging.getLogger(__name__)

# JSON 파일 최상위가 객체일 때 목록을 찾는 키
RECORD_LIST_KEY = "milestones"


class Loader(Protocol):
    """Simple protocol describing a load operation that returns milestone records."""

    def load(self) -> List[Dict[str, Any]]:  # pragma: no cover - interface definition
        ...


def _as_record_list(payload: Any, source: str) -> List[Dict[str, Any]]:
    """응답/파일 내용을 레코드 목록으로 변환합니다."""
    if isinstance(payload, dict) and RECORD_LIST_KEY in payload:
        payload = payload[RECORD_LIST_KEY]
    if not isinstance(payload, list):
        raise DataLoadError(
            f"{source}: 마일스톤 목록(list)을 기대했지만 {type(payload).__name__}을(를) 받았습니다."
        )

    records = [record for record in payload if isinstance(record, dict)]
    skipped = len(payload) - len(records)
    if skipped:
        logger.warning(f"{source}: skipped {skipped} non-object entries")
    return records


def parse_json_records(text: str, source: str = "<json>") -> List[Dict[str, Any]]:
    """JSON 문자열(업로드 파일 등)을 레코드 목록으로 변환합니다."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"JSON 형식이 올바르지 않습니다: {source} ({exc})") from exc
    return _as_record_list(payload, source)


@dataclass(frozen=True)
class StaticRecordsLoader:
    """Loader implementation that simply returns in-memory records."""

    records: Sequence[Dict[str, Any]] = ()

    def load(self) -> List[Dict[str, Any]]:
        return [dict(record) for record in self.records]


@dataclass(frozen=True)
class JsonFileLoader:
    """JSON 파일(목록 또는 {"milestones": [...]})에서 레코드를 읽습니다."""

    path: Path

    def load(self) -> List[Dict[str, Any]]:
        path = Path(self.path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except FileNotFoundError as exc:
            raise DataLoadError(f"파일을 찾을 수 없습니다: {path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise DataLoadError(f"JSON 파일을 읽을 수 없습니다: {path} ({exc})") from exc

        records = _as_record_list(payload, str(path))
        logger.info(f"Loaded {len(records)} milestones from {path}")
        return records


@dataclass(frozen=True)
class ApiMilestoneLoader:
    """
    REST 백엔드에서 프로젝트의 마일스톤 목록을 가져옵니다.

    ``GET {base_url}/projects/{project_id}/milestones`` 응답은
    하위 산출물/태스크를 포함한 마일스톤 목록입니다.
    """

    project_id: str
    base_url: str = field(default_factory=lambda: CONFIG.api.base_url)
    timeout: float = field(default_factory=lambda: CONFIG.api.timeout_seconds)
    session: Optional[requests.Session] = None

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/projects/{self.project_id}/milestones"

    def load(self) -> List[Dict[str, Any]]:
        if not str(self.project_id).strip():
            raise DataLoadError("프로젝트 ID가 비어 있습니다.")

        http = self.session or requests
        with measure_time_context(f"milestone fetch ({self.project_id})"):
            try:
                response = http.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                payload = response.json()
            except requests.exceptions.RequestException as exc:
                logger.warning(f"Milestone request failed: {self.url} ({exc})")
                raise DataLoadError(f"마일스톤을 불러오지 못했습니다: {exc}") from exc
            except ValueError as exc:
                raise DataLoadError(f"API 응답이 올바른 JSON이 아닙니다: {exc}") from exc

        records = _as_record_list(payload, self.url)
        logger.info(f"Loaded {len(records)} milestones for project {self.project_id}")
        return records

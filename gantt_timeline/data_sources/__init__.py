"""
데이터 소스 추상화 계층

이 모듈은 다양한 데이터 소스(메모리, JSON 파일, REST API)로부터
마일스톤 레코드를 로드하는 기능을 제공합니다.
"""

from .loader import (
    ApiMilestoneLoader,
    JsonFileLoader,
    Loader,
    StaticRecordsLoader,
    parse_json_records,
)

__all__ = [
    # 로더 프로토콜
    "Loader",
    # 로더 구현
    "StaticRecordsLoader",
    "JsonFileLoader",
    "ApiMilestoneLoader",
    # 헬퍼
    "parse_json_records",
]

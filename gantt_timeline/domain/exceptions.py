"""
도메인 계층 예외 정의

이 모듈은 Gantt 타임라인 도메인 계층에서 발생할 수 있는
모든 예외를 정의합니다. UI 계층은 이 예외들을 잡아서
사용자 친화적인 에러 메시지로 변환합니다.

레이아웃 엔진 자체는 잘못된 항목 데이터에 대해 예외를 던지지 않고
기본값으로 대체합니다. 아래 예외는 호출 경계(뷰 모드, 셀 크기,
데이터 로드)에서만 사용됩니다.
"""

from __future__ import annotations


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class ValidationError(DomainError):
    """
    입력 값 검증 실패 시 발생하는 예외.

    예: 알 수 없는 뷰 모드, 0 이하의 셀 너비/간격
    """

    pass


class DataLoadError(DomainError):
    """
    데이터 로드 실패 시 발생하는 예외.

    JSON 파일이나 REST API에서 마일스톤 목록을 불러올 때
    오류가 발생한 경우 사용합니다.
    """

    pass


class TimelineError(DomainError):
    """
    타임라인 레이아웃 빌드 실패 시 발생하는 예외.
    """

    pass

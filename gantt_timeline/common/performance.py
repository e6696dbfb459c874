"""
성능 모니터링 유틸리티

레이아웃 계산과 데이터 로드의 실행 시간을 측정해 로깅하는
데코레이터와 컨텍스트 매니저를 제공합니다.

레이아웃은 화면 크기 변경이나 보기 단위 전환마다 다시 계산되므로
밀리초 단위 임계값을 사용합니다.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic decorator
F = TypeVar("F", bound=Callable[..., Any])

# 경고/에러 임계값 (초)
WARN_THRESHOLD_SECONDS = 0.25
ERROR_THRESHOLD_SECONDS = 2.0


def _log_elapsed(operation_name: str, elapsed: float) -> None:
    if elapsed >= ERROR_THRESHOLD_SECONDS:
        logger.error(
            f"SLOW: {operation_name} took {elapsed * 1000:.0f}ms "
            f"(threshold: {ERROR_THRESHOLD_SECONDS * 1000:.0f}ms)"
        )
    elif elapsed >= WARN_THRESHOLD_SECONDS:
        logger.warning(
            f"{operation_name} took {elapsed * 1000:.0f}ms "
            f"(threshold: {WARN_THRESHOLD_SECONDS * 1000:.0f}ms)"
        )
    else:
        logger.debug(f"{operation_name} completed in {elapsed * 1000:.1f}ms")


def measure_time(func: F) -> F:
    """
    함수 실행 시간을 측정하고 로깅하는 데코레이터.

    250ms 이상이면 WARNING, 2초 이상이면 ERROR 레벨로 로깅합니다.

    Examples:
        >>> @measure_time
        ... def build_layout():
        ...     ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            _log_elapsed(func.__name__, time.perf_counter() - start_time)

    return wrapper  # type: ignore[return-value]


class PerformanceContext:
    """
    코드 블록의 실행 시간을 측정하는 컨텍스트 매니저.

    Attributes:
        operation_name: 측정할 작업의 이름
        elapsed: 경과 시간 (초)
    """

    def __init__(self, operation_name: str) -> None:
        self.operation_name = operation_name
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> PerformanceContext:
        self.start_time = time.perf_counter()
        logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is not None:
            logger.error(
                f"{self.operation_name} failed after {self.elapsed * 1000:.0f}ms"
            )
            return
        _log_elapsed(self.operation_name, self.elapsed)


def measure_time_context(operation_name: str) -> PerformanceContext:
    """
    컨텍스트 매니저를 사용한 코드 블록 성능 측정.

    Examples:
        >>> with measure_time_context("milestone fetch"):
        ...     records = loader.load()
    """
    return PerformanceContext(operation_name)

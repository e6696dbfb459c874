"""공통 유틸리티 모듈.

여러 모듈에서 공통으로 사용하는 성능 측정 도구를 제공합니다.
"""

from .performance import PerformanceContext, measure_time, measure_time_context

__all__ = [
    "measure_time",
    "measure_time_context",
    "PerformanceContext",
]

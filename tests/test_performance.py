"""
성능 측정 유틸리티 테스트
"""

from __future__ import annotations

import logging

import pytest

from gantt_timeline.common import performance
from gantt_timeline.common.performance import measure_time, measure_time_context


def test_measure_time_returns_result_and_keeps_name(caplog):
    @measure_time
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger=performance.__name__):
        assert add(1, 2) == 3

    assert add.__name__ == "add"
    assert "add completed in" in caplog.text


def test_measure_time_warns_when_slow(caplog, monkeypatch):
    monkeypatch.setattr(performance, "WARN_THRESHOLD_SECONDS", 0.0)

    @measure_time
    def noop():
        return None

    with caplog.at_level(logging.WARNING, logger=performance.__name__):
        noop()

    assert "noop took" in caplog.text


def test_context_records_elapsed_and_logs_failure(caplog):
    with caplog.at_level(logging.ERROR, logger=performance.__name__):
        with pytest.raises(RuntimeError):
            with measure_time_context("milestone fetch") as ctx:
                raise RuntimeError("down")

    assert ctx.elapsed >= 0
    assert "milestone fetch failed" in caplog.text

"""Tests for the profiling module.

Covers the ``@profile_operation`` decorator, the ``ProfileCollector``
singleton (windowing, thread safety, stats, reset), and the pipeline
stages that report into it.
"""

from __future__ import annotations

import logging
import threading
import time

import pytest

from format_engine.pipeline import SqlFormatter
from format_engine.telemetry.profiling import (
    OperationStats,
    ProfileCollector,
    profile_operation,
)

# ---------------------------------------------------------------------------
# OperationStats
# ---------------------------------------------------------------------------


class TestOperationStats:
    def test_from_durations(self) -> None:
        stats = OperationStats.from_durations("sql.parse", [4.0, 1.0, 3.0, 2.0])
        assert stats == OperationStats(
            operation="sql.parse",
            calls=4,
            total_ms=10.0,
            mean_ms=2.5,
            p50_ms=2.0,
            p95_ms=4.0,
            max_ms=4.0,
        )

    def test_nearest_rank_percentiles(self) -> None:
        stats = OperationStats.from_durations("perc", [float(i) for i in range(100, 0, -1)])
        assert stats.p50_ms == 50.0
        assert stats.p95_ms == 95.0
        assert stats.max_ms == 100.0

    def test_single_sample(self) -> None:
        stats = OperationStats.from_durations("one", [1.23456])
        assert stats.calls == 1
        assert stats.p50_ms == stats.p95_ms == stats.max_ms == 1.235

    def test_immutable(self) -> None:
        stats = OperationStats.from_durations("x", [1.0])
        with pytest.raises(AttributeError):
            stats.calls = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# ProfileCollector
# ---------------------------------------------------------------------------


class TestProfileCollector:
    def test_singleton_identity(self) -> None:
        assert ProfileCollector.get_instance() is ProfileCollector.get_instance()

    def test_reset_creates_new_instance(self) -> None:
        a = ProfileCollector.get_instance()
        ProfileCollector.reset()
        assert ProfileCollector.get_instance() is not a

    def test_record_and_stats(self) -> None:
        collector = ProfileCollector.get_instance()
        for i in range(10):
            collector.record("op.a", float(i + 1))
        stats = collector.stats("op.a")
        assert stats is not None
        assert stats.operation == "op.a"
        assert stats.calls == 10
        assert stats.total_ms == 55.0
        assert stats.mean_ms == 5.5
        assert stats.max_ms == 10.0

    def test_stats_for_unknown_operation(self) -> None:
        assert ProfileCollector.get_instance().stats("nonexistent") is None

    def test_window_keeps_most_recent(self) -> None:
        collector = ProfileCollector(window=5)
        for i in range(10):
            collector.record("evict", float(i))
        stats = collector.stats("evict")
        assert stats is not None
        assert stats.calls == 5
        # 0-4 fell out of the window.
        assert stats.total_ms == 35.0

    def test_window_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="window must be positive"):
            ProfileCollector(window=0)

    def test_clear(self) -> None:
        collector = ProfileCollector.get_instance()
        collector.record("clear_me", 1.0)
        collector.clear()
        assert collector.stats("clear_me") is None
        assert collector.snapshot() == []

    def test_snapshot_sorted_by_name(self) -> None:
        collector = ProfileCollector.get_instance()
        for name in ["zz.op", "aa.op", "mm.op"]:
            collector.record(name, 1.0)
        assert [s.operation for s in collector.snapshot()] == ["aa.op", "mm.op", "zz.op"]

    def test_thread_safety(self) -> None:
        """Concurrent writers should not corrupt the collector."""
        collector = ProfileCollector.get_instance()
        errors: list[Exception] = []

        def writer(op_name: str, count: int) -> None:
            try:
                for i in range(count):
                    collector.record(op_name, float(i))
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(f"thread_{t}", 100)) for t in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        for t_idx in range(8):
            stats = collector.stats(f"thread_{t_idx}")
            assert stats is not None
            assert stats.calls == 100


# ---------------------------------------------------------------------------
# @profile_operation
# ---------------------------------------------------------------------------


class TestProfileOperation:
    def test_records_timing(self) -> None:
        @profile_operation("test.sync")
        def slow_add(a: int, b: int) -> int:
            time.sleep(0.01)
            return a + b

        assert slow_add(2, 3) == 5
        stats = ProfileCollector.get_instance().stats("test.sync")
        assert stats is not None
        assert stats.calls == 1
        assert stats.mean_ms >= 5.0

    def test_preserves_function_metadata(self) -> None:
        @profile_operation("test.meta")
        def documented_fn() -> str:
            """A docstring."""
            return "ok"

        assert documented_fn.__name__ == "documented_fn"
        assert documented_fn.__doc__ == "A docstring."

    def test_records_on_exception(self) -> None:
        @profile_operation("test.error")
        def failing() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            failing()
        stats = ProfileCollector.get_instance().stats("test.error")
        assert stats is not None
        assert stats.calls == 1

    def test_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        @profile_operation("test.log")
        def noop() -> None:
            return None

        with caplog.at_level(logging.DEBUG, logger="format_engine.telemetry.profiling"):
            noop()
        assert "PROFILE test.log" in caplog.text


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------


class TestPipelineStages:
    def test_each_stage_is_recorded(self) -> None:
        SqlFormatter("sql").format("select a from t; select b from u")
        collector = ProfileCollector.get_instance()
        names = [s.operation for s in collector.snapshot()]
        assert names == ["sql.layout", "sql.parse", "sql.tokenize"]
        for name in names:
            stats = collector.stats(name)
            assert stats is not None
            assert stats.calls == 1

"""Timing for the pipeline stages.

``@profile_operation(name)`` times each call of the wrapped function and
feeds the duration into the process-wide :class:`ProfileCollector`.
``sqlfmt format --profile`` prints :meth:`ProfileCollector.snapshot`
after a run.

Usage::

    from format_engine.telemetry.profiling import profile_operation

    @profile_operation("sql.parse")
    def parse(self, tokens):
        ...
"""

from __future__ import annotations

import functools
import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _nearest_rank(ordered: Sequence[float], percent: int) -> float:
    """Smallest sample with at least *percent* of the samples at or below it."""
    rank = max(1, math.ceil(percent * len(ordered) / 100))
    return ordered[rank - 1]


@dataclass(frozen=True)
class OperationStats:
    """Timings of one operation over the collector's window, in milliseconds."""

    operation: str
    calls: int
    total_ms: float
    mean_ms: float
    p50_ms: float
    p95_ms: float
    max_ms: float

    @classmethod
    def from_durations(cls, operation: str, durations: Sequence[float]) -> OperationStats:
        ordered = sorted(durations)
        total = sum(ordered)
        return cls(
            operation=operation,
            calls=len(ordered),
            total_ms=round(total, 3),
            mean_ms=round(total / len(ordered), 3),
            p50_ms=round(_nearest_rank(ordered, 50), 3),
            p95_ms=round(_nearest_rank(ordered, 95), 3),
            max_ms=round(ordered[-1], 3),
        )


class ProfileCollector:
    """Thread-safe store of the most recent durations per operation.

    Only the last ``window`` durations of each operation are kept, so a
    long-running process holds bounded memory.
    """

    _instance: ProfileCollector | None = None
    _instance_lock = threading.Lock()

    def __init__(self, window: int = 1000) -> None:
        if window < 1:
            raise ValueError(f"window must be positive, got {window}")
        self._window = window
        self._durations: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ProfileCollector:
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared collector; the next ``get_instance`` starts empty."""
        with cls._instance_lock:
            cls._instance = None

    def record(self, operation: str, duration_ms: float) -> None:
        with self._lock:
            samples = self._durations.setdefault(operation, deque(maxlen=self._window))
            samples.append(duration_ms)

    def stats(self, operation: str) -> OperationStats | None:
        """Timings of *operation*, or None if it never ran."""
        with self._lock:
            samples = list(self._durations.get(operation, ()))
        if not samples:
            return None
        return OperationStats.from_durations(operation, samples)

    def snapshot(self) -> list[OperationStats]:
        """Timings of every recorded operation, ordered by name."""
        with self._lock:
            recorded = {name: list(samples) for name, samples in self._durations.items() if samples}
        return [OperationStats.from_durations(name, recorded[name]) for name in sorted(recorded)]

    def clear(self) -> None:
        with self._lock:
            self._durations.clear()


def profile_operation(name: str) -> Callable[[F], F]:
    """Record the wall-clock duration of every call under *name*.

    Calls that raise are recorded too.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_ns = time.perf_counter_ns()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
                ProfileCollector.get_instance().record(name, duration_ms)
                logger.debug("PROFILE %s: %.3f ms", name, duration_ms)

        return wrapper  # type: ignore[return-value]

    return decorator

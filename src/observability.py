"""Observability: process-local counters and latency timers.

Read by ``GET /health`` and logged once when the API shuts down.
"""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


def _ms(seconds: float) -> float:
    return round(seconds * 1000, 2)


class Metrics:
    """Named counters plus latency samples per timer name."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._samples: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def observe(self, name: str, seconds: float):
        self._samples.setdefault(name, []).append(seconds)

    @contextmanager
    def timer(self, name: str):
        """Record the wall time of the block, including when it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(name, time.perf_counter() - start)

    def summary(self) -> dict[str, Any]:
        timers = {}
        for name, samples in self._samples.items():
            ordered = sorted(samples)
            p95 = ordered[min(len(ordered) - 1, int(len(ordered) * 0.95))]
            timers[name] = {
                "count": len(ordered),
                "avg_ms": _ms(sum(ordered) / len(ordered)),
                "p95_ms": _ms(p95),
                "max_ms": _ms(ordered[-1]),
            }
        return {"counters": dict(sorted(self._counters.items())), "timers": timers}

    def reset(self):
        self._counters.clear()
        self._samples.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary(event: str = "run_summary"):
    """Log the current metrics summary via structlog."""
    logger.info(event, **metrics.summary())

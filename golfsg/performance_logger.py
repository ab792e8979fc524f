"""
Stage timing for grid computations.

A tracker is created per computation rather than shared globally so concurrent
calls never touch each other's timers.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator

from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class OperationTimer:
    """Tracks timing for a specific operation type."""
    name: str
    total_time: float = 0.0
    call_count: int = 0


@dataclass
class PerformanceTracker:
    timers: Dict[str, OperationTimer] = field(default_factory=dict)

    def get_timer(self, name: str) -> OperationTimer:
        if name not in self.timers:
            self.timers[name] = OperationTimer(name)
        return self.timers[name]

    @contextmanager
    def time_operation(self, name: str) -> Iterator[None]:
        """Context manager for timing operations."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            timer = self.get_timer(name)
            timer.total_time += elapsed
            timer.call_count += 1
            logger.debug("Operation '%s' took %.4f seconds", name, elapsed)

    def get_total_tracked_time(self) -> float:
        return sum(timer.total_time for timer in self.timers.values())

    def log_summary(self, title: str = "Performance Summary") -> None:
        if not self.timers:
            logger.debug("%s: No operations tracked", title)
            return
        total_tracked = self.get_total_tracked_time()
        logger.debug("%s: %.4f seconds tracked", title, total_tracked)
        for timer in sorted(self.timers.values(), key=lambda t: t.total_time, reverse=True):
            logger.debug(
                "  %-24s: %7.4fs (%5.1f%%)",
                timer.name,
                timer.total_time,
                (timer.total_time / max(total_tracked, 1e-9)) * 100,
            )

# =============================================================================
# File: performance_tracker.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import time
from collections import defaultdict, deque
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Optional

from app.logger import get_logger

logger = get_logger("performance_tracker")


class PerformanceTracker:
    """Track timings of engine loads, translations and auth lookups."""

    def __init__(self, max_samples: int = 1000):
        self.max_samples = max_samples
        self.metrics: Dict[str, deque] = defaultdict(lambda: deque(maxlen=max_samples))
        self.counters: Dict[str, int] = defaultdict(int)
        self.failures: Dict[str, int] = defaultdict(int)
        self._lock = Lock()

    @contextmanager
    def track(self, operation: str):
        """Context manager to track operation timing; failed operations are counted too."""
        start_time = time.perf_counter()
        failed = False
        try:
            yield
        except BaseException:
            failed = True
            raise
        finally:
            duration = time.perf_counter() - start_time
            with self._lock:
                self.metrics[operation].append(duration)
                self.counters[operation] += 1
                if failed:
                    self.failures[operation] += 1

    def get_stats(self, operation: str) -> Optional[Dict[str, Any]]:
        """Get performance statistics for an operation."""
        with self._lock:
            if operation not in self.metrics or not self.metrics[operation]:
                return None
            times = list(self.metrics[operation])
            total_calls = self.counters[operation]
            failures = self.failures[operation]
        return {
            "count": len(times),
            "avg_ms": sum(times) * 1000 / len(times),
            "min_ms": min(times) * 1000,
            "max_ms": max(times) * 1000,
            "total_calls": total_calls,
            "failures": failures,
        }

    def get_all_stats(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            operations = list(self.metrics)
        return {op: stats for op in operations if (stats := self.get_stats(op))}

    def reset(self) -> None:
        with self._lock:
            self.metrics.clear()
            self.counters.clear()
            self.failures.clear()

    def log_stats(self):
        """Log performance statistics."""
        for operation, stats in self.get_all_stats().items():
            logger.info(
                f"Performance [{operation}]: "
                f"avg={stats['avg_ms']:.2f}ms, "
                f"min={stats['min_ms']:.2f}ms, "
                f"max={stats['max_ms']:.2f}ms, "
                f"calls={stats['total_calls']}, "
                f"failures={stats['failures']}"
            )


# Global performance tracker
perf_tracker = PerformanceTracker()

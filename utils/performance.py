"""
Performance monitoring utilities.

Records how long ingestion, rendering and export steps take and warns about
steps slower than the configured threshold.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Callable, Any, Dict, List, Optional

from config import get_config

# Configure logging
logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Collects operation durations by name.
    """

    def __init__(self):
        self.metrics: Dict[str, List[float]] = {}

    def record(self, operation: str, duration: float):
        """
        Record an operation duration.

        Args:
            operation: Name of the operation
            duration: Duration in seconds
        """
        self.metrics.setdefault(operation, []).append(duration)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Get statistics for an operation.

        Returns:
            Dictionary with min, max, avg, total, count (all 0 if unseen)
        """
        durations = self.metrics.get(operation)
        if not durations:
            return {'min': 0, 'max': 0, 'avg': 0, 'total': 0, 'count': 0}

        total = sum(durations)
        return {
            'min': min(durations),
            'max': max(durations),
            'avg': total / len(durations),
            'total': total,
            'count': len(durations)
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        """Statistics for every recorded operation."""
        return {operation: self.get_stats(operation) for operation in self.metrics}

    def clear(self):
        """Clear all recorded metrics."""
        self.metrics.clear()

    def log_stats(self):
        """Log one summary line per operation."""
        for operation, stats in self.get_all_stats().items():
            logger.info(
                "%s: count=%d avg=%.4fs max=%.4fs total=%.4fs",
                operation, stats['count'], stats['avg'], stats['max'], stats['total']
            )


# Global performance monitor instance
_global_monitor = PerformanceMonitor()


def get_monitor() -> PerformanceMonitor:
    """Get the global performance monitor instance."""
    return _global_monitor


def _finish(operation: str, started: float):
    duration = time.perf_counter() - started
    _global_monitor.record(operation, duration)

    threshold = get_config().slow_operation_threshold
    if duration > threshold:
        logger.warning(
            "Operation '%s' took %.2fs (threshold: %.1fs)", operation, duration, threshold
        )


def monitor_performance(operation_name: Optional[str] = None):
    """
    Decorator recording the duration of every call.

    Args:
        operation_name: Name for the operation (defaults to function name)

    Example:
        @monitor_performance("parse_table")
        def parse_table(data):
            ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _finish(op_name, started)

        return wrapper
    return decorator


@contextmanager
def measure_time(operation_name: str):
    """
    Context manager recording the duration of a block.

    Example:
        with measure_time("render_questions"):
            html = engine.render_questions_list(records)
    """
    started = time.perf_counter()
    try:
        yield
    finally:
        _finish(operation_name, started)

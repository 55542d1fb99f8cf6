"""Performance profiling utilities for timewarp.

The dense dynamic program is O(L1·L2) in both time and memory, so the cost
matrix builder is instrumented with ``profile_memory`` and large inputs are
rejected before any table is allocated.

Measurements are only logged (DEBUG, or WARNING above a threshold); nothing
is kept between calls.
"""

import functools
import os
import time
from typing import Callable

import psutil

from .config import Config
from .exceptions import check_memory_limit
from .logging import get_logger, log_execution_time, log_memory_usage


def _rss_mb() -> float:
    return psutil.Process(os.getpid()).memory_info().rss / 1024 / 1024


def profile_memory(
    memory_threshold_mb: float = Config.memory.COST_MATRIX_WARNING_MB,
    log_results: bool = True
) -> Callable:
    """Decorator logging the run time and resident memory growth of a call.

    Args:
        memory_threshold_mb: Growth above which a WARNING is logged
        log_results: Whether to log the measurements at DEBUG

    Example:
        @profile_memory(memory_threshold_mb=256.0)
        def build_tables(a, b):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(f"timewarp.profiling.{func.__name__}")

            start_memory = _rss_mb()
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug(f"Error in {func.__name__}: {e}")
                raise

            execution_time = time.perf_counter() - start_time
            memory_delta = max(0.0, _rss_mb() - start_memory)

            if log_results:
                log_execution_time(logger, execution_time, func.__name__)
                log_memory_usage(logger, memory_delta, func.__name__)

            if memory_delta > memory_threshold_mb:
                logger.warning(
                    f"{func.__name__} exceeded memory threshold: "
                    f"{memory_delta:.2f}MB > {memory_threshold_mb:.2f}MB"
                )

            return result

        return wrapper
    return decorator


def estimate_table_memory_mb(
    length1: int,
    length2: int,
    tables: int = Config.memory.TABLES_PER_ALIGNMENT,
    bytes_per_cell: int = Config.memory.BYTES_PER_CELL,
    working_bytes_per_cell: int = Config.memory.WORKING_BYTES_PER_CELL
) -> float:
    """Estimate the peak memory of one alignment with real valued costs.

    Counts the float64 local and accumulated tables plus the two lists of
    Python floats the recurrence works on while it runs. Distances returning
    other objects (e.g. ``Fraction``) take more than this.
    """
    per_cell = tables * bytes_per_cell + working_bytes_per_cell
    return length1 * length2 * per_cell / 1024 / 1024


def check_memory_limits(
    length1: int,
    length2: int,
    limit_mb: float = Config.memory.DEFAULT_MEMORY_LIMIT_MB,
    operation: str = "cost matrix construction"
) -> float:
    """Check the peak memory estimate against a limit.

    Returns:
        The estimate in MB

    Raises:
        MemoryError: If the estimate exceeds ``limit_mb``
    """
    estimate_mb = estimate_table_memory_mb(length1, length2)
    check_memory_limit(estimate_mb, limit_mb, operation=operation)
    return estimate_mb

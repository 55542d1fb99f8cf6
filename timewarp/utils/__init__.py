"""Utilities for the timewarp package.

This module contains common utilities used throughout the package:
- Logging infrastructure
- Custom exception hierarchy
- Configuration constants
- Performance profiling tools
- Validation helpers
"""

from .logging import setup_logger
from .exceptions import (
    TimeWarpError,
    ValidationError,
    ComputationError,
    MemoryError,
    ConfigurationError,
)
from .config import Config
from .profiling import profile_memory, check_memory_limits

__all__ = [
    "setup_logger",
    "TimeWarpError",
    "ValidationError",
    "ComputationError",
    "MemoryError",
    "ConfigurationError",
    "Config",
    "profile_memory",
    "check_memory_limits",
]

"""Configuration constants for timewarp.

This module centralizes the defaults used by the alignment engine so that
the public entry points, the distance registry and the memory guard agree.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AlignmentConstants:
    """Defaults for the public alignment entry points."""

    # Time axis of a sequence (trailing axis)
    TIME_AXIS: int = -1

    # Registered name of the distance used when none is given
    DEFAULT_DISTANCE: str = "sqeuclidean"

    # Link reconstruction
    DEFAULT_SAMPLING_RATE: float = 1.0
    DEFAULT_LINK_COUNT: int = 0


@dataclass(frozen=True)
class MemoryConstants:
    """Memory management constants for the dense DP tables."""

    # Local and accumulated cost tables are both materialized as float64
    TABLES_PER_ALIGNMENT: int = 2
    BYTES_PER_CELL: int = 8

    # Two lists of Python floats (8 byte pointer + 24 byte float each) live
    # alongside the tables while the recurrence runs
    WORKING_BYTES_PER_CELL: int = 64

    # Thresholds (in MB)
    COST_MATRIX_WARNING_MB: float = 512.0
    DEFAULT_MEMORY_LIMIT_MB: float = 4096.0


class Config:
    """Global configuration object containing all constants."""

    alignment = AlignmentConstants()
    memory = MemoryConstants()

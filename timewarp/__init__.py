"""timewarp: Dynamic Time Warping alignment of sequences.

This package aligns two ordered sequences of samples (scalars, vectors or
higher-rank frames) with a dense dynamic program and turns the alignment
into coordinates for drawing links between the sequences. It includes:

- A pluggable frame distance (squared Euclidean by default)
- Cost matrix construction and deterministic traceback
- Link sampling for plotting over a shared time axis
- Accepts numpy arrays, nested lists and PyTorch tensors
"""

__version__ = "0.1.0"

from .api import align, link, TimeWarpAligner, AlignmentResult
from .core import (
    select_frame,
    SequenceFrames,
    squared_euclidean,
    euclidean,
    manhattan,
    build_cost_matrix,
    trackback,
    link_coordinates,
)
from .utils.logging import setup_logger
from .utils.exceptions import (
    TimeWarpError,
    ValidationError,
    ComputationError,
    MemoryError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    # Entry points
    "align",
    "link",
    "TimeWarpAligner",
    "AlignmentResult",
    # Core
    "select_frame",
    "SequenceFrames",
    "squared_euclidean",
    "euclidean",
    "manhattan",
    "build_cost_matrix",
    "trackback",
    "link_coordinates",
    # Utilities
    "setup_logger",
    # Exceptions
    "TimeWarpError",
    "ValidationError",
    "ComputationError",
    "MemoryError",
    "ConfigurationError",
]

"""Core dynamic time warping operations.

This module contains the pure functions of the alignment engine:
- Frame extraction along the time axis
- Distance strategies between frames
- Cost matrix construction
- Traceback of the optimal path
- Link sampling for visualization

All state is local to a call; nothing is cached between alignments.
"""

from .frames import select_frame, SequenceFrames
from .distance import (
    squared_euclidean,
    euclidean,
    manhattan,
    resolve_distance,
    is_builtin,
    DISTANCES,
)
from .cost_matrix import local_cost_matrix, accumulate_cost, build_cost_matrix
from .path import trackback, path_cost
from .links import select_links, time_axis, link_coordinates

__all__ = [
    "select_frame",
    "SequenceFrames",
    "squared_euclidean",
    "euclidean",
    "manhattan",
    "resolve_distance",
    "is_builtin",
    "DISTANCES",
    "local_cost_matrix",
    "accumulate_cost",
    "build_cost_matrix",
    "trackback",
    "path_cost",
    "select_links",
    "time_axis",
    "link_coordinates",
]

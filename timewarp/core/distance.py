"""Distance strategies between two frames.

A distance strategy is any callable ``d(frame_a, frame_b)`` returning a single
comparable, summable value. The traceback relies on non-negative values;
negative distances can make it pick a suboptimal predecessor.

The built-in strategies work on frames of any rank and require both frames
to have the same shape. They also provide a row kernel that evaluates one
frame against a whole stack of frames with the same elementwise arithmetic,
which the cost matrix builder uses to avoid a Python call per cell.
"""

from typing import Any, Callable, Dict, Optional, Union

import numpy as np

from ..utils.config import Config
from ..utils.exceptions import ValidationError

DistanceFunction = Callable[[Any, Any], Any]


def squared_euclidean(a: Any, b: Any) -> float:
    """Sum of squared elementwise differences (default strategy)."""
    diff = np.subtract(a, b, dtype=np.float64)
    return float(np.sum(diff * diff))


def euclidean(a: Any, b: Any) -> float:
    """Euclidean norm of the frame difference."""
    return float(np.sqrt(squared_euclidean(a, b)))


def manhattan(a: Any, b: Any) -> float:
    """Sum of absolute elementwise differences."""
    diff = np.subtract(a, b, dtype=np.float64)
    return float(np.sum(np.abs(diff)))


def _frame_axes(diff: np.ndarray) -> tuple:
    return tuple(range(1, diff.ndim))


def _squared_euclidean_row(frame: Any, frames: np.ndarray) -> np.ndarray:
    diff = np.subtract(frames, frame, dtype=np.float64)
    return np.sum(diff * diff, axis=_frame_axes(diff))


def _euclidean_row(frame: Any, frames: np.ndarray) -> np.ndarray:
    return np.sqrt(_squared_euclidean_row(frame, frames))


def _manhattan_row(frame: Any, frames: np.ndarray) -> np.ndarray:
    diff = np.subtract(frames, frame, dtype=np.float64)
    return np.sum(np.abs(diff), axis=_frame_axes(diff))


DISTANCES: Dict[str, DistanceFunction] = {
    "sqeuclidean": squared_euclidean,
    "euclidean": euclidean,
    "cityblock": manhattan,
    "manhattan": manhattan,
}

_ROW_KERNELS = {
    squared_euclidean: _squared_euclidean_row,
    euclidean: _euclidean_row,
    manhattan: _manhattan_row,
}


def resolve_distance(distance: Optional[Union[str, DistanceFunction]] = None) -> DistanceFunction:
    """Turn a distance argument into a callable.
    
    Args:
        distance: ``None`` for ``Config.alignment.DEFAULT_DISTANCE``, a
            registered name, or a callable
        
    Returns:
        Distance callable
        
    Raises:
        ValidationError: If the name is unknown or the object is not callable
    """
    if distance is None:
        distance = Config.alignment.DEFAULT_DISTANCE
    
    if isinstance(distance, str):
        try:
            return DISTANCES[distance.lower()]
        except KeyError:
            raise ValidationError(
                f"Unknown distance: {distance}",
                parameter="distance",
                expected=sorted(DISTANCES),
                actual=distance
            ) from None
    
    if not callable(distance):
        raise ValidationError(
            "distance must be callable or a registered name",
            parameter="distance",
            actual=type(distance).__name__
        )
    
    return distance


def is_builtin(distance: DistanceFunction) -> bool:
    """Whether ``distance`` is one of the built-in strategies."""
    return row_kernel(distance) is not None


def row_kernel(distance: DistanceFunction) -> Optional[Callable[[Any, np.ndarray], np.ndarray]]:
    """Vectorized ``frame`` vs ``frames`` kernel of a built-in strategy, or None."""
    # Identity lookup: user callables need not be hashable
    for builtin, kernel in _ROW_KERNELS.items():
        if distance is builtin:
            return kernel
    return None

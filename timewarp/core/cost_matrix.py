"""Dense cost matrix construction for dynamic time warping.

The builder works in two passes:

1. ``local_cost_matrix`` evaluates the distance between every pair of frames,
   ``local[i, j] = d(frame1(i), frame2(j))``.
2. ``accumulate_cost`` turns it into the accumulated cost table

   - ``cost[0, 0] = local[0, 0]``
   - first row and first column are running sums along the border
   - ``cost[i, j] = local[i, j] + min(cost[i-1, j], cost[i-1, j-1], cost[i, j-1])``

so that ``cost[i, j]`` is the cheapest monotonic alignment of the first
``i + 1`` frames of one sequence with the first ``j + 1`` frames of the
other. Both tables are O(L1·L2); nothing is banded or pruned.
"""

from itertools import accumulate
from typing import Any, Optional, Union

import numpy as np

from .distance import DistanceFunction, resolve_distance, row_kernel
from .frames import SequenceFrames
from ..utils.exceptions import ValidationError, ComputationError
from ..utils.logging import setup_logger
from ..utils.profiling import profile_memory

logger = setup_logger(__name__)


def _cost_dtype(value: Any) -> np.dtype:
    """float64 for real valued distances, object for anything else comparable."""
    if np.asarray(value).dtype.kind in "biuf":
        return np.dtype(np.float64)
    return np.dtype(object)


def _single_value(value: Any, i: int, j: int) -> Any:
    if np.ndim(value) != 0:
        raise ValidationError(
            "distance must return a single value",
            parameter="distance",
            expected="scalar",
            actual=f"shape {np.shape(value)}",
            context={"row": i, "column": j}
        )
    if isinstance(value, np.ndarray):
        return value[()]
    return value


def local_cost_matrix(
    sequence1: Any,
    sequence2: Any,
    distance: Optional[Union[str, DistanceFunction]] = None,
    axis: int = -1
) -> np.ndarray:
    """Evaluate the distance between every pair of frames.
    
    Built-in distances are evaluated one row at a time with numpy; any other
    callable is invoked once per cell. Exceptions raised by a user distance
    are not caught.
    
    Args:
        sequence1: First sequence (time along ``axis``)
        sequence2: Second sequence (time along ``axis``)
        distance: Distance strategy, registered name or None for the default
        axis: Time axis of both sequences
        
    Returns:
        Array of shape (L1, L2)
        
    Raises:
        ValidationError: If a sequence is empty, frames are incompatible with
            a built-in distance (including NaN/Inf values), or the distance
            returns a non-scalar
        ComputationError: If a distance evaluates to NaN
    """
    distance = resolve_distance(distance)
    kernel = row_kernel(distance)
    # NaN/Inf frames are left to custom distances to interpret
    frames1 = SequenceFrames(sequence1, axis, "sequence1", require_finite=kernel is not None)
    frames2 = SequenceFrames(sequence2, axis, "sequence2", require_finite=kernel is not None)
    
    if kernel is not None:
        if frames1.frame_shape != frames2.frame_shape:
            raise ValidationError(
                f"{distance.__name__} requires frames of equal shape",
                parameter="sequence2",
                expected=frames1.frame_shape,
                actual=frames2.frame_shape
            )
        for name, frames in (("sequence1", frames1), ("sequence2", frames2)):
            if frames.array.dtype.kind not in "biuf":
                raise ValidationError(
                    f"{distance.__name__} requires numeric frames",
                    parameter=name,
                    expected="real dtype",
                    actual=str(frames.array.dtype)
                )
        
        stacked2 = frames2.stacked()
        local = np.empty((len(frames1), len(frames2)), dtype=np.float64)
        for i, frame in enumerate(frames1):
            local[i] = kernel(frame, stacked2)
    else:
        values = [
            [_single_value(distance(a, b), i, j) for j, b in enumerate(frames2)]
            for i, a in enumerate(frames1)
        ]
        dtype = _cost_dtype(values[0][0])
        local = np.empty((len(frames1), len(frames2)), dtype=dtype)
        local[...] = values
    
    if local.dtype.kind == "f":
        nan_cells = np.argwhere(np.isnan(local))
        if len(nan_cells):
            i, j = nan_cells[0]
            raise ComputationError(
                "Distance evaluated to NaN",
                operation="local_cost_matrix",
                values={"row": int(i), "column": int(j)}
            )
        if np.any(local < 0):
            logger.warning(
                "Negative distances found; the traceback assumes non-negative "
                "costs and the returned path may not be optimal"
            )
    
    return local


def accumulate_cost(local: np.ndarray) -> np.ndarray:
    """Fill the accumulated cost table from a table of local costs.
    
    Args:
        local: Array of shape (L1, L2) with ``local[i, j] = d(i, j)``
        
    Returns:
        Accumulated cost table of the same shape and dtype
    """
    local = np.asarray(local)
    if local.ndim != 2 or local.size == 0:
        raise ValidationError(
            "local cost table must be a non-empty 2D array",
            parameter="local",
            actual=local.shape
        )
    
    # Plain lists are much faster than per-element ndarray access
    rows = local.tolist()
    accumulated = [list(accumulate(rows[0]))]
    for row_local in rows[1:]:
        above = accumulated[-1]
        row = [above[0] + row_local[0]]
        for j in range(1, len(row_local)):
            row.append(row_local[j] + min(above[j], above[j - 1], row[j - 1]))
        accumulated.append(row)
    
    cost = np.empty(local.shape, dtype=local.dtype)
    cost[...] = accumulated
    
    if cost.dtype.kind == "f" and np.isnan(cost[-1, -1]):
        raise ComputationError(
            "Accumulated cost is NaN",
            operation="accumulate_cost",
            values={"shape": cost.shape}
        )
    
    return cost


@profile_memory()
def build_cost_matrix(
    sequence1: Any,
    sequence2: Any,
    distance: Optional[Union[str, DistanceFunction]] = None,
    axis: int = -1
) -> np.ndarray:
    """Build the accumulated DTW cost matrix of two sequences.
    
    Example:
        >>> cost = build_cost_matrix([1, 2, 3], [1, 2, 2, 3])
        >>> float(cost[-1, -1])
        0.0
    """
    local = local_cost_matrix(sequence1, sequence2, distance, axis)
    logger.debug(f"Accumulating cost over a {local.shape[0]}x{local.shape[1]} table")
    return accumulate_cost(local)

"""Recovery of the optimal warping path from an accumulated cost table."""

from typing import Tuple

import numpy as np

from ..utils.exceptions import ValidationError


def trackback(cost: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the lowest cost path through an accumulated cost table.
    
    The walk starts at the last cell and repeatedly moves to the cheapest of
    the three predecessors. Ties are broken in a fixed order: the diagonal
    ``(i-1, j-1)`` first, then ``(i, j-1)``, then ``(i-1, j)``. Once the walk
    reaches the first row or column, the path is completed with a straight
    run along that border down to ``(0, 0)``.
    
    Args:
        cost: Accumulated cost table of shape (L1, L2)
        
    Returns:
        Tuple (path1, path2) of equal-length index arrays running from
        ``(0, 0)`` to ``(L1 - 1, L2 - 1)``
        
    Raises:
        ValidationError: If ``cost`` is not a non-empty 2D table
    """
    cost = np.asarray(cost)
    if cost.ndim != 2 or cost.size == 0:
        raise ValidationError(
            "cost must be a non-empty 2D array",
            parameter="cost",
            actual=cost.shape
        )
    
    i, j = cost.shape[0] - 1, cost.shape[1] - 1
    path1, path2 = [i], [j]
    
    while i > 0 and j > 0:
        # min() keeps the first of equal candidates
        i, j = min(
            ((i - 1, j - 1), (i, j - 1), (i - 1, j)),
            key=lambda cell: cost[cell]
        )
        path1.append(i)
        path2.append(j)
    
    # Border reached: run straight to the origin
    path1.extend(range(i - 1, -1, -1))
    path2.extend([0] * i)
    path2.extend(range(j - 1, -1, -1))
    path1.extend([0] * j)
    
    return (
        np.array(path1[::-1], dtype=np.intp),
        np.array(path2[::-1], dtype=np.intp),
    )


def path_cost(local: np.ndarray, path1: np.ndarray, path2: np.ndarray):
    """Sum of the local costs visited by a path."""
    local = np.asarray(local)
    return sum(local[i, j] for i, j in zip(path1, path2))

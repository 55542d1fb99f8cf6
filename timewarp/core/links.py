"""Link reconstruction for drawing an alignment.

A link joins a frame of one sequence to the frame of the other sequence it
was aligned with. The coordinates returned here are meant to be handed to a
plotting library: ``x`` holds the two time stamps of every link and ``y`` the
two frame values, so ``plot(x, y)`` draws one segment per link.
"""

from typing import Any, Tuple

import numpy as np

from ..utils.exceptions import ValidationError
from ..utils.logging import setup_logger
from ..utils.validation import (
    validate_sequences,
    validate_sampling_rate,
    validate_link_count,
)

logger = setup_logger(__name__)


def select_links(path_length: int, link_count: int = 0) -> np.ndarray:
    """Choose which positions of an alignment path become links.
    
    With ``link_count == 0`` every position is used. Otherwise positions are
    spaced by ``step = path_length // link_count`` (at least 1) starting at
    0, giving ``ceil(path_length / step)`` links, and the final one is moved
    onto the last position so both ends of the alignment are always drawn.
    
    Args:
        path_length: Number of pairs K in the alignment path
        link_count: Requested number of links, 0 for all
        
    Returns:
        Increasing array of path positions
    """
    link_count = validate_link_count(link_count)
    if path_length < 1:
        raise ValidationError(
            "path_length must be positive",
            parameter="path_length",
            actual=path_length
        )
    
    if link_count == 0:
        return np.arange(path_length)
    
    if link_count > path_length:
        logger.debug(
            f"Requested {link_count} links but the path only has {path_length} pairs"
        )
    
    step = max(path_length // link_count, 1)
    positions = np.arange(0, path_length, step)
    positions[-1] = path_length - 1
    return positions


def time_axis(length: int, sampling_rate: float = 1.0) -> np.ndarray:
    """Time stamps ``k / sampling_rate`` for ``k = 0 .. length - 1``."""
    sampling_rate = validate_sampling_rate(sampling_rate)
    return np.arange(length) / sampling_rate


def link_coordinates(
    sequence1: Any,
    sequence2: Any,
    path1: np.ndarray,
    path2: np.ndarray,
    sampling_rate: float = 1.0,
    link_count: int = 0,
    axis: int = -1
) -> Tuple[np.ndarray, np.ndarray]:
    """Coordinates of the links of an alignment path.
    
    Args:
        sequence1: First sequence (time along ``axis``)
        sequence2: Second sequence, frames shaped like those of ``sequence1``
        path1: Path indices into ``sequence1``
        path2: Path indices into ``sequence2``
        sampling_rate: Samples per time unit
        link_count: Number of links to draw, 0 for one per path pair
        axis: Time axis of both sequences
        
    Returns:
        Tuple (x, y):
            - x: shape (2, n), time stamps of the two ends of each link
            - y: shape ``frame_shape + (2, n)``; ``y[..., 0, l]`` is the frame
              of ``sequence1`` and ``y[..., 1, l]`` the frame of ``sequence2``
    
    Raises:
        ValidationError: If frame shapes differ, or the paths differ in
            length or index outside their sequences
    """
    array1, array2, axis1, axis2 = validate_sequences(
        sequence1, sequence2, axis, require_same_frame_shape=True, require_finite=False
    )
    path1 = np.asarray(path1, dtype=np.intp)
    path2 = np.asarray(path2, dtype=np.intp)
    if path1.shape != path2.shape or path1.ndim != 1:
        raise ValidationError(
            "path1 and path2 must be one-dimensional and of equal length",
            parameter="path2",
            expected=path1.shape,
            actual=path2.shape
        )
    
    length1, length2 = array1.shape[axis1], array2.shape[axis2]
    for name, path, length in (("path1", path1, length1), ("path2", path2, length2)):
        if len(path) and (path.min() < 0 or path.max() >= length):
            raise ValidationError(
                f"{name} indexes outside its sequence",
                parameter=name,
                expected=f"indices in [0, {length})",
                actual=(int(path.min()), int(path.max()))
            )
    
    t = time_axis(max(length1, length2), sampling_rate)
    positions = select_links(len(path1), link_count)
    
    index1 = path1[positions]
    index2 = path2[positions]
    
    x = np.stack([t[index1], t[index2]])
    
    frames1 = np.moveaxis(np.take(array1, index1, axis=axis1), axis1, -1)
    frames2 = np.moveaxis(np.take(array2, index2, axis=axis2), axis2, -1)
    y = np.stack([frames1, frames2], axis=-2)
    
    logger.debug(f"Built {len(positions)} links from a path of {len(path1)} pairs")
    
    return x, y

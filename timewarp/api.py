"""Main API for timewarp.

Two stateless entry points cover the common cases:

- ``align`` returns the optimal warping path and its total cost
- ``link`` returns plot-ready coordinates of the aligned pairs

``TimeWarpAligner`` bundles a distance, a time axis and a memory limit for
repeated use and also hands back the accumulated cost matrix.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

import numpy as np

from .core.cost_matrix import build_cost_matrix
from .core.distance import DistanceFunction, resolve_distance, is_builtin
from .core.links import link_coordinates
from .core.path import trackback
from .utils.config import Config
from .utils.exceptions import ConfigurationError
from .utils.logging import setup_logger, set_level
from .utils.profiling import check_memory_limits
from .utils.validation import (
    validate_sequences,
    validate_sampling_rate,
    validate_link_count,
)


@dataclass(frozen=True)
class AlignmentResult:
    """Outcome of one alignment.
    
    Unpacks like the tuple returned by ``align``:
    
        >>> path1, path2, total_cost = TimeWarpAligner().align(a, b)
    
    Attributes:
        path1: Indices into the first sequence
        path2: Indices into the second sequence
        total_cost: Accumulated cost of the path, ``cost_matrix[-1, -1]``
        cost_matrix: Accumulated cost table of shape (L1, L2)
    """
    
    path1: np.ndarray
    path2: np.ndarray
    total_cost: Any
    cost_matrix: np.ndarray
    
    @property
    def pairs(self) -> np.ndarray:
        """Path as a (K, 2) array of index pairs."""
        return np.column_stack([self.path1, self.path2])
    
    def __len__(self) -> int:
        return len(self.path1)
    
    def __iter__(self) -> Iterator[Any]:
        return iter((self.path1, self.path2, self.total_cost))


class TimeWarpAligner:
    """Reusable dynamic time warping aligner.
    
    Examples:
        >>> aligner = TimeWarpAligner(distance="euclidean")
        >>> result = aligner.align([0, 1, 2, 1], [0, 0, 1, 2, 2, 1])
        >>> result.pairs[-1]
        array([3, 5])
        >>> x, y = aligner.link([0, 1, 2, 1], [0, 0, 1, 2, 2, 1], link_count=3)
    """
    
    def __init__(
        self,
        distance: Optional[Union[str, DistanceFunction]] = None,
        axis: int = Config.alignment.TIME_AXIS,
        memory_limit_mb: float = Config.memory.DEFAULT_MEMORY_LIMIT_MB,
        log_level: Optional[str] = None
    ):
        """Initialize the aligner.
        
        Args:
            distance: Distance strategy, registered name or None for squared
                Euclidean distance
            axis: Time axis of the sequences
            memory_limit_mb: Upper bound on the estimated peak memory of
                the dense DP
            log_level: Level of the shared "timewarp.aligner" logger
                ('DEBUG', 'INFO', 'WARNING', 'ERROR'); None leaves it
                unchanged (INFO when first created)
        """
        self.logger = setup_logger("timewarp.aligner")
        if log_level is not None:
            set_level(self.logger, log_level)
        self.distance = resolve_distance(distance)
        
        if isinstance(axis, bool) or not isinstance(axis, (int, np.integer)):
            raise ConfigurationError(
                "axis must be an integer", config_key="axis", config_value=axis
            )
        self.axis = int(axis)
        
        if not memory_limit_mb > 0:
            raise ConfigurationError(
                "memory_limit_mb must be positive",
                config_key="memory_limit_mb",
                config_value=memory_limit_mb
            )
        self.memory_limit_mb = float(memory_limit_mb)
        
        self.logger.debug(
            f"Initialized TimeWarpAligner: distance={getattr(self.distance, '__name__', self.distance)}, "
            f"axis={self.axis}, memory_limit_mb={self.memory_limit_mb}"
        )
    
    def align(self, sequence1: Any, sequence2: Any) -> AlignmentResult:
        """Align two sequences along their time axis.
        
        Args:
            sequence1: First sequence
            sequence2: Second sequence
            
        Returns:
            AlignmentResult with the path, total cost and cost matrix
            
        Raises:
            ValidationError: If either sequence is invalid
            MemoryError: If the DP tables would exceed ``memory_limit_mb``
        """
        builtin = is_builtin(self.distance)
        array1, array2, axis1, axis2 = validate_sequences(
            sequence1, sequence2, self.axis,
            require_same_frame_shape=builtin,
            require_finite=builtin
        )
        length1, length2 = array1.shape[axis1], array2.shape[axis2]
        
        estimate_mb = check_memory_limits(length1, length2, self.memory_limit_mb)
        self.logger.debug(
            f"Aligning sequences of length {length1} and {length2} "
            f"(~{estimate_mb:.2f}MB of tables)"
        )
        
        cost = build_cost_matrix(array1, array2, self.distance, self.axis)
        path1, path2 = trackback(cost)
        total_cost = cost[-1, -1]
        
        self.logger.debug(f"Alignment path of {len(path1)} pairs, total cost {total_cost}")
        
        return AlignmentResult(
            path1=path1,
            path2=path2,
            total_cost=total_cost,
            cost_matrix=cost,
        )
    
    def link(
        self,
        sequence1: Any,
        sequence2: Any,
        sampling_rate: float = Config.alignment.DEFAULT_SAMPLING_RATE,
        link_count: int = Config.alignment.DEFAULT_LINK_COUNT
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Coordinates of links between corresponding frames.
        
        Args:
            sequence1: First sequence
            sequence2: Second sequence, frames shaped like those of
                ``sequence1``
            sampling_rate: Samples per time unit of the horizontal axis;
                should match the sampling rate of the sequences
            link_count: Number of links, 0 for one link per aligned pair
            
        Returns:
            Tuple (x, y), see ``timewarp.core.links.link_coordinates``
        """
        # Fail on bad link parameters before paying for the alignment
        validate_sequences(
            sequence1, sequence2, self.axis,
            require_same_frame_shape=True,
            require_finite=is_builtin(self.distance)
        )
        validate_sampling_rate(sampling_rate)
        validate_link_count(link_count)
        
        result = self.align(sequence1, sequence2)
        return link_coordinates(
            sequence1, sequence2, result.path1, result.path2,
            sampling_rate=sampling_rate, link_count=link_count, axis=self.axis
        )


def align(
    sequence1: Any,
    sequence2: Any,
    distance: Optional[Union[str, DistanceFunction]] = None,
    axis: int = Config.alignment.TIME_AXIS
) -> Tuple[np.ndarray, np.ndarray, Any]:
    """Align two sequences over their time axis by dynamic time warping.
    
    The distance is called with read-only views of one frame of each
    sequence, preserving frame shape: scalars for a vector, 2-vectors for a
    ``2 x n`` array, ``2 x 3`` matrices for a ``2 x 3 x n`` array.
    
    Args:
        sequence1: First sequence
        sequence2: Second sequence
        distance: Distance strategy ``d(frame_a, frame_b)`` returning a
            non-negative scalar, a registered name, or None for the squared
            Euclidean distance
        axis: Time axis of both sequences (trailing by default)
        
    Returns:
        Tuple (path1, path2, total_cost)
    
    Example:
        >>> path1, path2, total_cost = align([1, 2, 3], [1, 2, 3])
        >>> path1.tolist(), path2.tolist(), float(total_cost)
        ([0, 1, 2], [0, 1, 2], 0.0)
    """
    return tuple(TimeWarpAligner(distance=distance, axis=axis).align(sequence1, sequence2))


def link(
    sequence1: Any,
    sequence2: Any,
    sampling_rate: float = Config.alignment.DEFAULT_SAMPLING_RATE,
    link_count: int = Config.alignment.DEFAULT_LINK_COUNT,
    distance: Optional[Union[str, DistanceFunction]] = None,
    axis: int = Config.alignment.TIME_AXIS
) -> Tuple[np.ndarray, np.ndarray]:
    """Horizontal and vertical coordinates of links between aligned frames.
    
    The result can be drawn over a plot of the two sequences:
    
        >>> x, y = link(sequence1, sequence2, sampling_rate=100, link_count=20)
        >>> plt.plot(x, y, color="black")
    
    Args:
        sequence1: First sequence
        sequence2: Second sequence
        sampling_rate: Samples per time unit of the horizontal axis
        link_count: Number of links, 0 for one link per aligned pair
        distance: Distance strategy used for the alignment
        axis: Time axis of both sequences
        
    Returns:
        Tuple (x, y) with shapes (2, n) and ``frame_shape + (2, n)``
    """
    return TimeWarpAligner(distance=distance, axis=axis).link(
        sequence1, sequence2, sampling_rate=sampling_rate, link_count=link_count
    )

"""Shape-preserving access to the frames of a sequence.

A sequence is an array whose time axis (by default the trailing one) indexes
samples. Fixing the time index leaves a frame with every other dimension
intact: a vector of scalars yields scalars, a ``2 x n`` array yields
2-vectors, a ``2 x 3 x n`` array yields ``2 x 3`` matrices.
"""

from typing import Any, Iterator, Tuple

import numpy as np

from ..utils.validation import validate_sequence, frame_shape


def select_frame(sequence: np.ndarray, index: int, axis: int = -1) -> Any:
    """Return the frame at ``index`` along ``axis`` as a read-only view.
    
    Args:
        sequence: Sequence array
        index: Time index, ``0 <= index < sequence.shape[axis]``
        axis: Time axis
        
    Returns:
        numpy scalar for one-dimensional sequences, otherwise a read-only
        ``ndarray`` view sharing memory with ``sequence``
        
    Raises:
        IndexError: If ``index`` is outside the time axis
    """
    axis = axis % sequence.ndim
    length = sequence.shape[axis]
    if not 0 <= index < length:
        raise IndexError(f"frame index {index} out of range for time axis of length {length}")
    
    key = (slice(None),) * axis + (index,)
    frame = sequence[key]
    
    if isinstance(frame, np.ndarray):
        frame = frame.view()
        frame.flags.writeable = False
    
    return frame


class SequenceFrames:
    """Indexable view over the frames of a sequence.
    
    Examples:
        >>> frames = SequenceFrames(np.zeros((2, 3, 10)))
        >>> len(frames), frames.frame_shape
        (10, (2, 3))
        >>> frames[4].shape
        (2, 3)
    """
    
    def __init__(
        self,
        sequence: Any,
        axis: int = -1,
        name: str = "sequence",
        require_finite: bool = True
    ):
        self.array, self.axis = validate_sequence(sequence, axis, name, require_finite)
    
    @property
    def frame_shape(self) -> Tuple[int, ...]:
        return frame_shape(self.array, self.axis)
    
    def __len__(self) -> int:
        return self.array.shape[self.axis]
    
    def __getitem__(self, index: int) -> Any:
        return select_frame(self.array, index, self.axis)
    
    def __iter__(self) -> Iterator[Any]:
        for index in range(len(self)):
            yield self[index]
    
    def stacked(self) -> np.ndarray:
        """All frames stacked along a new leading axis (read-only view)."""
        frames = np.moveaxis(self.array, self.axis, 0)
        frames.flags.writeable = False
        return frames

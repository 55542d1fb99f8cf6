"""Validation utilities for sequences and alignment parameters.

This module coerces user input into numpy arrays and checks that it can be
aligned before any cost is computed.
"""

import numbers
from typing import Any, Tuple

import numpy as np
import torch

from .exceptions import ValidationError


def as_array(sequence: Any, name: str = "sequence") -> np.ndarray:
    """Convert a sequence to a numpy array without copying where possible.
    
    Args:
        sequence: numpy array, torch tensor, or nested list/tuple
        name: Name for error messages
        
    Returns:
        numpy array view or conversion of ``sequence``
        
    Raises:
        ValidationError: If the input is ragged or cannot be converted
    """
    if isinstance(sequence, np.ndarray):
        return sequence
    
    if isinstance(sequence, torch.Tensor):
        return sequence.detach().cpu().numpy()
    
    try:
        return np.asarray(sequence)
    except ValueError as e:
        raise ValidationError(
            f"{name} could not be converted to an array: {e}",
            parameter=name,
            expected="rectangular array-like",
            actual=type(sequence).__name__
        ) from e


def normalize_axis(axis: int, ndim: int, name: str = "sequence") -> int:
    """Return ``axis`` as a non-negative index into ``ndim`` dimensions."""
    if isinstance(axis, bool) or not isinstance(axis, numbers.Integral):
        raise ValidationError(
            "axis must be an integer",
            parameter="axis",
            actual=type(axis).__name__
        )
    
    if not -ndim <= axis < ndim:
        raise ValidationError(
            f"axis {axis} is out of bounds for {name} with {ndim} dimensions",
            parameter="axis",
            expected=f"[-{ndim}, {ndim})",
            actual=axis
        )
    
    return int(axis) % ndim


def validate_sequence(
    sequence: Any,
    axis: int = -1,
    name: str = "sequence",
    require_finite: bool = True
) -> Tuple[np.ndarray, int]:
    """Validate a single sequence for alignment.
    
    Args:
        sequence: Sequence to validate
        axis: Time axis of the sequence
        name: Name for error messages
        require_finite: Reject NaN/Inf values. Custom distances may give
            them a meaning (e.g. missing data), built-in ones cannot
        
    Returns:
        Tuple of (array, normalized time axis)
        
    Raises:
        ValidationError: If the sequence is 0-d, has an empty time axis, or
            contains NaN/Inf values while ``require_finite`` is set
    """
    array = as_array(sequence, name)
    
    if array.ndim == 0:
        raise ValidationError(
            f"{name} must have at least one dimension",
            parameter=name,
            expected="ndim >= 1",
            actual="ndim == 0"
        )
    
    axis = normalize_axis(axis, array.ndim, name)
    
    if array.shape[axis] == 0:
        raise ValidationError(
            f"{name} has an empty time axis",
            parameter=name,
            expected="length >= 1",
            actual=array.shape
        )
    
    if require_finite and array.dtype.kind in "fc" and not np.all(np.isfinite(array)):
        raise ValidationError(
            f"{name} contains NaN or Inf values",
            parameter=name,
            expected="finite values"
        )
    
    return array, axis


def validate_sequences(
    sequence1: Any,
    sequence2: Any,
    axis: int = -1,
    require_same_frame_shape: bool = False,
    require_finite: bool = True
) -> Tuple[np.ndarray, np.ndarray, int, int]:
    """Validate a pair of sequences.
    
    Args:
        sequence1: First sequence
        sequence2: Second sequence
        axis: Time axis, shared by both sequences
        require_same_frame_shape: Whether frames of both sequences must have
            identical shapes
        require_finite: Reject NaN/Inf values
        
    Returns:
        Tuple of (array1, array2, axis1, axis2)
    """
    array1, axis1 = validate_sequence(sequence1, axis, "sequence1", require_finite)
    array2, axis2 = validate_sequence(sequence2, axis, "sequence2", require_finite)
    
    if require_same_frame_shape:
        shape1 = frame_shape(array1, axis1)
        shape2 = frame_shape(array2, axis2)
        if shape1 != shape2:
            raise ValidationError(
                "Frame shapes of the two sequences do not match",
                parameter="sequence2",
                expected=shape1,
                actual=shape2
            )
    
    return array1, array2, axis1, axis2


def frame_shape(array: np.ndarray, axis: int) -> Tuple[int, ...]:
    """Shape of a single frame: the array shape without the time axis."""
    return array.shape[:axis] + array.shape[axis + 1:]


def validate_sampling_rate(sampling_rate: Any) -> float:
    """Validate the sampling rate used to rebuild the time axis."""
    if isinstance(sampling_rate, bool) or not isinstance(sampling_rate, numbers.Real):
        raise ValidationError(
            "sampling_rate must be a real number",
            parameter="sampling_rate",
            actual=type(sampling_rate).__name__
        )
    
    if not np.isfinite(sampling_rate) or sampling_rate <= 0:
        raise ValidationError(
            "sampling_rate must be positive and finite",
            parameter="sampling_rate",
            expected="> 0",
            actual=sampling_rate
        )
    
    return float(sampling_rate)


def validate_link_count(link_count: Any) -> int:
    """Validate the requested number of links (0 means all)."""
    if isinstance(link_count, bool) or not isinstance(link_count, numbers.Integral):
        raise ValidationError(
            "link_count must be an integer",
            parameter="link_count",
            actual=type(link_count).__name__
        )
    
    if link_count < 0:
        raise ValidationError(
            "link_count must be non-negative",
            parameter="link_count",
            expected=">= 0",
            actual=link_count
        )
    
    return int(link_count)

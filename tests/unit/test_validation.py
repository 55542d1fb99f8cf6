"""Unit tests for input validation."""

import numpy as np
import pytest
import torch

from timewarp.utils.exceptions import ValidationError
from timewarp.utils.validation import (
    as_array,
    normalize_axis,
    validate_sequence,
    validate_sequences,
    frame_shape,
    validate_sampling_rate,
    validate_link_count,
)


class TestAsArray:
    """Test conversion of user input to arrays."""
    
    def test_ndarray_passthrough(self):
        array = np.arange(5)
        assert as_array(array) is array
    
    def test_list_conversion(self):
        np.testing.assert_array_equal(as_array([[1, 2], [3, 4]]), [[1, 2], [3, 4]])
    
    def test_torch_tensor_conversion(self):
        tensor = torch.arange(6, dtype=torch.float64).reshape(2, 3)
        array = as_array(tensor)
        
        assert isinstance(array, np.ndarray)
        np.testing.assert_array_equal(array, tensor.numpy())
    
    def test_tensor_requiring_grad(self):
        tensor = torch.ones(4, requires_grad=True)
        assert as_array(tensor).shape == (4,)
    
    def test_ragged_input_rejected(self):
        with pytest.raises(ValidationError, match="could not be converted"):
            as_array([[1, 2], [3]])


class TestNormalizeAxis:
    """Test time axis normalization."""
    
    @pytest.mark.parametrize("axis,expected", [(-1, 2), (0, 0), (2, 2), (-3, 0)])
    def test_valid_axes(self, axis, expected):
        assert normalize_axis(axis, 3) == expected
    
    def test_numpy_integer(self):
        assert normalize_axis(np.int64(-1), 2) == 1
    
    @pytest.mark.parametrize("axis", [3, -4])
    def test_out_of_bounds(self, axis):
        with pytest.raises(ValidationError, match="out of bounds"):
            normalize_axis(axis, 3)
    
    @pytest.mark.parametrize("axis", [True, 1.0, "0", None])
    def test_non_integer(self, axis):
        with pytest.raises(ValidationError, match="axis must be an integer"):
            normalize_axis(axis, 3)


class TestValidateSequence:
    """Test single sequence validation."""
    
    def test_valid_sequence(self):
        array, axis = validate_sequence([1, 2, 3])
        
        assert array.shape == (3,)
        assert axis == 0
    
    def test_custom_axis(self):
        array, axis = validate_sequence(np.zeros((7, 2)), axis=0)
        assert axis == 0
    
    def test_zero_dimensional(self):
        with pytest.raises(ValidationError, match="at least one dimension"):
            validate_sequence(3.0)
    
    def test_empty_time_axis(self):
        with pytest.raises(ValidationError, match="empty time axis"):
            validate_sequence(np.zeros((2, 0)))
    
    def test_empty_non_time_axis_allowed(self):
        array, axis = validate_sequence(np.zeros((0, 4)))
        assert array.shape[axis] == 4
    
    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_values(self, bad):
        with pytest.raises(ValidationError, match="NaN or Inf"):
            validate_sequence([1.0, bad, 3.0])
    
    @pytest.mark.parametrize("bad", [np.nan, np.inf])
    def test_non_finite_values_allowed_on_request(self, bad):
        array, _ = validate_sequence([1.0, bad], require_finite=False)
        assert array.shape == (2,)
    
    def test_integer_sequences_skip_finiteness_check(self):
        array, _ = validate_sequence(np.array([1, 2], dtype=np.int8))
        assert array.dtype == np.int8
    
    def test_error_names_parameter(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_sequence([], name="sequence2")
        
        assert exc_info.value.context["parameter"] == "sequence2"


class TestValidateSequences:
    """Test pair validation."""
    
    def test_different_lengths_allowed(self):
        array1, array2, axis1, axis2 = validate_sequences(np.zeros((2, 5)), np.zeros((2, 8)))
        
        assert (axis1, axis2) == (1, 1)
        assert array2.shape == (2, 8)
    
    def test_frame_shape_mismatch_allowed_by_default(self):
        validate_sequences(np.zeros((2, 5)), np.zeros((3, 5)))
    
    def test_finiteness_applies_to_both_sequences(self):
        with pytest.raises(ValidationError, match="sequence2 contains NaN"):
            validate_sequences([1.0], [np.nan])
        
        validate_sequences([1.0], [np.nan], require_finite=False)
    
    def test_frame_shape_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Frame shapes"):
            validate_sequences(np.zeros((2, 5)), np.zeros((3, 5)), require_same_frame_shape=True)
    
    def test_axis_out_of_bounds_for_second_sequence(self):
        with pytest.raises(ValidationError, match="sequence2"):
            validate_sequences(np.zeros((2, 5)), np.zeros(5), axis=1)


class TestFrameShape:
    
    def test_frame_shape(self):
        array = np.zeros((2, 3, 4))
        
        assert frame_shape(array, 2) == (2, 3)
        assert frame_shape(array, 1) == (2, 4)
        assert frame_shape(np.zeros(4), 0) == ()


class TestLinkParameters:
    """Test sampling rate and link count validation."""
    
    @pytest.mark.parametrize("rate", [1, 2.5, np.float32(100.0)])
    def test_valid_sampling_rate(self, rate):
        assert validate_sampling_rate(rate) == float(rate)
    
    @pytest.mark.parametrize("rate", [0, -1.0, np.inf, np.nan])
    def test_invalid_sampling_rate_value(self, rate):
        with pytest.raises(ValidationError, match="positive and finite"):
            validate_sampling_rate(rate)
    
    @pytest.mark.parametrize("rate", [True, "1", None])
    def test_invalid_sampling_rate_type(self, rate):
        with pytest.raises(ValidationError, match="real number"):
            validate_sampling_rate(rate)
    
    @pytest.mark.parametrize("count", [0, 5, np.int64(3)])
    def test_valid_link_count(self, count):
        assert validate_link_count(count) == int(count)
    
    def test_negative_link_count(self):
        with pytest.raises(ValidationError, match="non-negative"):
            validate_link_count(-1)
    
    @pytest.mark.parametrize("count", [2.0, False, "3"])
    def test_non_integer_link_count(self, count):
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_link_count(count)

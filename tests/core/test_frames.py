"""Tests for shape-preserving frame access."""

import numpy as np
import pytest

from timewarp.core.frames import select_frame, SequenceFrames
from timewarp.utils.exceptions import ValidationError


class TestSelectFrame:
    """Test selection of a single frame."""
    
    def test_scalar_frames(self):
        frame = select_frame(np.array([4, 5, 6]), 1)
        
        assert np.ndim(frame) == 0
        assert frame == 5
    
    def test_vector_frames(self):
        sequence = np.arange(10).reshape(2, 5)
        frame = select_frame(sequence, 3)
        
        np.testing.assert_array_equal(frame, [3, 8])
    
    def test_matrix_frames(self):
        sequence = np.arange(24).reshape(2, 3, 4)
        frame = select_frame(sequence, 2)
        
        assert frame.shape == (2, 3)
        np.testing.assert_array_equal(frame, sequence[:, :, 2])
    
    def test_frame_is_view(self):
        sequence = np.arange(24.0).reshape(2, 3, 4)
        frame = select_frame(sequence, 0)
        
        assert np.shares_memory(frame, sequence)
    
    def test_frame_is_read_only(self):
        sequence = np.zeros((2, 5))
        frame = select_frame(sequence, 0)
        
        with pytest.raises(ValueError):
            frame[0] = 1.0
        assert sequence.flags.writeable
    
    def test_leading_time_axis(self):
        sequence = np.arange(10).reshape(5, 2)
        np.testing.assert_array_equal(select_frame(sequence, 4, axis=0), [8, 9])
    
    @pytest.mark.parametrize("index", [5, -1])
    def test_index_out_of_range(self, index):
        with pytest.raises(IndexError, match="out of range"):
            select_frame(np.zeros(5), index)


class TestSequenceFrames:
    """Test the indexable frame view."""
    
    def test_length_and_frame_shape(self):
        frames = SequenceFrames(np.zeros((2, 3, 10)))
        
        assert len(frames) == 10
        assert frames.frame_shape == (2, 3)
    
    def test_scalar_frame_shape(self):
        assert SequenceFrames([1, 2, 3]).frame_shape == ()
    
    def test_iteration_order(self):
        sequence = np.arange(12).reshape(3, 4)
        frames = list(SequenceFrames(sequence))
        
        assert len(frames) == 4
        for index, frame in enumerate(frames):
            np.testing.assert_array_equal(frame, sequence[:, index])
    
    def test_stacked(self):
        sequence = np.arange(24).reshape(2, 3, 4)
        stacked = SequenceFrames(sequence).stacked()
        
        assert stacked.shape == (4, 2, 3)
        np.testing.assert_array_equal(stacked[1], sequence[:, :, 1])
        assert not stacked.flags.writeable
    
    def test_stacked_custom_axis(self):
        sequence = np.arange(24).reshape(4, 2, 3)
        stacked = SequenceFrames(sequence, axis=0).stacked()
        
        assert stacked.shape == (4, 2, 3)
        np.testing.assert_array_equal(stacked, sequence)
    
    def test_invalid_sequence(self):
        with pytest.raises(ValidationError, match="empty time axis"):
            SequenceFrames(np.zeros((2, 0)))
    
    def test_non_finite_frames(self):
        with pytest.raises(ValidationError, match="NaN or Inf"):
            SequenceFrames([1.0, np.nan])
        
        frames = SequenceFrames([1.0, np.nan], require_finite=False)
        assert np.isnan(frames[1])

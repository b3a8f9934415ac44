"""Tests for the pose.py module."""
import math

import numpy as np
import pytest

from neural_intent_simulator.core.pose import duration_ms
from neural_intent_simulator.core.pose import Pose
from neural_intent_simulator.errors import InvalidConfigurationError


class TestPose:
    """Tests for the Pose class."""

    def test_from_sequence_keeps_component_order(self):
        """Test that the components are assigned in their canonical order."""
        pose = Pose.from_sequence([1, 2, 3, 0.1, 0.2, 0.3, 1, 40])
        assert pose.x == 1.0
        assert pose.roll == 0.3
        assert pose.fingers_extended == 1.0
        assert pose.relative_time_ms == 40.0
        assert np.array_equal(pose.position, [1.0, 2.0, 3.0])
        assert np.array_equal(pose.orientation, [0.1, 0.2, 0.3])
        assert np.array_equal(pose.to_array(), [1, 2, 3, 0.1, 0.2, 0.3, 1, 40])

    def test_from_sequence_with_missing_components(self):
        """Test that a pose needs all 8 components."""
        with pytest.raises(InvalidConfigurationError):
            Pose.from_sequence([0.0] * 7)

    def test_negative_time_is_rejected(self):
        """Test that the relative time can't be negative."""
        with pytest.raises(InvalidConfigurationError):
            Pose(0, 0, 0, 0, 0, 0, 0, -1)

    @pytest.mark.parametrize("relative_time_ms", [math.nan, math.inf])
    def test_non_finite_time_is_rejected(self, relative_time_ms):
        """Test that the relative time must be a finite number."""
        with pytest.raises(InvalidConfigurationError):
            Pose(0, 0, 0, 0, 0, 0, 0, relative_time_ms)

    def test_pose_is_immutable(self):
        """Test that a pose can't be modified after creation."""
        pose = Pose(0, 0, 0, 0, 0, 0)
        with pytest.raises(AttributeError):
            pose.x = 1.0  # type: ignore


class TestDuration:
    """Tests for the duration between two poses."""

    def test_duration(self):
        """Test that the duration is the difference between the timestamps."""
        start = Pose(0, 0, 0, 0, 0, 0, relative_time_ms=5)
        end = Pose(0, 0, 0, 0, 0, 0, relative_time_ms=25)
        assert duration_ms(start, end) == 20

    def test_end_before_start(self):
        """Test that an end pose before the start pose is rejected."""
        start = Pose(0, 0, 0, 0, 0, 0, relative_time_ms=5)
        end = Pose(0, 0, 0, 0, 0, 0, relative_time_ms=4)
        with pytest.raises(InvalidConfigurationError):
            duration_ms(start, end)

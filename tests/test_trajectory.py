"""Tests for the trajectory.py module."""
import math

import numpy as np
import pytest

from neural_intent_simulator.core.noise import UniformNoiseGenerator
from neural_intent_simulator.core.noise import ZeroNoiseGenerator
from neural_intent_simulator.core.pose import Pose
from neural_intent_simulator.core.quantizer import Quantizer
from neural_intent_simulator.core.trajectory import StateChannelMode
from neural_intent_simulator.core.trajectory import TrajectoryInterpolator
from neural_intent_simulator.errors import InvalidConfigurationError


@pytest.fixture
def start():
    """Get a start pose at the origin."""
    return Pose(0, 0, 0, 0, 0, 0, 0, 0)


@pytest.fixture
def end():
    """Get an end pose 10 ms after the start pose."""
    return Pose(10, 20, 30, math.pi / 2, math.pi / 4, 0, 1, 10)


@pytest.fixture
def quantizer():
    """Get a quantizer with the default parameters."""
    return Quantizer(Quantizer.Params())


def _get_interpolator(quantizer, sample_period=1, state_channels=None):
    params = TrajectoryInterpolator.Params(sample_period=sample_period)
    if state_channels is not None:
        params.state_channels = state_channels
    return TrajectoryInterpolator(params, quantizer)


class TestTrajectoryInterpolator:
    """Tests for the TrajectoryInterpolator class."""

    @pytest.mark.parametrize(
        "sample_period,expected_steps", [(1, 11), (2, 6), (3, 4), (10, 2), (11, 1)]
    )
    def test_n_steps(self, quantizer, start, end, sample_period, expected_steps):
        """Test that there is one step per sample period, both ends included."""
        interpolator = _get_interpolator(quantizer, sample_period)
        assert interpolator.n_steps(start, end) == expected_steps
        signal = interpolator.generate_signal(start, end, ZeroNoiseGenerator())
        assert signal.shape == (expected_steps, 12)

    def test_degenerate_trajectory(self, quantizer, start):
        """Test that poses with the same timestamp give a single sample."""
        end = Pose(10, 20, 30, 0, 0, 0, 1, 0)
        signal = _get_interpolator(quantizer).generate_signal(
            start, end, ZeroNoiseGenerator()
        )
        assert signal.shape == (1, 12)
        assert not signal.any()

    def test_interpolate(self, quantizer, start, end):
        """Test that positions move linearly by `t / n_steps`."""
        positions = _get_interpolator(quantizer).interpolate(start, end)
        assert positions.shape == (11, 3)
        assert np.allclose(positions[:, 0], np.arange(11) * 10 / 11)
        assert np.allclose(positions[:, 2], np.arange(11) * 30 / 11)

    def test_noise_free_signal(self, quantizer, start, end):
        """Test that noise free positions are the exact scaled interpolation."""
        signal = _get_interpolator(quantizer).generate_signal(
            start, end, ZeroNoiseGenerator()
        )
        for axis, distance in enumerate([10.0, 20.0, 30.0]):
            expected = [int((0.0 + distance * (i / 11)) * 1024) for i in range(11)]
            assert signal[:, axis].tolist() == expected

    def test_first_sample_holds_the_start_orientation(self, quantizer, start, end):
        """Test that channels 3-5 start with the scaled start orientation."""
        start = Pose(1, 2, 3, math.pi / 2, math.pi / 4, -0.5, 0, 0)
        signal = _get_interpolator(quantizer).generate_signal(
            start, end, ZeroNoiseGenerator()
        )
        assert signal[0, :6].tolist() == [1024, 2048, 3072, 1608, 804, -512]

    def test_mirror_x_state_channels(self, quantizer, start, end):
        """Test that channels 3-5 mirror the noise-free x position."""
        interpolator = _get_interpolator(
            quantizer, state_channels=StateChannelMode.MIRROR_X
        )
        noise = UniformNoiseGenerator(0.5, np.random.default_rng(1))
        signal = interpolator.generate_signal(start, end, noise)
        clean_x = [int((10.0 * (i / 11)) * 1024) for i in range(1, 11)]
        for channel in range(3, 6):
            assert signal[1:, channel].tolist() == clean_x

    def test_previous_position_state_channels(self, quantizer, start, end):
        """Test that channels 3-5 carry the position of the previous step."""
        interpolator = _get_interpolator(
            quantizer, state_channels=StateChannelMode.PREVIOUS_POSITION
        )
        signal = interpolator.generate_signal(start, end, ZeroNoiseGenerator())
        assert np.array_equal(signal[1:, 3:6], signal[:-1, 0:3])

    def test_reserved_channels_are_zero(self, quantizer, start, end):
        """Test that channels 6-11 are not used."""
        noise = UniformNoiseGenerator(2.0, np.random.default_rng(2))
        signal = _get_interpolator(quantizer).generate_signal(start, end, noise)
        assert not signal[:, 6:].any()

    def test_noise_is_bounded_by_amplitude(self, quantizer, start, end):
        """Test that uniform noise moves positions by at most the amplitude."""
        interpolator = _get_interpolator(quantizer)
        noise = UniformNoiseGenerator(0.5, np.random.default_rng(3))
        signal = interpolator.generate_signal(start, end, noise)
        clean = quantizer.quantize(interpolator.interpolate(start, end))
        assert np.array_equal(signal[0, :3], clean[0])
        assert np.all(np.abs(signal[:, :3] - clean) <= 0.5 * 1024 + 1)

    def test_generate_batch(self, quantizer, start, end):
        """Test that a batch holds the requested number of signals."""
        noise = UniformNoiseGenerator(0.5, np.random.default_rng(4))
        batch = _get_interpolator(quantizer).generate(start, end, 5, noise)
        assert batch.shape == (5, 11, 12)
        # each signal gets its own noise draws
        assert not np.array_equal(batch[0], batch[1])

    def test_invalid_sample_period(self, quantizer):
        """Test that the sample period must be positive."""
        with pytest.raises(InvalidConfigurationError):
            _get_interpolator(quantizer, sample_period=0)

"""Trajectory strategy: interpolate between two poses and inject noise.

Each signal is a time series with one channel vector per sample period between
the start and the end pose. Channels 0-2 carry the noisy interpolated position,
channels 3-5 carry a state that starts as the start pose orientation, and the
remaining channels are reserved and left at zero.
"""
from dataclasses import dataclass
from enum import Enum
import logging

from numpy import ndarray
import numpy as np

from neural_intent_simulator.core.noise import NoiseGenerator
from neural_intent_simulator.core.pose import duration_ms
from neural_intent_simulator.core.pose import Pose
from neural_intent_simulator.core.quantizer import Quantizer
from neural_intent_simulator.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

N_AXES = 3


class StateChannelMode(str, Enum):
    """What channels 3-5 carry after the first time step."""

    MIRROR_X = "mirror_x"
    """Copy the noise-free scaled x position into all three channels."""

    PREVIOUS_POSITION = "previous_position"
    """Carry the noise-free scaled x, y, z position of the previous step."""


class TrajectoryInterpolator:
    """Generator of signals from a linear trajectory between two poses."""

    @dataclass
    class Params:
        """Initialization parameters for the :class:`TrajectoryInterpolator` class."""

        sample_period: int = 1
        """The interval between consecutive time steps in milliseconds."""

        state_channels: StateChannelMode = StateChannelMode.MIRROR_X
        """The content of channels 3-5 after the first time step."""

    def __init__(self, params: Params, quantizer: Quantizer):
        """Initialize the TrajectoryInterpolator class.

        Args:
            params: The interpolator parameters.
            quantizer: Converts positions into integer channel values.

        Raises:
            InvalidConfigurationError: If the sample period is not positive.
        """
        if params.sample_period < 1:
            raise InvalidConfigurationError(
                f"sample_period must be at least 1, got {params.sample_period}"
            )
        if quantizer.n_channels < 2 * N_AXES:
            raise InvalidConfigurationError(
                f"The trajectory strategy needs at least {2 * N_AXES} channels"
            )
        self._params = params
        self._quantizer = quantizer

    def n_steps(self, start: Pose, end: Pose) -> int:
        """Get the number of time steps between two poses, both included."""
        return int(duration_ms(start, end) // self._params.sample_period) + 1

    def step_times(self, start: Pose, end: Pose) -> ndarray:
        """Get the time of each step in milliseconds relative to the start pose."""
        return np.arange(self.n_steps(start, end)) * self._params.sample_period

    def interpolate(self, start: Pose, end: Pose) -> ndarray:
        """Interpolate the position at every time step.

        The position at time `t` is `start + (end - start) * t / n_steps`.
        The end position is therefore never reached exactly.

        Args:
            start: The start pose.
            end: The end pose.

        Returns:
            The noise-free positions with shape `(n_steps, 3)`.
        """
        times = self.step_times(start, end)
        fractions = times / len(times)
        delta = end.position - start.position
        return start.position[None, :] + delta[None, :] * fractions[:, None]

    def generate_signal(self, start: Pose, end: Pose, noise: NoiseGenerator) -> ndarray:
        """Generate a single signal.

        The first sample is not perturbed. Every later sample receives an
        independent noise draw per axis.

        Args:
            start: The start pose.
            end: The end pose.
            noise: The noise generator.

        Returns:
            An integer array with shape `(n_steps, n_channels)`.
        """
        clean = self.interpolate(start, end)
        n_steps = len(clean)

        noisy = clean.copy()
        noisy[1:] += noise.generate((n_steps - 1, N_AXES))

        positions = self._quantizer.quantize(noisy)
        state = np.empty_like(positions)
        state[0] = self._quantizer.quantize(start.orientation)
        if n_steps > 1:
            clean_scaled = self._quantizer.quantize(clean)
            if self._params.state_channels == StateChannelMode.PREVIOUS_POSITION:
                state[1:] = clean_scaled[:-1]
            else:
                state[1:] = clean_scaled[1:, [0]]

        return self._quantizer.pack(np.hstack((positions, state)))

    def generate(
        self, start: Pose, end: Pose, num_signals: int, noise: NoiseGenerator
    ) -> ndarray:
        """Generate a batch of independent signals.

        Args:
            start: The start pose.
            end: The end pose.
            num_signals: The number of signals to generate.
            noise: The noise generator.

        Returns:
            An integer array with shape `(num_signals, n_steps, n_channels)`.
        """
        n_steps = self.n_steps(start, end)
        logger.debug(f"Generating {num_signals} trajectory signals of {n_steps} steps")
        signals = [self.generate_signal(start, end, noise) for _ in range(num_signals)]
        return np.array(signals)

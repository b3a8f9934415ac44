"""This module contains classes that can be used to generate noise."""
from enum import Enum
from typing import Protocol, Tuple, Union

from numpy import ndarray
import numpy as np

from neural_intent_simulator.core.random_source import RandomSource
from neural_intent_simulator.errors import UnrecognizedNoiseKindError


class NoiseKind(str, Enum):
    """Possible noise distributions for the trajectory strategy."""

    GAUSSIAN = "gaussian"
    UNIFORM = "uniform"
    NONE = "none"


class NoiseGenerator(Protocol):
    """A protocol for noise generators."""

    def generate(self, shape: Tuple[int, ...]) -> ndarray:
        """Generate noise.

        Args:
            shape: The shape of the noise array, usually `(n_samples, n_axes)`.

        Returns:
            The generated noise.
        """
        ...


class GaussianNoiseGenerator(NoiseGenerator):
    """Zero-mean white gaussian noise generator."""

    def __init__(self, standard_deviation: float, random_source: RandomSource):
        """Initialize the noise generator.

        Args:
            standard_deviation: The standard deviation of the noise.
            random_source: The source of random numbers.
        """
        self._standard_deviation = standard_deviation
        self._random_source = random_source

    def generate(self, shape: Tuple[int, ...]) -> ndarray:
        """Generate gaussian noise.

        Args:
            shape: The shape of the noise array.

        Returns:
            The generated noise.
        """
        return np.asarray(
            self._random_source.normal(0.0, self._standard_deviation, size=shape)
        )


class UniformNoiseGenerator(NoiseGenerator):
    """Bounded uniform noise generator."""

    def __init__(self, amplitude: float, random_source: RandomSource):
        """Initialize the noise generator.

        Args:
            amplitude: Noise is drawn from `[-amplitude, amplitude)`.
            random_source: The source of random numbers.
        """
        self._amplitude = amplitude
        self._random_source = random_source

    def generate(self, shape: Tuple[int, ...]) -> ndarray:
        """Generate uniform noise.

        Args:
            shape: The shape of the noise array.

        Returns:
            The generated noise.
        """
        unit = 2 * np.asarray(self._random_source.random(shape)) - 1
        return self._amplitude * unit


class ZeroNoiseGenerator(NoiseGenerator):
    """Zero amplitude noise generator."""

    def generate(self, shape: Tuple[int, ...]) -> ndarray:
        """Generate zero amplitude noise.

        Args:
            shape: The shape of the noise array.

        Returns:
            The generated noise.
        """
        return np.zeros(shape)


def parse_noise_kind(noise_kind: Union[NoiseKind, str]) -> NoiseKind:
    """Convert a user supplied value into a :class:`NoiseKind`.

    Raises:
        UnrecognizedNoiseKindError: If the value is not a known noise kind.
    """
    try:
        return NoiseKind(noise_kind)
    except ValueError as error:
        raise UnrecognizedNoiseKindError(
            noise_kind, [kind.value for kind in NoiseKind]
        ) from error


def get_noise_generator(
    noise_kind: Union[NoiseKind, str],
    noise_amplitude: float,
    random_source: RandomSource,
) -> NoiseGenerator:
    """Create the noise generator for the given noise kind.

    Args:
        noise_kind: The noise distribution.
        noise_amplitude: The standard deviation for gaussian noise or the
            half-width of the interval for uniform noise.
        random_source: The source of random numbers.

    Returns:
        A noise generator.

    Raises:
        UnrecognizedNoiseKindError: If the noise kind is not supported.
    """
    kind = parse_noise_kind(noise_kind)
    if kind == NoiseKind.GAUSSIAN:
        return GaussianNoiseGenerator(noise_amplitude, random_source)
    if kind == NoiseKind.UNIFORM:
        return UniformNoiseGenerator(noise_amplitude, random_source)
    return ZeroNoiseGenerator()

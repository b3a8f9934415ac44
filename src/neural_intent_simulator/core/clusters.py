"""Cluster strategy: synthesize cluster-correlated firing magnitudes.

Channels are grouped into clusters that represent functionally related neurons,
for example the ones driving the hand or the arm. On every snapshot each cluster
receives an activation that blends two competing excitation sources, and each
channel of the cluster fires proportionally to that activation.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Sequence, Tuple, Union

from numpy import ndarray
import numpy as np

from neural_intent_simulator.core.quantizer import N_CHANNELS
from neural_intent_simulator.core.quantizer import Quantizer
from neural_intent_simulator.core.random_source import RandomSource
from neural_intent_simulator.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CLUSTER_SIZES = (4, 3, 2, 2, 1)


class ActivationDraws(str, Enum):
    """How the two legs of the activation formula are drawn."""

    INDEPENDENT = "independent"
    """The sine and cosine legs use two independent uniform draws."""

    SHARED = "shared"
    """Both legs use the same uniform draw."""


@dataclass(frozen=True)
class ClusterPartition:
    """A static mapping from cluster index to the channels it drives."""

    channel_groups: Tuple[Tuple[int, ...], ...]
    """The channel indices of each cluster."""

    @classmethod
    def from_sizes(cls, sizes: Sequence[int]) -> ClusterPartition:
        """Create a partition of contiguous channel blocks.

        For example, sizes `(4, 3, 2, 2, 1)` result in the clusters
        `(0, 1, 2, 3)`, `(4, 5, 6)`, `(7, 8)`, `(9, 10)` and `(11,)`.

        Args:
            sizes: The number of channels in each cluster.

        Returns:
            The partition.
        """
        sizes = [int(size) for size in sizes]
        if any(size < 1 for size in sizes):
            raise InvalidConfigurationError(f"Cluster sizes must be positive: {sizes}")
        offsets = np.hstack(([0], np.cumsum(sizes[:-1]))).astype(int)
        return cls(
            tuple(
                tuple(range(offset, offset + size))
                for offset, size in zip(offsets, sizes)
            )
        )

    @classmethod
    def default(cls) -> ClusterPartition:
        """Create the default 5-cluster partition of 12 channels."""
        return cls.from_sizes(DEFAULT_CLUSTER_SIZES)

    @property
    def n_clusters(self) -> int:
        """The number of clusters."""
        return len(self.channel_groups)

    @property
    def sizes(self) -> Tuple[int, ...]:
        """The number of channels in each cluster."""
        return tuple(len(group) for group in self.channel_groups)

    def validate(self, n_channels: int) -> None:
        """Check that the partition covers every channel exactly once.

        Args:
            n_channels: The number of output channels.

        Raises:
            InvalidConfigurationError: If a channel is missing, duplicated or
                out of range, or if a cluster is empty.
        """
        if self.n_clusters == 0:
            raise InvalidConfigurationError("The partition has no clusters")
        if any(len(group) == 0 for group in self.channel_groups):
            raise InvalidConfigurationError("Clusters must not be empty")

        channels = [channel for group in self.channel_groups for channel in group]
        if len(channels) != len(set(channels)):
            raise InvalidConfigurationError(
                "A channel belongs to more than one cluster"
            )
        if sorted(channels) != list(range(n_channels)):
            raise InvalidConfigurationError(
                f"The partition {self.channel_groups} does not cover "
                f"channels 0 to {n_channels - 1}"
            )

    def channel_to_cluster(self, n_channels: int) -> ndarray:
        """Get the cluster index of every channel.

        Args:
            n_channels: The number of output channels.

        Returns:
            An integer array with shape `(n_channels,)`.
        """
        self.validate(n_channels)
        mapping = np.empty(n_channels, dtype=int)
        for cluster, group in enumerate(self.channel_groups):
            mapping[list(group)] = cluster
        return mapping


def cluster_activation(
    sin_draw: Union[float, ndarray],
    cos_draw: Union[float, ndarray],
    strength: float,
) -> Union[float, ndarray]:
    """Blend two excitation sources into a cluster activation.

    `activation = sin(sin_draw)**2 * strength + cos(cos_draw)**2 * (1 - strength)`

    Args:
        sin_draw: The uniform draw for the sine leg.
        cos_draw: The uniform draw for the cosine leg.
        strength: The weight of the sine leg, between 0 and 1.

    Returns:
        The activation, between 0 and 1.
    """
    return np.sin(sin_draw) ** 2 * strength + np.cos(cos_draw) ** 2 * (1 - strength)


class ClusterActivationSynthesizer:
    """Generator of cluster-driven channel snapshots."""

    @dataclass
    class Params:
        """Initialization parameters for the :class:`ClusterActivationSynthesizer`."""

        activation_draws: ActivationDraws = ActivationDraws.INDEPENDENT
        """Whether the two activation legs share the same draw."""

        magnitude_scale: float = 100.0
        """Scale of the uniform draw in the channel magnitude."""

        magnitude_offset: float = 50.0
        """Offset added to the scaled draw in the channel magnitude.
        The magnitude is `activation * (magnitude_scale * u + magnitude_offset)`."""

        clamp_min: int = 0
        """Lower bound of the clamp applied before the perturbation."""

        clamp_max: int = 200
        """Upper bound of the clamp applied before the perturbation."""

        perturbation_probability: float = 0.1
        """The chance of perturbing each channel after clamping."""

        perturbation_amplitude: float = 25.0
        """Perturbations are drawn from `[-amplitude, amplitude)`.
        They are applied after clamping, so perturbed values can leave the clamp
        range by up to this amount."""

    def __init__(
        self,
        params: Params,
        partition: ClusterPartition,
        quantizer: Quantizer,
        random_source: RandomSource,
    ):
        """Initialize the ClusterActivationSynthesizer class.

        Args:
            params: The synthesizer parameters.
            partition: The cluster partition. It must cover all the channels of
                the quantizer.
            quantizer: Packs the channel values.
            random_source: The source of random numbers.

        Raises:
            InvalidConfigurationError: If the parameters or the partition are
                not valid.
        """
        if params.clamp_min > params.clamp_max:
            raise InvalidConfigurationError(
                f"clamp_min ({params.clamp_min}) is above "
                f"clamp_max ({params.clamp_max})"
            )
        if not 0 <= params.perturbation_probability <= 1:
            raise InvalidConfigurationError(
                "perturbation_probability must be between 0 and 1, "
                f"got {params.perturbation_probability}"
            )
        self._params = params
        self._partition = partition
        self._quantizer = quantizer
        self._random_source = random_source
        self._n_channels = quantizer.n_channels
        self._channel_clusters = partition.channel_to_cluster(self._n_channels)

    def draw_activations(self, strength: float) -> ndarray:
        """Draw the activation of every cluster.

        Args:
            strength: The weight of the sine leg, between 0 and 1.

        Returns:
            The activations with shape `(n_clusters,)`.
        """
        n_clusters = self._partition.n_clusters
        if self._params.activation_draws == ActivationDraws.SHARED:
            draws = np.asarray(self._random_source.random(n_clusters))
            return cluster_activation(draws, draws, strength)
        draws = np.asarray(self._random_source.random((n_clusters, 2)))
        return cluster_activation(draws[:, 0], draws[:, 1], strength)

    def channel_magnitudes(self, activations: ndarray) -> ndarray:
        """Derive the raw magnitude of every channel from cluster activations.

        Args:
            activations: The cluster activations with shape `(n_clusters,)`.

        Returns:
            Integer magnitudes with shape `(n_channels,)`, clamped to the
            configured range.
        """
        params = self._params
        draws = np.asarray(self._random_source.random(self._n_channels))
        magnitudes = activations[self._channel_clusters] * (
            draws * params.magnitude_scale + params.magnitude_offset
        )
        magnitudes = np.trunc(magnitudes).astype(int)
        return np.clip(magnitudes, params.clamp_min, params.clamp_max)

    def perturb(self, values: ndarray) -> ndarray:
        """Randomly perturb some channels.

        Args:
            values: The clamped channel values.

        Returns:
            Integer values, where each channel has been shifted by a uniform draw
            with the configured probability.
        """
        params = self._params
        selected = (
            np.asarray(self._random_source.random(self._n_channels))
            < params.perturbation_probability
        )
        amplitude = params.perturbation_amplitude
        offsets = (
            np.asarray(self._random_source.random(self._n_channels)) * 2 * amplitude
            - amplitude
        )
        return np.trunc(values + np.where(selected, offsets, 0.0)).astype(int)

    def generate_snapshot(self, strength: float) -> ndarray:
        """Generate a single snapshot of cluster-driven activity.

        Args:
            strength: The weight of the sine leg, between 0 and 1.

        Returns:
            An integer array with shape `(n_channels,)`.
        """
        activations = self.draw_activations(strength)
        clamped = self.channel_magnitudes(activations)
        return self._quantizer.pack(self.perturb(clamped))

    def generate(self, num_signals: int, strength: float) -> ndarray:
        """Generate a batch of independent snapshots.

        Args:
            num_signals: The number of snapshots.
            strength: The weight of the sine leg, between 0 and 1.

        Returns:
            An integer array with shape `(num_signals, n_channels)`.
        """
        logger.debug(
            f"Generating {num_signals} snapshots over "
            f"{self._partition.n_clusters} clusters"
        )
        snapshots = [self.generate_snapshot(strength) for _ in range(num_signals)]
        return np.array(snapshots)

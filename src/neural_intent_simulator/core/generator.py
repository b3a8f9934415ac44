"""The signal generation engine."""
from dataclasses import dataclass
from dataclasses import field
import logging
import math
from typing import Optional, Union

from neural_intent_simulator.core.batch import GenerationMode
from neural_intent_simulator.core.batch import SignalBatch
from neural_intent_simulator.core.clusters import ClusterActivationSynthesizer
from neural_intent_simulator.core.clusters import ClusterPartition
from neural_intent_simulator.core.noise import get_noise_generator
from neural_intent_simulator.core.noise import NoiseKind
from neural_intent_simulator.core.pose import duration_ms
from neural_intent_simulator.core.pose import Pose
from neural_intent_simulator.core.quantizer import N_CHANNELS
from neural_intent_simulator.core.quantizer import Quantizer
from neural_intent_simulator.core.random_source import make_random_source
from neural_intent_simulator.core.random_source import RandomSource
from neural_intent_simulator.core.trajectory import StateChannelMode
from neural_intent_simulator.core.trajectory import TrajectoryInterpolator
from neural_intent_simulator.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class NeuralSignalGenerator:
    """Generator of synthetic motor-intent signals.

    Two strategies are available and both return a :class:`SignalBatch`:

    - :meth:`generate_trajectory_signals` interpolates between a start and an
      end pose, adds noise and encodes the positions as fixed-point integers.
    - :meth:`generate_cluster_signals` synthesizes snapshots of cluster-driven
      firing magnitudes and does not use poses.

    The random source is seeded once when the generator is created and is
    shared by all calls. Use a separate generator for every batch that needs
    to be generated in parallel.
    """

    @dataclass
    class Params:
        """Initialization parameters for the :class:`NeuralSignalGenerator` class."""

        sample_period: int = 1
        """The interval between trajectory time steps in milliseconds."""

        n_channels: int = N_CHANNELS
        """The number of channels in every channel vector."""

        state_channels: StateChannelMode = StateChannelMode.MIRROR_X
        """The content of trajectory channels 3-5 after the first time step."""

        quantizer: Quantizer.Params = field(default_factory=Quantizer.Params)
        """The quantizer parameters."""

        cluster: ClusterActivationSynthesizer.Params = field(
            default_factory=ClusterActivationSynthesizer.Params
        )
        """The cluster synthesizer parameters."""

    def __init__(
        self,
        params: Optional[Params] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """Initialize the NeuralSignalGenerator class.

        Args:
            params: The generator parameters. Defaults are used if None.
            random_source: The source of random numbers. If None, a source
                seeded from the operating system entropy is created.

        Raises:
            InvalidConfigurationError: If the parameters are not valid.
        """
        self.params = params if params is not None else self.Params()
        self._random_source = (
            random_source if random_source is not None else make_random_source()
        )
        self._quantizer = Quantizer(self.params.quantizer, self.params.n_channels)
        self._trajectory = TrajectoryInterpolator(
            TrajectoryInterpolator.Params(
                sample_period=self.params.sample_period,
                state_channels=self.params.state_channels,
            ),
            self._quantizer,
        )

    @classmethod
    def from_seed(
        cls, random_seed: Optional[int], params: Optional[Params] = None
    ) -> "NeuralSignalGenerator":
        """Create a generator with its own seeded random source.

        Args:
            random_seed: The random seed. Use a fixed seed for reproducible
                batches, or None for fresh entropy.
            params: The generator parameters.

        Returns:
            The generator.
        """
        return cls(params, make_random_source(random_seed))

    def generate_trajectory_signals(
        self,
        start: Pose,
        end: Pose,
        num_signals: int,
        noise_kind: Union[NoiseKind, str] = NoiseKind.GAUSSIAN,
        noise_amplitude: float = 0.0,
    ) -> SignalBatch:
        """Generate time series from a trajectory between two poses.

        Every signal has `floor(duration / sample_period) + 1` channel vectors,
        where `duration` is the time between the start and the end pose.
        Channels 0-2 hold the noisy interpolated position, channels 3-5 hold the
        start orientation on the first step and a position-derived state after
        that, and channels 6-11 are zero. Values are scaled by the quantizer
        scale factor.

        Args:
            start: The start pose.
            end: The end pose.
            num_signals: The number of signals to generate.
            noise_kind: The noise distribution.
            noise_amplitude: The standard deviation of gaussian noise or the
                half-width of uniform noise.

        Returns:
            A trajectory batch with shape `(num_signals, n_steps, n_channels)`.

        Raises:
            InvalidConfigurationError: If the parameters are not valid.
            UnrecognizedNoiseKindError: If the noise kind is not supported.
        """
        _validate_num_signals(num_signals)
        if not (math.isfinite(noise_amplitude) and noise_amplitude >= 0):
            raise InvalidConfigurationError(
                "noise_amplitude must be finite and non-negative, "
                f"got {noise_amplitude}"
            )
        duration_ms(start, end)
        noise = get_noise_generator(noise_kind, noise_amplitude, self._random_source)

        data = self._trajectory.generate(start, end, num_signals, noise)
        return SignalBatch(GenerationMode.TRAJECTORY, data)

    def generate_cluster_signals(
        self,
        cluster_partition: Optional[ClusterPartition] = None,
        num_signals: int = 1,
        cluster_strength: float = 0.5,
    ) -> SignalBatch:
        """Generate snapshots of cluster-driven activity.

        Each snapshot is a single channel vector. Values are raw magnitudes that
        are clamped to the configured range before a random subset of channels
        is perturbed, so perturbed values can fall slightly outside that range.

        Args:
            cluster_partition: The clusters and their channels. The default
                5-cluster partition is used if None.
            num_signals: The number of snapshots to generate.
            cluster_strength: The weight of the sine leg of the activation,
                between 0 and 1.

        Returns:
            A cluster batch with shape `(num_signals, n_channels)`.

        Raises:
            InvalidConfigurationError: If the parameters or the partition are
                not valid.
        """
        _validate_num_signals(num_signals)
        if not 0 <= cluster_strength <= 1:
            raise InvalidConfigurationError(
                f"cluster_strength must be between 0 and 1, got {cluster_strength}"
            )
        if cluster_partition is None:
            cluster_partition = ClusterPartition.default()

        synthesizer = ClusterActivationSynthesizer(
            self.params.cluster,
            cluster_partition,
            self._quantizer,
            self._random_source,
        )
        data = synthesizer.generate(num_signals, cluster_strength)
        return SignalBatch(GenerationMode.CLUSTER, data)


def _validate_num_signals(num_signals: int):
    if num_signals < 1:
        raise InvalidConfigurationError(
            f"num_signals must be at least 1, got {num_signals}"
        )

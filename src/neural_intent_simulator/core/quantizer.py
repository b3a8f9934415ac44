"""Conversion of floating point values into fixed-width integer channel vectors."""
from dataclasses import dataclass

from numpy import ndarray
import numpy as np

from neural_intent_simulator.errors import InvalidConfigurationError

N_CHANNELS = 12
"""The number of channels in every channel vector."""

CHANNEL_DTYPE = np.int64

_LIMITS = np.iinfo(CHANNEL_DTYPE)
_LARGEST_EXACT_FLOAT = float(np.nextafter(float(_LIMITS.max), 0.0))


class Quantizer:
    """Scale, truncate and pack values into integer channel vectors."""

    @dataclass
    class Params:
        """Initialization parameters for the :class:`Quantizer` class."""

        scale_factor: float = 1024.0
        """The multiplier applied to values before truncating them to integers.
        The default encodes values with 10 fractional bits."""

        resolution_bits: int = 10
        """The nominal bit-depth of a channel."""

        clip_to_resolution: bool = False
        """Whether to clip quantized values to `[0, 2**resolution_bits - 1]`.
        Values are not clipped by default."""

        @property
        def max_value(self) -> int:
            """The largest value representable with the configured bit-depth."""
            return 2**self.resolution_bits - 1

    def __init__(self, params: Params, n_channels: int = N_CHANNELS):
        """Initialize the Quantizer class.

        Args:
            params: The quantizer parameters.
            n_channels: The number of channels in each packed vector.

        Raises:
            InvalidConfigurationError: If the parameters are not valid.
        """
        if params.scale_factor <= 0:
            raise InvalidConfigurationError(
                f"scale_factor must be positive, got {params.scale_factor}"
            )
        if params.resolution_bits < 1:
            raise InvalidConfigurationError(
                f"resolution_bits must be at least 1, got {params.resolution_bits}"
            )
        if n_channels < 1:
            raise InvalidConfigurationError(
                f"n_channels must be positive, got {n_channels}"
            )
        self.params = params
        self.n_channels = n_channels

    def quantize(self, values: ndarray) -> ndarray:
        """Scale values and truncate them toward zero.

        Scaled values outside the range of the channel dtype saturate at its
        minimum or maximum, so arbitrarily large noise never wraps around.

        Args:
            values: The floating point values.

        Returns:
            An integer array with the same shape as `values`.
        """
        scaled = np.trunc(np.asarray(values, dtype=float) * self.params.scale_factor)
        # float(limits.max) rounds up to 2**63 and can't be cast back
        clipped = np.clip(scaled, float(_LIMITS.min), _LARGEST_EXACT_FLOAT)
        quantized = np.where(
            scaled >= float(_LIMITS.max),
            _LIMITS.max,
            clipped.astype(CHANNEL_DTYPE),
        ).astype(CHANNEL_DTYPE)
        if self.params.clip_to_resolution:
            quantized = np.clip(quantized, 0, self.params.max_value)
        return quantized

    def pack(self, channel_values: ndarray) -> ndarray:
        """Place channel values into fixed-width channel vectors.

        Channels that are not provided are filled with zeros.

        Args:
            channel_values: Array with shape `(..., k)` where `k <= n_channels`.

        Returns:
            An integer array with shape `(..., n_channels)`.

        Raises:
            ValueError: If more values than channels are provided.
        """
        channel_values = np.asarray(channel_values)
        n_values = channel_values.shape[-1]
        if n_values > self.n_channels:
            raise ValueError(
                f"Cannot pack {n_values} values into {self.n_channels} channels"
            )
        packed = np.zeros(channel_values.shape[:-1] + (self.n_channels,), CHANNEL_DTYPE)
        packed[..., :n_values] = channel_values
        return packed

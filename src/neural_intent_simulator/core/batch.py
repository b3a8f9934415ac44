"""Batches of generated signals."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from numpy import ndarray
import numpy as np


class GenerationMode(str, Enum):
    """The strategy that produced a batch."""

    TRAJECTORY = "trajectory"
    CLUSTER = "cluster"


_EXPECTED_DIMS = {GenerationMode.TRAJECTORY: 3, GenerationMode.CLUSTER: 2}


@dataclass(frozen=True, eq=False)
class SignalBatch:
    """An ordered collection of independently generated signals.

    Batches from different modes use different numeric ranges: trajectory
    batches hold fixed-point scaled positions while cluster batches hold raw
    firing magnitudes. They should not be mixed without rescaling.
    """

    mode: GenerationMode
    """The generation strategy that produced the batch."""

    data: ndarray
    """Integer array of channel values. Its shape is
    `(n_signals, n_steps, n_channels)` for trajectory batches, where each signal
    is a time series, and `(n_signals, n_channels)` for cluster batches, where
    each signal is a single snapshot."""

    def __post_init__(self):
        """Execute validation checks on the data and freeze it."""
        mode = GenerationMode(self.mode)
        data = np.array(self.data)
        expected_dims = _EXPECTED_DIMS[mode]
        if data.ndim != expected_dims:
            raise ValueError(
                f"{mode.value} data should have {expected_dims} dimensions, "
                f"got shape {data.shape}"
            )
        if data.size and not np.issubdtype(data.dtype, np.integer):
            raise ValueError(f"Channel values must be integers, got {data.dtype}")
        data.setflags(write=False)
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "data", data)

    def __len__(self) -> int:
        """Return the number of signals."""
        return self.data.shape[0]

    def __iter__(self) -> Iterator[ndarray]:
        """Iterate over the signals in generation order."""
        return iter(self.data)

    def __getitem__(self, key) -> ndarray:
        """Return a signal or a slice of signals."""
        return self.data[key]

    def __eq__(self, o: object) -> bool:
        """Compare the mode and data of two batches."""
        if not isinstance(o, SignalBatch):
            return False
        return self.mode == o.mode and np.array_equal(self.data, o.data)

    @property
    def signal_shape(self) -> Tuple[int, ...]:
        """The shape of a single signal."""
        return self.data.shape[1:]

    @property
    def n_channels(self) -> int:
        """The number of channels in each channel vector."""
        return self.data.shape[-1]

    def to_lines(self) -> List[str]:
        """Render the batch as text.

        Each channel vector becomes a line of space-separated integers. In
        trajectory batches, signals are separated by an empty line.

        Returns:
            The lines without trailing newlines.
        """
        if self.mode == GenerationMode.CLUSTER:
            return [_format_vector(vector) for vector in self.data]

        lines: List[str] = []
        for index, signal in enumerate(self.data):
            if index > 0:
                lines.append("")
            lines.extend(_format_vector(vector) for vector in signal)
        return lines


def _format_vector(vector: ndarray) -> str:
    return " ".join(str(int(value)) for value in vector)

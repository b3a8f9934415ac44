"""Poses describing the start and end of an intended motion."""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from numpy import ndarray
import numpy as np

from neural_intent_simulator.errors import InvalidConfigurationError

N_POSE_COMPONENTS = 8


@dataclass(frozen=True)
class Pose:
    """A point in position/orientation space with a finger flag and a timestamp."""

    x: float
    """Position along the x axis, in arbitrary spatial units."""

    y: float
    """Position along the y axis."""

    z: float
    """Position along the z axis."""

    pitch: float
    """Orientation pitch in radians."""

    yaw: float
    """Orientation yaw in radians."""

    roll: float
    """Orientation roll in radians."""

    fingers_extended: float = 0.0
    """1.0 if the fingers are extended, 0.0 otherwise."""

    relative_time_ms: float = 0.0
    """Time offset from the start of the intended action in milliseconds.
    The end pose's value is the total duration of the signal."""

    def __post_init__(self):
        """Check that the timestamp is valid."""
        if not (math.isfinite(self.relative_time_ms) and self.relative_time_ms >= 0):
            raise InvalidConfigurationError(
                "relative_time_ms must be finite and non-negative, "
                f"got {self.relative_time_ms}"
            )

    @property
    def position(self) -> ndarray:
        """The `(x, y, z)` position as an array."""
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def orientation(self) -> ndarray:
        """The `(pitch, yaw, roll)` orientation as an array."""
        return np.array([self.pitch, self.yaw, self.roll], dtype=float)

    def to_array(self) -> ndarray:
        """Return all 8 components in their canonical order."""
        return np.array(
            [
                self.x,
                self.y,
                self.z,
                self.pitch,
                self.yaw,
                self.roll,
                self.fingers_extended,
                self.relative_time_ms,
            ],
            dtype=float,
        )

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Pose:
        """Create a pose from an 8-element sequence.

        Args:
            values: `x, y, z, pitch, yaw, roll, fingers_extended, relative_time_ms`.

        Returns:
            The corresponding pose.

        Raises:
            InvalidConfigurationError: If the sequence doesn't have 8 elements.
        """
        if len(values) != N_POSE_COMPONENTS:
            raise InvalidConfigurationError(
                f"A pose needs {N_POSE_COMPONENTS} components, got {len(values)}"
            )
        return cls(*(float(v) for v in values))


def duration_ms(start: Pose, end: Pose) -> float:
    """Get the duration of the motion between two poses.

    Raises:
        InvalidConfigurationError: If the end pose happens before the start pose.
    """
    duration = end.relative_time_ms - start.relative_time_ms
    if duration < 0:
        raise InvalidConfigurationError(
            "The end pose must not happen before the start pose "
            f"({end.relative_time_ms} < {start.relative_time_ms})"
        )
    return duration

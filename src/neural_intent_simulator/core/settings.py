"""Models for parsing and validating the contents of `settings.yaml`."""
from enum import Enum
import math
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from neural_intent_simulator.core.batch import GenerationMode
from neural_intent_simulator.core.clusters import ActivationDraws
from neural_intent_simulator.core.noise import NoiseKind
from neural_intent_simulator.core.pose import N_POSE_COMPONENTS
from neural_intent_simulator.core.trajectory import StateChannelMode

SETTINGS_VERSION = "1.0.0"
"""The settings file version this package expects."""


class LogLevel(str, Enum):
    """Possible log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    ERROR = "ERROR"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class QuantizerModel(_StrictModel):
    """Settings for the quantizer."""

    scale_factor: float = 1024.0
    resolution_bits: int = 10
    clip_to_resolution: bool = False

    @field_validator("scale_factor")
    def _scale_factor_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("scale_factor must be positive")
        return v

    @field_validator("resolution_bits")
    def _resolution_bits_must_be_positive(cls, v):
        if v < 1:
            raise ValueError("resolution_bits must be at least 1")
        return v


class GeneratorSettings(_StrictModel):
    """Settings for the signal generator."""

    class Trajectory(_StrictModel):
        """Settings for the trajectory strategy."""

        start: list[float]
        end: list[float]
        noise_kind: NoiseKind = NoiseKind.GAUSSIAN
        noise_amplitude: float = 0.0
        state_channels: StateChannelMode = StateChannelMode.MIRROR_X

        @field_validator("start", "end")
        def _pose_must_have_all_components(cls, v):
            if len(v) != N_POSE_COMPONENTS:
                raise ValueError(
                    f"A pose needs {N_POSE_COMPONENTS} components, got {len(v)}"
                )
            return v

        @field_validator("noise_amplitude")
        def _noise_amplitude_must_be_non_negative(cls, v):
            if not (math.isfinite(v) and v >= 0):
                raise ValueError("noise_amplitude must be finite and non-negative")
            return v

        @model_validator(mode="after")
        def _end_must_not_precede_start(self):
            if self.end[-1] < self.start[-1]:
                raise ValueError("The end pose must not happen before the start pose")
            return self

    class Cluster(_StrictModel):
        """Settings for the cluster strategy."""

        cluster_sizes: list[int] = [4, 3, 2, 2, 1]
        cluster_strength: float = 0.5
        activation_draws: ActivationDraws = ActivationDraws.INDEPENDENT
        clamp_min: int = 0
        clamp_max: int = 200
        perturbation_probability: float = 0.1
        perturbation_amplitude: float = 25.0

        @field_validator("cluster_sizes")
        def _cluster_sizes_must_be_positive(cls, v):
            if not v or any(size < 1 for size in v):
                raise ValueError("cluster_sizes must be a list of positive integers")
            return v

        @field_validator("cluster_strength", "perturbation_probability")
        def _must_be_a_fraction(cls, v):
            if not 0 <= v <= 1:
                raise ValueError("value must be between 0 and 1")
            return v

        @model_validator(mode="after")
        def _clamp_range_must_be_ordered(self):
            if self.clamp_min > self.clamp_max:
                raise ValueError("clamp_min must not be above clamp_max")
            return self

    sample_period: int = 1
    random_seed: Optional[int] = None
    n_channels: int = 12
    quantizer: QuantizerModel = Field(default_factory=QuantizerModel)
    trajectory: Trajectory
    cluster: Cluster = Field(default_factory=Cluster)

    @field_validator("sample_period", "n_channels")
    def _must_be_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @model_validator(mode="after")
    def _clusters_must_cover_all_channels(self):
        if sum(self.cluster.cluster_sizes) != self.n_channels:
            raise ValueError(
                f"cluster_sizes {self.cluster.cluster_sizes} do not add up "
                f"to n_channels ({self.n_channels})"
            )
        return self


class Settings(_StrictModel):
    """All settings for the NIS package."""

    version: str
    log_level: LogLevel
    mode: GenerationMode
    num_signals: int
    generator: GeneratorSettings

    @field_validator("num_signals")
    def _num_signals_must_be_positive(cls, v):
        if v < 1:
            raise ValueError("num_signals must be at least 1")
        return v

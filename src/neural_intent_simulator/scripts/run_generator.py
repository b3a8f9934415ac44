r"""Script that generates a batch of synthetic intent signals.

The script reads the default settings file unless a different one is specified
via the `\--settings-path` argument. The `generator` section of the file holds
the settings for both generation strategies, and the `mode` entry selects which
one is used.

The generated batch is written to stdout, one channel vector per line as
space-separated integers. In trajectory mode, signals are separated by an empty
line.
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import cast, Optional, TextIO

from pydantic_yaml import to_yaml_str
from rich.pretty import pprint

from neural_intent_simulator.core.batch import GenerationMode
from neural_intent_simulator.core.batch import SignalBatch
from neural_intent_simulator.core.clusters import ClusterActivationSynthesizer
from neural_intent_simulator.core.clusters import ClusterPartition
from neural_intent_simulator.core.generator import NeuralSignalGenerator
from neural_intent_simulator.core.pose import Pose
from neural_intent_simulator.core.quantizer import Quantizer
from neural_intent_simulator.core.settings import GeneratorSettings
from neural_intent_simulator.core.settings import Settings
from neural_intent_simulator.core.settings import SETTINGS_VERSION
from neural_intent_simulator.util.runtime import configure_logger
from neural_intent_simulator.util.runtime import get_default_settings_path
from neural_intent_simulator.util.runtime import initialize_logger
from neural_intent_simulator.util.settings_loader import check_config_override_str
from neural_intent_simulator.util.settings_loader import load_settings

SCRIPT_NAME = "nis-generate"
logger = logging.getLogger(__name__)


def _get_quantizer_params(generator_settings: GeneratorSettings) -> Quantizer.Params:
    quantizer_settings = generator_settings.quantizer
    return Quantizer.Params(
        quantizer_settings.scale_factor,
        quantizer_settings.resolution_bits,
        quantizer_settings.clip_to_resolution,
    )


def _get_cluster_params(
    generator_settings: GeneratorSettings,
) -> ClusterActivationSynthesizer.Params:
    cluster_settings = generator_settings.cluster
    return ClusterActivationSynthesizer.Params(
        activation_draws=cluster_settings.activation_draws,
        clamp_min=cluster_settings.clamp_min,
        clamp_max=cluster_settings.clamp_max,
        perturbation_probability=cluster_settings.perturbation_probability,
        perturbation_amplitude=cluster_settings.perturbation_amplitude,
    )


def _get_generator_params(
    generator_settings: GeneratorSettings,
) -> NeuralSignalGenerator.Params:
    return NeuralSignalGenerator.Params(
        sample_period=generator_settings.sample_period,
        n_channels=generator_settings.n_channels,
        state_channels=generator_settings.trajectory.state_channels,
        quantizer=_get_quantizer_params(generator_settings),
        cluster=_get_cluster_params(generator_settings),
    )


def generate(settings: Settings) -> SignalBatch:
    """Generate a batch of signals as described by the settings.

    Args:
        settings: The parsed settings.

    Returns:
        The generated batch.
    """
    generator_settings = settings.generator
    generator = NeuralSignalGenerator.from_seed(
        generator_settings.random_seed, _get_generator_params(generator_settings)
    )

    if settings.mode == GenerationMode.TRAJECTORY:
        trajectory = generator_settings.trajectory
        return generator.generate_trajectory_signals(
            Pose.from_sequence(trajectory.start),
            Pose.from_sequence(trajectory.end),
            settings.num_signals,
            trajectory.noise_kind,
            trajectory.noise_amplitude,
        )
    elif settings.mode == GenerationMode.CLUSTER:
        cluster = generator_settings.cluster
        return generator.generate_cluster_signals(
            ClusterPartition.from_sizes(cluster.cluster_sizes),
            settings.num_signals,
            cluster.cluster_strength,
        )
    else:
        raise ValueError(f"Unexpected generation mode {settings.mode}")


def write_batch(batch: SignalBatch, stream: TextIO):
    """Write a batch as text, one channel vector per line."""
    for line in batch.to_lines():
        stream.write(line + "\n")


def _parse_args(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser(
        description="Generate synthetic neural intent signals.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--settings-path",
        type=Path,
        default=Path(get_default_settings_path()),
        help="Path to the settings.yaml file.",
    )
    parser.add_argument(
        "--overrides",
        "-o",
        nargs="*",
        type=check_config_override_str,
        help=(
            "Specify settings overrides as key-value pairs, separated by spaces. "
            "For example: -o log_level=DEBUG generator.random_seed=42"
        ),
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GenerationMode],
        help="Override the generation mode from the settings file.",
    )
    parser.add_argument(
        "--num-signals",
        "-n",
        type=int,
        help="Override the number of signals from the settings file.",
    )
    parser.add_argument(
        "--print-settings-only",
        "-p",
        action="store_true",
        help="Parse/print the settings and exit.",
    )
    args = parser.parse_args(argv)
    return args


def _get_overrides(args) -> list[str]:
    overrides = list(args.overrides or [])
    if args.mode is not None:
        overrides.append(f"mode={args.mode}")
    if args.num_signals is not None:
        overrides.append(f"num_signals={args.num_signals}")
    return overrides


def run(argv: Optional[list[str]] = None):
    """Load the configuration, generate signals and print them."""
    initialize_logger(SCRIPT_NAME)
    args = _parse_args(argv)
    settings: Settings = cast(
        Settings,
        load_settings(
            args.settings_path,
            settings_parser=Settings,
            override_dotlist=_get_overrides(args),
            expected_version=SETTINGS_VERSION,
        ),
    )
    if args.print_settings_only:
        pprint(settings)
        return

    configure_logger(SCRIPT_NAME, settings.log_level)
    logger.debug(f"run_generator settings:\n{to_yaml_str(settings)}")

    try:
        batch = generate(settings)
        write_batch(batch, sys.stdout)
    except KeyboardInterrupt:
        logger.info("CTRL+C received. Exiting...")
        return
    logger.info(f"Generated {len(batch)} {batch.mode.value} signals")


if __name__ == "__main__":
    run()

"""Functions commonly used by scripts."""
import logging
from logging.handlers import MemoryHandler
import os
import sys

import neural_intent_simulator
from neural_intent_simulator.core.settings import LogLevel

logger = logging.getLogger(__name__)

NIS_HOME = os.path.join(os.path.expanduser("~"), ".nis")


def initialize_logger(script_name: str):
    """Initialize the logger.

    Store log messages in memory until the logger is configured.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.NOTSET)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_get_log_message_format(script_name)))
    temp_handler = MemoryHandler(1000, target=handler)
    root_logger.addHandler(temp_handler)


def configure_logger(script_name: str, log_level: LogLevel):
    """Set up the logger.

    Buffered messages below `log_level` are discarded.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, MemoryHandler):
            level = logging.getLevelName(log_level.value.upper())
            filtered_buffer = filter(
                lambda record: record.levelno >= level, handler.buffer
            )
            handler.buffer = list(filtered_buffer)
            break

    logging.basicConfig(
        format=_get_log_message_format(script_name),
        level=log_level.value,
        stream=sys.stderr,
        force=True,
    )


def _get_log_message_format(script_name: str):
    return f"%(levelname)s [{script_name}]: %(message)s"


def get_configs_dir() -> str:
    """Get the path for the directory containing the user configuration files."""
    return NIS_HOME


def get_default_settings_path() -> str:
    """Get the path of the settings file to use when none is given.

    The file in the user configuration directory is preferred. If it doesn't
    exist, the default settings shipped with the package are used.
    """
    user_settings = os.path.join(get_configs_dir(), "settings.yaml")
    if os.path.exists(user_settings):
        return user_settings
    package_dir = os.path.dirname(neural_intent_simulator.__file__)
    return os.path.join(package_dir, "config", "settings.yaml")

"""Configuration constants for MICROBOOT.

This module centralizes the default kind names, environment-variable naming
and small helpers related to where the process writes its logs.
"""

from pathlib import Path

from platformdirs import user_log_dir

ENV_PREFIX = "MICRO_"  # pragma: no mutate

DEFAULT_BROKER = "http"
DEFAULT_REGISTRY = "consul"
# Not a built-in selector key: the default run leaves the selector unresolved.
DEFAULT_SELECTOR = "selector"
DEFAULT_TRANSPORT = "http"

BUILTIN_SELECTOR = "random"

DEFAULT_SERVER_ADDRESS = ":0"
DEFAULT_DESCRIPTION = "a micro service"
DEFAULT_CONSUL_ADDRESS = "127.0.0.1:8500"

LOG_FILE_NAME = "microboot.log"


def envvar(flag_name: str) -> str:
    """Return the environment variable bound to a flag.

    Args:
        flag_name: The flag name without dashes, e.g. ``server_name``.

    Returns:
        The variable name, e.g. ``MICRO_SERVER_NAME``.
    """
    return ENV_PREFIX + flag_name.upper()


def default_log_dir() -> Path:
    """Directory used for log files when ``--log_dir`` is not given."""
    return Path(user_log_dir("microboot", appauthor=False))

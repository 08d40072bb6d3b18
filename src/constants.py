"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3
    INVALID_INPUT = 4


class SupportLevel(Enum):
    """How well an index's API version is understood by this client."""

    SUPPORTED = "supported"
    # the index may provide additional metadata that will be dropped
    SOMEWHAT_SUPPORTED = "somewhat_supported"
    UNSUPPORTED = "unsupported"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    INDEX_URL = "https://pypi.org"
    API_MAJOR_VERSION = 1
    API_MINOR_VERSION = 0
    SIMPLE_API_ACCEPT = "application/vnd.pypi.simple.v1+json"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "DISTSCOUT_LOG_LEVEL"
    CONFIG_ENV = "DISTSCOUT_CONFIG"
    SDIST_SUFFIXES = (".tar.gz", ".zip")
    INCLUDE_PRERELEASES = False


# YAML keys that may override Constants attributes
_CONFIG_KEYS = {
    "index_url": "INDEX_URL",
    "request_timeout": "REQUEST_TIMEOUT",
    "include_prereleases": "INCLUDE_PRERELEASES",
    "log_format": "LOG_FORMAT",
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Apply a YAML configuration file on top of Constants.

    The path is taken from ``path`` or, failing that, from the environment
    variable named by ``Constants.CONFIG_ENV``. Unknown keys are ignored with a
    warning.

    Args:
        path: Optional path to a YAML file.

    Returns:
        dict: The overrides that were applied.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a YAML mapping.
    """
    path = path or os.environ.get(Constants.CONFIG_ENV)
    if not path:
        return {}

    import yaml  # pylint: disable=import-outside-toplevel

    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"configuration in {path} must be a mapping")

    applied: Dict[str, Any] = {}
    for key, value in data.items():
        attr = _CONFIG_KEYS.get(str(key).lower())
        if attr is None:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue
        if attr == "REQUEST_TIMEOUT":
            try:
                value = int(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"request_timeout must be an integer, got {value!r}") from exc
        elif attr == "INCLUDE_PRERELEASES":
            value = bool(value)
        elif attr == "INDEX_URL":
            value = str(value).rstrip("/")
        setattr(Constants, attr, value)
        applied[attr] = value
    return applied

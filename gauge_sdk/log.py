"""
Logging setup for applications using the Gauge SDK.

All SDK modules log below the ``gauge_sdk`` logger, so its level can be set
apart from the application's, e.g. to silence fire-and-forget send warnings.
"""
import logging
from typing import Optional

from . import config

SDK_LOGGER = 'gauge_sdk'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _parse_level(log_level: str) -> int:
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")
    return numeric_level


def setup_logging(log_level: str = config.LOG_LEVEL, sdk_level: Optional[str] = None) -> None:
    """
    Setup logging for the application and the SDK.

    Args:
        log_level (str): Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sdk_level (str, optional): Level of the ``gauge_sdk`` logger.
            Defaults to ``log_level``.

    Raises:
        ValueError: If a log level is not a known level name
    """
    numeric_level = _parse_level(log_level)
    sdk_numeric_level = _parse_level(sdk_level) if sdk_level else numeric_level

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger(SDK_LOGGER).setLevel(sdk_numeric_level)

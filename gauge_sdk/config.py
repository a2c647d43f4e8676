"""
Configuration settings for the Gauge SDK.

Module-level values are read from the environment once at import time and
serve as defaults for new ``TransportConfig`` and ``Credentials`` objects.
A ``Transport`` reads the fields of its config objects on every request, so
changing them takes effect on the next call. Mutating them while requests
are in flight is not supported.
"""
import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


# Server configuration
HOST = os.getenv('METRICS_HOST', 'metrics-api.librato.com')
METRICS_PATH = '/v1/metrics'
ASYNC_PORT = 443

# Authentication
USERNAME = os.getenv('METRICS_USERNAME', '')
TOKEN = os.getenv('METRICS_TOKEN', '')

# HTTP client configuration
REQUEST_TIMEOUT = int(os.getenv('METRICS_TIMEOUT', '2'))  # seconds, bounds connect and request
ASYNC_DEFAULT = _env_flag('METRICS_ASYNC', 'true')

# Source configuration
DEFAULT_ENVIRONMENT = 'development'

# Logging configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


@dataclass
class Credentials:
    """Basic-Auth credentials for the metrics service."""
    username: str = ''
    token: str = ''


@dataclass
class TransportConfig:
    """Connection settings used by a Transport."""
    host: str = HOST
    timeout: int = REQUEST_TIMEOUT
    async_default: bool = ASYNC_DEFAULT


def default_credentials() -> Credentials:
    return Credentials(username=USERNAME, token=TOKEN)


def default_config() -> TransportConfig:
    return TransportConfig(host=HOST, timeout=REQUEST_TIMEOUT, async_default=ASYNC_DEFAULT)


def current_environment() -> str:
    """
    Get the name of the deployment environment measurements originate from.

    Read from ``METRICS_ENVIRONMENT`` on every call.

    Returns:
        str: The environment name, ``development`` if unset
    """
    return os.getenv('METRICS_ENVIRONMENT') or DEFAULT_ENVIRONMENT

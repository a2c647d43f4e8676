"""
Gauge SDK for submitting measurements to a time-series metrics service.
"""
from .client import (
    MetricsClient,
    configure,
    default_client,
    gauge,
    get,
    post
)
from .config import Credentials, TransportConfig, current_environment
from .errors import MetricsError, TransportError
from .log import setup_logging
from .measurement import MeasurementBuilder, build_gauge
from .transport import Transport

__all__ = [
    'Credentials',
    'MeasurementBuilder',
    'MetricsClient',
    'MetricsError',
    'Transport',
    'TransportConfig',
    'TransportError',
    'build_gauge',
    'configure',
    'current_environment',
    'default_client',
    'gauge',
    'get',
    'post',
    'setup_logging',
]

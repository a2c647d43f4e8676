"""
Exceptions raised by the Gauge SDK.
"""
from typing import Optional


class MetricsError(Exception):
    """Base class for all Gauge SDK errors."""


class TransportError(MetricsError):
    """A synchronous request to the metrics service failed.

    Raised on connection failures, timeouts and response bodies that cannot
    be decoded as JSON. The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, method: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.path = path

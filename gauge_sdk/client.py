"""
Client for tracking gauges in the metrics service.

Combines a MeasurementBuilder with a Transport. A default client is created
at import time for the module-level helpers; applications needing several
configurations can create their own ``MetricsClient`` instances.
"""
import logging
from dataclasses import fields
from typing import Any, Dict, Iterable, Optional, Union

from .measurement import MeasurementBuilder
from .transport import Transport

logger = logging.getLogger(__name__)


class MetricsClient:
    """Client for sending gauges to and listing metrics from the service."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        builder: Optional[MeasurementBuilder] = None
    ):
        """
        Initialize the metrics client.

        Args:
            transport (Transport, optional): Transport to deliver payloads with.
                Defaults to a Transport using the environment configuration.
            builder (MeasurementBuilder, optional): Builder for gauge payloads.
        """
        self.transport = transport or Transport()
        self.builder = builder or MeasurementBuilder()

    def gauge(
        self,
        name: str,
        value: Any,
        source: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        **options
    ) -> Any:
        """
        Track a gauge.

        Args:
            name (str): Name of the metric
            value: The measured value
            source (str, optional): Origin of the measurement. Defaults to the
                current environment.
            params (dict, optional): Additional fields for the record
            **options: Passed on to Transport.post (``async_``, ``type``)

        Returns:
            The result of Transport.post
        """
        payload = self.builder.build_gauge(name, value, source, params)
        return self.transport.post(payload, **options)

    def post(self, payload: Dict[str, Any], **options) -> Any:
        return self.transport.post(payload, **options)

    def get(
        self,
        name: Optional[str] = None,
        tags: Optional[Union[str, Iterable[str]]] = None
    ) -> Any:
        return self.transport.get(name=name, tags=tags)

    def configure(self, **settings) -> None:
        """
        Update the transport's configuration and credentials in place.

        Accepts ``host``, ``timeout``, ``async_default``, ``username`` and
        ``token``.

        Raises:
            ValueError: If an unknown setting is given
        """
        targets = (self.transport.config, self.transport.credentials)
        for key, value in settings.items():
            for target in targets:
                if key in {field.name for field in fields(target)}:
                    setattr(target, key, value)
                    break
            else:
                raise ValueError(f"Unknown setting: {key}")
        logger.debug("Configured metrics client: %s", sorted(settings))


# Singleton instance for easy import
default_client = MetricsClient()


def gauge(
    name: str,
    value: Any,
    source: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
    **options
) -> Any:
    """
    Track a gauge using the default client.

    Returns:
        The result of Transport.post
    """
    return default_client.gauge(name, value, source, params, **options)


def post(payload: Dict[str, Any], **options) -> Any:
    """Post a payload using the default client."""
    return default_client.post(payload, **options)


def get(
    name: Optional[str] = None,
    tags: Optional[Union[str, Iterable[str]]] = None
) -> Any:
    """List metrics using the default client."""
    return default_client.get(name=name, tags=tags)


def configure(**settings) -> None:
    """Update the default client's configuration and credentials."""
    default_client.configure(**settings)

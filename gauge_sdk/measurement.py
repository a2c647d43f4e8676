"""
Construction of gauge measurements.

A gauge record carries ``name``, ``value``, ``source`` and ``measure_time``.
Records are wrapped as ``{'gauges': [record]}`` because the service only
accepts batches, even for a single measurement.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import pytz

from . import config

logger = logging.getLogger(__name__)


def now() -> int:
    """Current Unix timestamp in whole seconds."""
    return int(datetime.now(pytz.UTC).timestamp())


class MeasurementBuilder:
    """Builds gauge payloads from caller-supplied and default values."""

    def __init__(
        self,
        environment: Callable[[], str] = config.current_environment,
        clock: Callable[[], int] = now
    ):
        """
        Initialize the builder.

        Args:
            environment (callable, optional): Returns the default source name.
                Defaults to config.current_environment.
            clock (callable, optional): Returns the default measure time.
                Defaults to now().
        """
        self.environment = environment
        self.clock = clock

    def build_gauge(
        self,
        name: str,
        value: Any,
        source: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Build a gauge payload ready to be posted.

        Defaults are applied first, then ``extra_params``, then ``name``,
        ``value`` and ``source``, so the identity fields can never be
        overwritten by extras.

        Args:
            name (str): Name of the metric
            value: The measured value, passed through as given
            source (str, optional): Origin of the measurement. Defaults to the
                current environment when empty.
            extra_params (dict, optional): Additional fields for the record,
                e.g. ``measure_time``

        Returns:
            dict: ``{'gauges': [record]}``
        """
        defaults = {
            'measure_time': self.clock(),
            'source': self.environment(),
        }
        if not source:
            source = defaults['source']

        record = dict(defaults)
        record.update(extra_params or {})
        record.update(name=name, value=value, source=source)

        logger.debug("Built gauge %s=%s (source=%s)", name, value, source)
        return {'gauges': [record]}


default_builder = MeasurementBuilder()


def build_gauge(
    name: str,
    value: Any,
    source: Optional[str] = None,
    extra_params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build a gauge payload using the default builder.

    Returns:
        dict: ``{'gauges': [record]}``
    """
    return default_builder.build_gauge(name, value, source, extra_params)

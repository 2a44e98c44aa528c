"""Sensor delegation for fan-out pattern.

SensorDelegate routes poll events to several monitoring backends at once,
e.g. Prometheus gauges and log summaries. Each backend receives its own state
dict from the start/complete hook pair.
"""

from typing import Set, Dict, Optional, Any
import logging

from kuberes.sensors.base import ExporterSensor

logger = logging.getLogger(__name__)


class SensorDelegate(ExporterSensor):
    """Delegate sensor that fans out events to multiple backends.

    Example:
        delegate = SensorDelegate()
        delegate.add(LoggingSensor())
        delegate.add(PrometheusMonitor(registry))

        state = delegate.on_poll_start()
        delegate.on_poll_complete(state, True, pod_count=3, container_count=4)
    """

    def __init__(self) -> None:
        """Initialize empty sensor delegate."""
        self._sensors: Set[ExporterSensor] = set()

    def add(self, sensor: ExporterSensor) -> None:
        """Add a sensor to the delegate.

        Args:
            sensor: Sensor instance to add
        """
        logger.info(f"Adding sensor: {sensor.__class__.__name__}")
        self._sensors.add(sensor)

    def remove(self, sensor: ExporterSensor) -> None:
        """Remove a sensor from the delegate.

        Args:
            sensor: Sensor instance to remove
        """
        logger.info(f"Removing sensor: {sensor.__class__.__name__}")
        self._sensors.discard(sensor)

    def __len__(self) -> int:
        return len(self._sensors)

    def on_poll_start(self) -> Optional[Dict[ExporterSensor, Any]]:
        """Delegate poll_start to all sensors.

        Returns:
            Dict mapping each sensor to its state
        """
        return {sensor: sensor.on_poll_start() for sensor in self._sensors}

    def on_poll_complete(
        self,
        state: Optional[Dict[ExporterSensor, Any]],
        success: bool,
        pod_count: int = 0,
        container_count: int = 0,
        error: Optional[Exception] = None,
    ) -> None:
        """Delegate poll_complete to all sensors."""
        state = state or {}
        for sensor in self._sensors:
            sensor.on_poll_complete(
                state.get(sensor),
                success,
                pod_count=pod_count,
                container_count=container_count,
                error=error,
            )

    def on_container_resources(
        self,
        namespace: str,
        pod_name: str,
        container_name: str,
        cpu_request: int,
        memory_request: int,
        cpu_limit: int,
        memory_limit: int,
    ) -> None:
        """Delegate container_resources to all sensors."""
        for sensor in self._sensors:
            sensor.on_container_resources(
                namespace,
                pod_name,
                container_name,
                cpu_request,
                memory_request,
                cpu_limit,
                memory_limit,
            )

"""Exporter sensor framework.

Poll events are routed through hook-based sensors so that recording values
(Prometheus gauges) and reporting on them (logs) stay out of the poller.

Key components:
- ExporterSensor: Base class defining poll lifecycle hooks
- SensorDelegate: Fan-out pattern for routing events to multiple sensor backends
- PrometheusMonitor: Container resource gauges and poll health metrics
- LoggingSensor: Per-cycle log summary
- MetricsServer: HTTP endpoint rendering a registry

Usage:
    from prometheus_client import CollectorRegistry
    from kuberes.sensors import SensorDelegate, PrometheusMonitor, LoggingSensor

    registry = CollectorRegistry()
    delegate = SensorDelegate()
    delegate.add(PrometheusMonitor(registry))
    delegate.add(LoggingSensor())
"""

from kuberes.sensors.base import ExporterSensor
from kuberes.sensors.delegate import SensorDelegate
from kuberes.sensors.prometheus import PrometheusMonitor
from kuberes.sensors.logger import LoggingSensor
from kuberes.sensors.server import MetricsServer

__all__ = [
    'ExporterSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'LoggingSensor',
    'MetricsServer',
]

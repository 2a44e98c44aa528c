"""Prometheus monitoring backend for the exporter.

PrometheusMonitor owns the gauge families published on the metrics endpoint:

1. container_resources_cpu_milli - CPU requests/limits in millicores
2. container_resources_memory_bytes - memory requests/limits in bytes

Both are keyed by (type, namespace, pod_name, container_name), where type is
"request" or "limit". Values are set, never incremented, so a repeated poll
overwrites the previous observation. Label combinations are never removed: a
deleted pod keeps reporting its last values until the process restarts.

It also records the exporter's own poll health (duration and result).
"""

from typing import Dict, Optional, Any, Sequence
import time
import logging

from prometheus_client import CollectorRegistry, Counter, Histogram, Gauge

from kuberes.sensors.base import ExporterSensor

logger = logging.getLogger(__name__)

CPU_FAMILY = "container_resources_cpu_milli"
MEMORY_FAMILY = "container_resources_memory_bytes"

REQUEST = "request"
LIMIT = "limit"

CONTAINER_LABELS = ["type", "namespace", "pod_name", "container_name"]


class PrometheusMonitor(ExporterSensor):
    """Prometheus metrics monitor for the exporter.

    Metrics are registered on the registry passed in rather than the
    prometheus_client global one, so the same registry can be handed to the
    metrics server and several monitors can coexist in tests.

    Example:
        registry = CollectorRegistry()
        monitor = PrometheusMonitor(registry)
        monitor.set(CPU_FAMILY, ("request", "prod", "web-1", "app"), 500)
    """

    def __init__(self, registry: CollectorRegistry):
        """Initialize Prometheus metrics."""
        super().__init__()
        self.registry = registry

        # =============================================================================
        # Container Resource Metrics
        # =============================================================================

        self.container_cpu = Gauge(
            CPU_FAMILY,
            'Container CPU resources in millicpus',
            labelnames=CONTAINER_LABELS,
            registry=registry,
        )

        self.container_memory = Gauge(
            MEMORY_FAMILY,
            'Container memory resources in bytes',
            labelnames=CONTAINER_LABELS,
            registry=registry,
        )

        # =============================================================================
        # Poll Health Metrics
        # =============================================================================

        self.poll_duration = Histogram(
            'kuberes_poll_duration_seconds',
            'Time spent listing pods and recording their resources',
            labelnames=['result'],
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
            registry=registry,
        )

        self.poll_total = Counter(
            'kuberes_poll_total',
            'Total number of poll cycles',
            labelnames=['result'],
            registry=registry,
        )

        self._families: Dict[str, Gauge] = {
            CPU_FAMILY: self.container_cpu,
            MEMORY_FAMILY: self.container_memory,
        }

        logger.info("PrometheusMonitor initialized with all metrics")

    def set(self, family: str, label_values: Sequence[str], value: float) -> None:
        """Overwrite one gauge value.

        Args:
            family: CPU_FAMILY or MEMORY_FAMILY
            label_values: (type, namespace, pod_name, container_name)
            value: New value

        Raises:
            KeyError: If the family is not registered
        """
        self._families[family].labels(*label_values).set(value)

    # =============================================================================
    # Poll Lifecycle Hooks
    # =============================================================================

    def on_poll_start(self) -> Optional[Dict[str, Any]]:
        """Record poll start time."""
        return {'start_time': time.monotonic()}

    def on_poll_complete(
        self,
        state: Optional[Dict[str, Any]],
        success: bool,
        pod_count: int = 0,
        container_count: int = 0,
        error: Optional[Exception] = None,
    ) -> None:
        """Record poll duration and result."""
        result = 'success' if success else 'failure'
        self.poll_total.labels(result=result).inc()
        if state:
            duration = time.monotonic() - state['start_time']
            self.poll_duration.labels(result=result).observe(duration)

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
        """Record the four resource values of a container."""
        self.set(CPU_FAMILY, (REQUEST, namespace, pod_name, container_name), cpu_request)
        self.set(MEMORY_FAMILY, (REQUEST, namespace, pod_name, container_name), memory_request)
        self.set(CPU_FAMILY, (LIMIT, namespace, pod_name, container_name), cpu_limit)
        self.set(MEMORY_FAMILY, (LIMIT, namespace, pod_name, container_name), memory_limit)

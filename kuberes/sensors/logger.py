"""Log-based sensor backend."""

from typing import Dict, Optional, Any
import time
import logging

from kuberes.sensors.base import ExporterSensor

logger = logging.getLogger(__name__)


class LoggingSensor(ExporterSensor):
    """Logs a one-line summary per poll cycle and each container at debug level."""

    def on_poll_start(self) -> Optional[Dict[str, Any]]:
        logger.debug("Listing pods in all namespaces")
        return {'start_time': time.monotonic()}

    def on_poll_complete(
        self,
        state: Optional[Dict[str, Any]],
        success: bool,
        pod_count: int = 0,
        container_count: int = 0,
        error: Optional[Exception] = None,
    ) -> None:
        duration = time.monotonic() - state['start_time'] if state else 0.0
        if success:
            logger.info(
                f"Recorded resources of {container_count} containers "
                f"in {pod_count} pods ({duration:.2f}s)"
            )
        else:
            logger.warning(f"Poll abandoned after {duration:.2f}s, keeping previous values")

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
        logger.debug(
            f"{namespace}/{pod_name}/{container_name}: "
            f"cpu {cpu_request}m/{cpu_limit}m, memory {memory_request}/{memory_limit} bytes"
        )

"""Base sensor classes for exporter monitoring.

This module defines the base ExporterSensor class that provides lifecycle hooks
for the poll cycle. All hooks are no-ops by default, allowing subclasses to
override only the events they care about.

The hook pattern:
- on_poll_start() returns an optional state dict for tracking the cycle
- on_poll_complete() receives the state dict from on_poll_start()
- on_container_resources() is called once per container observed in a cycle
"""

from typing import Dict, Optional, Any
import logging

logger = logging.getLogger(__name__)


class ExporterSensor:
    """Base sensor class for exporter monitoring.

    All methods are no-ops by default. Subclasses override only the hooks
    they need to monitor.

    Example:
        class TimingSensor(ExporterSensor):
            def on_poll_start(self) -> Dict:
                return {'start_time': time.time()}

            def on_poll_complete(self, state: Dict, success: bool, **kwargs) -> None:
                duration = time.time() - state['start_time']
                logger.info(f"Poll finished in {duration}s")
    """

    def on_poll_start(self) -> Optional[Dict[str, Any]]:
        """Called when a poll cycle begins.

        Returns:
            Optional state dict passed to on_poll_complete
        """
        pass

    def on_poll_complete(
        self,
        state: Optional[Dict[str, Any]],
        success: bool,
        pod_count: int = 0,
        container_count: int = 0,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when a poll cycle completes or is abandoned.

        Args:
            state: State dict returned from on_poll_start
            success: Whether the pod list call succeeded
            pod_count: Number of pods in the snapshot
            container_count: Number of containers recorded
            error: Exception if the cycle was abandoned
        """
        pass

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
        """Called for every container observed in a poll cycle.

        Args:
            namespace: Kubernetes namespace of the pod
            pod_name: Pod name
            container_name: Container name
            cpu_request: CPU request in millicores
            memory_request: Memory request in bytes
            cpu_limit: CPU limit in millicores
            memory_limit: Memory limit in bytes
        """
        pass

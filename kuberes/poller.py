import asyncio
import logging
import aiohttp
from kubernetes_asyncio.client import ApiException
from kubernetes_asyncio.config import ConfigException
from marshmallow import ValidationError

from kuberes.kube import KubeClient
from kuberes.sensors.base import ExporterSensor
from kuberes.types.models import PodList
from kuberes.utils.errors import describe_api_exception

logger = logging.getLogger(__name__)

# Failures of the list call that abandon a cycle instead of stopping the exporter
POLL_ERRORS = (
    ApiException,
    ConfigException,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ValidationError,
    ValueError,
)


class Poller:
    """Periodically record container requests and limits of every pod."""

    def __init__(
        self, client: KubeClient, sensor: ExporterSensor, interval: float
    ) -> None:
        self.client = client
        self.sensor = sensor
        self.interval = interval

    async def run_once(self) -> bool:
        """Run one poll cycle.

        Lists pods across all namespaces and reports the four resource values
        of every container to the sensor. If the list call fails the cycle is
        abandoned and values recorded by earlier cycles are left untouched.

        Returns:
            True if the pod list was fetched and recorded
        """
        state = self.sensor.on_poll_start()
        try:
            pods: PodList = await self.client.list_pods()
        except ApiException as e:
            logger.error(f"Failed to list pods: {describe_api_exception(e)}")
            self.sensor.on_poll_complete(state, False, error=e)
            return False
        except POLL_ERRORS as e:
            logger.error(f"Failed to list pods: {e!r}")
            self.sensor.on_poll_complete(state, False, error=e)
            return False
        except Exception as e:
            logger.exception(f"Failed to list pods: {e!r}")
            self.sensor.on_poll_complete(state, False, error=e)
            return False

        container_count = 0
        for pod in pods:
            for container in pod.containers:
                resources = container.resources
                try:
                    values = (
                        resources.request_cpu_milli,
                        resources.request_memory_bytes,
                        resources.limit_cpu_milli,
                        resources.limit_memory_bytes,
                    )
                except ValueError as e:
                    logger.warning(
                        f"Skipping container {pod.namespace}/{pod.name}/{container.name}: {e}"
                    )
                    continue
                self.sensor.on_container_resources(
                    pod.namespace, pod.name, container.name, *values
                )
                container_count += 1

        self.sensor.on_poll_complete(
            state, True, pod_count=len(pods), container_count=container_count
        )
        return True

    async def run_forever(self, stopping: asyncio.Event) -> None:
        """Poll now and then on every tick until `stopping` is set.

        Ticks are aligned to the first cycle. A cycle is never interrupted and
        cycles never overlap: ticks that pass while a cycle runs collapse into
        a single one that starts as soon as the cycle ends.
        """
        loop = asyncio.get_running_loop()
        tick = loop.time()
        await self.run_once()
        while True:
            tick = self._next_tick(tick, loop.time())
            if await self._wait_stopping(stopping, tick - loop.time()):
                break
            await self.run_once()
        logger.info("Poller stopped")

    def _next_tick(self, last_tick: float, now: float) -> float:
        tick = last_tick + self.interval
        if tick <= now:
            tick += ((now - tick) // self.interval) * self.interval
        return tick

    @staticmethod
    async def _wait_stopping(stopping: asyncio.Event, delay: float) -> bool:
        if stopping.is_set():
            return True
        if delay <= 0:
            return False
        try:
            await asyncio.wait_for(stopping.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

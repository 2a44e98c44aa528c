import asyncio
import logging
import signal
from enum import Enum
from typing import Optional

from prometheus_client import CollectorRegistry

from kuberes.kube import KubeClient, new_kube_client
from kuberes.poller import Poller
from kuberes.sensors import LoggingSensor, MetricsServer, PrometheusMonitor, SensorDelegate
from kuberes.types.settings import Settings
from kuberes.utils.errors import KubeConfigError

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ExporterState(Enum):
    STARTING = "Starting"
    RUNNING = "Running"
    DRAINING = "Draining"
    STOPPED = "Stopped"


class Exporter:
    """Wire the poller and the metrics server together and run them until interrupted.

    The registry is owned here and handed to both sides: the poller writes to
    it through the PrometheusMonitor sensor, the metrics server only reads it.
    """

    client: Optional[KubeClient] = None
    poller: Optional[Poller] = None

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.state = ExporterState.STARTING
        self.registry = CollectorRegistry()
        self.monitor = PrometheusMonitor(self.registry)
        self.sensor = SensorDelegate()
        self.sensor.add(self.monitor)
        self.sensor.add(LoggingSensor())
        self.server = MetricsServer(
            self.registry,
            port=settings.metrics_port,
            path=settings.metrics_path,
            shutdown_timeout=settings.shutdown_timeout_seconds,
        )
        self._stopping: Optional[asyncio.Event] = None

    def _set_state(self, state: ExporterState) -> None:
        logger.info(f"Exporter state: {self.state.value} -> {state.value}")
        self.state = state

    def stop(self) -> None:
        """Begin draining. Safe to call more than once."""
        if self._stopping is None or self._stopping.is_set():
            return
        logger.info("Interrupt signal received")
        self._stopping.set()

    async def run(self) -> int:
        """Run until stopped.

        Returns:
            Process exit code: 0 after an orderly stop, 1 when the exporter
            could not start
        """
        self._stopping = asyncio.Event()
        try:
            self.client = await new_kube_client(
                self.settings.kube_context,
                request_timeout=self.settings.poll_timeout_seconds,
            )
        except KubeConfigError as e:
            logger.error(str(e))
            self._set_state(ExporterState.STOPPED)
            return 1

        exit_code = 0
        loop = asyncio.get_running_loop()
        for sig in STOP_SIGNALS:
            loop.add_signal_handler(sig, self.stop)
        try:
            self.poller = Poller(
                self.client, self.sensor, self.settings.scrape_interval_seconds
            )
            poll_task = asyncio.create_task(self.poller.run_forever(self._stopping))
            try:
                await self.server.start()
            except OSError:
                exit_code = 1
                self._stopping.set()
            else:
                self._set_state(ExporterState.RUNNING)
                await self._stopping.wait()

            self._set_state(ExporterState.DRAINING)
            try:
                await self.server.stop()
            except Exception as e:
                logger.error(f"Metrics server shutdown failed: {e}")
            await poll_task
        finally:
            for sig in STOP_SIGNALS:
                loop.remove_signal_handler(sig)
            await self.client.close()
            self._set_state(ExporterState.STOPPED)
        return exit_code

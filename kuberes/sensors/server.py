"""HTTP server for exposing Prometheus metrics.

Serves the exporter's registry at /metrics (port 8080 by default) for
Prometheus to scrape. The server runs on the same event loop as the poller;
stopping it closes the listening socket first and then waits for in-flight
requests to finish.
"""

import logging
from typing import Optional

from aiohttp import web
from prometheus_client import CollectorRegistry, CONTENT_TYPE_LATEST, generate_latest

logger = logging.getLogger(__name__)


class MetricsServer:
    """Expose a registry over HTTP."""

    def __init__(
        self,
        registry: CollectorRegistry,
        port: int = 8080,
        path: str = "/metrics",
        host: str = "0.0.0.0",
        shutdown_timeout: Optional[float] = None,
    ) -> None:
        self.registry = registry
        self.host = host
        self.path = path
        self.shutdown_timeout = shutdown_timeout
        self._port = port
        self._runner: Optional[web.AppRunner] = None

        self.app = web.Application()
        self.app.router.add_get(path, self.handle_metrics)

    @property
    def port(self) -> int:
        """Bound port, which differs from the configured one when that was 0."""
        if self._runner is not None and self._runner.addresses:
            return self._runner.addresses[0][1]
        return self._port

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def handle_metrics(self, request: web.Request) -> web.Response:
        """Render the current registry snapshot."""
        return web.Response(
            body=generate_latest(self.registry),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    async def start(self) -> None:
        """Bind and start serving.

        Raises:
            OSError: If the port cannot be bound
        """
        runner = web.AppRunner(
            self.app, access_log=None, shutdown_timeout=self.shutdown_timeout
        )
        await runner.setup()
        try:
            await web.TCPSite(runner, self.host, self._port).start()
        except OSError as e:
            logger.error(f"Failed to start metrics server on port {self._port}: {e}")
            await runner.cleanup()
            raise
        self._runner = runner
        logger.info(f"Metrics available at http://{self.host}:{self.port}{self.path}")

    async def stop(self) -> None:
        """Stop accepting connections and wait for in-flight requests.

        Without a shutdown timeout this waits for as long as the requests take.
        """
        if self._runner is None:
            return
        runner, self._runner = self._runner, None
        await runner.cleanup()
        logger.info("Metrics server stopped")

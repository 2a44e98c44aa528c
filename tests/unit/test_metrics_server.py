"""Unit tests for the metrics HTTP server."""

import asyncio
import pytest
import aiohttp
from prometheus_client import CollectorRegistry
from kuberes.sensors import MetricsServer, PrometheusMonitor


async def fetch(port, path="/metrics"):
    async with aiohttp.ClientSession() as session:
        async with session.get(f"http://127.0.0.1:{port}{path}") as response:
            return response.status, response.headers.get("Content-Type"), await response.text()


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def monitor(registry):
    return PrometheusMonitor(registry)


class TestMetricsServer:
    """Tests for MetricsServer."""

    @pytest.mark.asyncio
    async def test_serves_empty_gauge_set_before_first_poll(self, registry, monitor):
        server = MetricsServer(registry, port=0, host="127.0.0.1")
        await server.start()
        try:
            status, content_type, body = await fetch(server.port)
        finally:
            await server.stop()
        assert status == 200
        assert content_type.startswith("text/plain")
        assert "container_resources_cpu_milli{" not in body
        assert "container_resources_memory_bytes{" not in body

    @pytest.mark.asyncio
    async def test_serves_recorded_values(self, registry, monitor):
        monitor.on_container_resources(
            "prod", "web-1", "app", 500, 268435456, 1000, 536870912
        )
        server = MetricsServer(registry, port=0, host="127.0.0.1")
        await server.start()
        try:
            status, _, body = await fetch(server.port)
        finally:
            await server.stop()
        assert status == 200
        assert "container_resources_cpu_milli{" in body
        assert "container_resources_memory_bytes{" in body
        assert 'pod_name="web-1"' in body

    @pytest.mark.asyncio
    async def test_other_paths_not_found(self, registry, monitor):
        server = MetricsServer(registry, port=0, host="127.0.0.1")
        await server.start()
        try:
            status, _, _ = await fetch(server.port, "/")
        finally:
            await server.stop()
        assert status == 404

    @pytest.mark.asyncio
    async def test_stop_refuses_new_connections(self, registry):
        server = MetricsServer(registry, port=0, host="127.0.0.1")
        await server.start()
        port = server.port
        await server.stop()
        assert not server.running
        with pytest.raises(aiohttp.ClientConnectionError):
            await fetch(port)

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, registry):
        server = MetricsServer(registry, port=0, host="127.0.0.1")
        await server.stop()
        await server.start()
        await server.stop()
        await server.stop()

    @pytest.mark.asyncio
    async def test_in_flight_request_completes_during_stop(self, registry, monitor):
        entered, release = asyncio.Event(), asyncio.Event()

        class SlowMetricsServer(MetricsServer):
            async def handle_metrics(self, request):
                entered.set()
                await release.wait()
                return await super().handle_metrics(request)

        monitor.on_container_resources("prod", "web-1", "app", 500, 0, 1000, 0)
        server = SlowMetricsServer(registry, port=0, host="127.0.0.1")
        await server.start()
        request = asyncio.create_task(fetch(server.port))
        await entered.wait()

        stopping = asyncio.create_task(server.stop())
        await asyncio.sleep(0.05)
        assert not stopping.done()

        release.set()
        status, _, body = await asyncio.wait_for(request, timeout=5)
        await asyncio.wait_for(stopping, timeout=5)
        assert status == 200
        assert "container_resources_cpu_milli{" in body

    @pytest.mark.asyncio
    async def test_port_in_use_raises(self, registry):
        first = MetricsServer(registry, port=0, host="127.0.0.1")
        await first.start()
        try:
            second = MetricsServer(registry, port=first.port, host="127.0.0.1")
            with pytest.raises(OSError):
                await second.start()
            assert not second.running
        finally:
            await first.stop()

    @pytest.mark.asyncio
    async def test_stop_without_timeout_waits_for_slow_request(self, registry, monitor):
        entered, release = asyncio.Event(), asyncio.Event()

        class SlowMetricsServer(MetricsServer):
            async def handle_metrics(self, request):
                entered.set()
                await release.wait()
                return await super().handle_metrics(request)

        server = SlowMetricsServer(registry, port=0, host="127.0.0.1")
        assert server.shutdown_timeout is None
        await server.start()
        request = asyncio.create_task(fetch(server.port))
        await entered.wait()

        stopping = asyncio.create_task(server.stop())
        # longer than any grace period aiohttp applies on its own
        await asyncio.sleep(0.5)
        assert not stopping.done()

        release.set()
        status, _, _ = await asyncio.wait_for(request, timeout=5)
        await asyncio.wait_for(stopping, timeout=5)
        assert status == 200

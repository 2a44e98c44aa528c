import os
from typing import Any, Optional


def _getenv(name: str, *default: Any) -> Any:
    try:
        return os.environ[name]
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: Kubernetes context to use when running locally (empty for in-cluster configuration)
KUBE_CONTEXT = str(_getenv("KUBE_CONTEXT", ""))

#: Seconds between two pod list calls
SCRAPE_INTERVAL_SECONDS = int(_getenv("SCRAPE_INTERVAL_SECONDS", 3600))

#: Port the metrics endpoint listens on
METRICS_PORT = int(_getenv("METRICS_PORT", 8080))

#: Path of the metrics endpoint
METRICS_PATH = str(_getenv("METRICS_PATH", "/metrics"))

#: Timeout in seconds for a single pod list call
POLL_TIMEOUT_SECONDS = float(_getenv("POLL_TIMEOUT_SECONDS", 60.0))

#: Seconds to wait for in-flight metrics requests when shutting down (unset waits until they finish)
_shutdown_timeout = _getenv("SHUTDOWN_TIMEOUT_SECONDS", "")
SHUTDOWN_TIMEOUT_SECONDS = float(_shutdown_timeout) if _shutdown_timeout else None


class Settings:
    """Exporter settings"""

    kube_context: str = KUBE_CONTEXT
    scrape_interval_seconds: int = SCRAPE_INTERVAL_SECONDS
    metrics_port: int = METRICS_PORT
    metrics_path: str = METRICS_PATH
    poll_timeout_seconds: float = POLL_TIMEOUT_SECONDS
    shutdown_timeout_seconds: Optional[float] = SHUTDOWN_TIMEOUT_SECONDS

    def __init__(
        self,
        *args,
        kube_context: str = None,
        scrape_interval_seconds: int = None,
        metrics_port: int = None,
        metrics_path: str = None,
        poll_timeout_seconds: float = None,
        shutdown_timeout_seconds: Optional[float] = None,
        **kwargs,
    ):
        if kube_context is not None:
            self.kube_context = kube_context

        if scrape_interval_seconds is not None:
            self.scrape_interval_seconds = scrape_interval_seconds

        if metrics_port is not None:
            self.metrics_port = metrics_port

        if metrics_path is not None:
            self.metrics_path = metrics_path

        if poll_timeout_seconds is not None:
            self.poll_timeout_seconds = poll_timeout_seconds

        if shutdown_timeout_seconds is not None:
            self.shutdown_timeout_seconds = shutdown_timeout_seconds

        if self.scrape_interval_seconds <= 0:
            raise ValueError(
                f"Scrape interval must be positive, got {self.scrape_interval_seconds}"
            )

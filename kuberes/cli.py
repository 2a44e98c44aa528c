import asyncio
import logging
import sys

import click

from kuberes import __version__
from kuberes.app import Exporter
from kuberes.types.settings import KUBE_CONTEXT, SCRAPE_INTERVAL_SECONDS, Settings

LOG_FORMAT = "[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s"


def configure_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if debug or verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # client internals log every request at debug level
    if not verbose:
        logging.getLogger("kubernetes_asyncio").setLevel(max(level, logging.INFO))
        logging.getLogger("asyncio").setLevel(max(level, logging.WARNING))


@click.command()
@click.version_option(version=__version__, prog_name="kuberes-exporter")
@click.option(
    "--kube.context",
    "kube_context",
    type=str,
    default=KUBE_CONTEXT,
    help="kubernetes context to use when running locally (leave empty for in-cluster configuration)",
)
@click.option(
    "--scrape.interval",
    "scrape_interval",
    type=click.IntRange(min=1),
    default=SCRAPE_INTERVAL_SECONDS,
    show_default=True,
    help="the scrape interval in seconds",
)
@click.option("-v", "--verbose", is_flag=True, help="Log at debug level, client libraries included.")
@click.option("-d", "--debug", is_flag=True, help="Log at debug level.")
@click.option("-q", "--quiet", is_flag=True, help="Log warnings and errors only.")
def main(
    kube_context: str,
    scrape_interval: int,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """Export container CPU and memory requests and limits as Prometheus gauges."""
    configure_logging(verbose=verbose, debug=debug, quiet=quiet)
    settings = Settings(
        kube_context=kube_context,
        scrape_interval_seconds=scrape_interval,
    )
    exporter = Exporter(settings)
    sys.exit(asyncio.run(exporter.run()))

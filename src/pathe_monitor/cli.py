"""CLI entry point for pathe monitor."""

import asyncio
import logging
import signal
from datetime import datetime
from pathlib import Path

import typer

from pathe_monitor.adapters.notifications import DiscordNotifier
from pathe_monitor.adapters.sources import PatheScheduleSource
from pathe_monitor.config import Settings, get_settings, setup_logging
from pathe_monitor.core import CheckOutcome, Cinema, ConfigError, WatchListStore, WatchRequest
from pathe_monitor.scheduler import CancellationToken, MonitorLoop
from pathe_monitor.use_cases import MonitoringService, WatchRequestProcessor

logger = logging.getLogger(__name__)

app = typer.Typer(help="Get notified when Pathé ticket sales open.", no_args_is_help=True)

CONFIG_OPTION = typer.Option(Path("config.yaml"), "--config", "-c", help="YAML settings file")

OUTCOME_LABELS = {
    CheckOutcome.MATCHED: "✓ tickets available",
    CheckOutcome.NOT_MATCHED: "· not on sale yet",
    CheckOutcome.FETCH_FAILED: "✗ fetch failed",
    CheckOutcome.PARSE_FAILED: "✗ page layout changed",
    CheckOutcome.ERROR: "✗ unexpected error",
}


def _load_settings(config: Path) -> Settings:
    try:
        settings = get_settings(config)
        setup_logging(settings.log_level)
    except ConfigError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(code=1)
    return settings


def _load_store(settings: Settings) -> WatchListStore:
    store = WatchListStore(settings.watch_list_path)
    try:
        # Creates the document ahead of time so it can be edited by hand
        store.load()
    except ConfigError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(code=1)
    return store


def build_service(settings: Settings, store: WatchListStore) -> MonitoringService:
    """Wire adapters into the monitoring service."""
    processor = WatchRequestProcessor(
        source=PatheScheduleSource(timeout=settings.request_timeout),
        notifier=DiscordNotifier(settings.webhook_url, timeout=settings.request_timeout),
    )
    return MonitoringService(store, processor)


def _parse_request(cinema: str, date: str, movie: str) -> WatchRequest:
    try:
        return WatchRequest(cinema=Cinema.from_label(cinema), date=date, movie=movie)
    except ValueError as e:
        raise typer.BadParameter(str(e))


async def _run_forever(settings: Settings, service: MonitoringService) -> None:
    token = CancellationToken()

    def request_shutdown() -> None:
        logger.debug("shutdown signal received")
        token.cancel()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, request_shutdown)

    monitor_loop = MonitorLoop(
        service.check_watch_list,
        interval_minutes=settings.interval_minutes,
        timezone=settings.timezone,
        poll_interval=settings.monitor.poll_interval,
        run_on_startup=settings.monitor.run_on_startup,
    )
    await monitor_loop.run(token)


@app.command()
def run(config: Path = CONFIG_OPTION) -> None:
    """Monitor the watch list until interrupted."""
    settings = _load_settings(config)
    logger.info("Pathé monitor is starting up!")
    logger.info(f"  • Watch list: {settings.watch_list_path}")
    logger.info(f"  • Interval: {settings.interval_minutes} min, timeout: {settings.request_timeout:g} s")

    store = _load_store(settings)
    logger.info(f"Time in {settings.timezone_name} is: {datetime.now(settings.timezone).isoformat()}")

    service = build_service(settings, store)
    asyncio.run(_run_forever(settings, service))

    logger.info("shutting down")


@app.command()
def check(config: Path = CONFIG_OPTION) -> None:
    """Check every watch request once and print the outcomes."""
    settings = _load_settings(config)
    store = _load_store(settings)
    service = build_service(settings, store)

    results = asyncio.run(service.check_watch_list())

    if not results:
        typer.echo(f"No watch requests in {store.path}")
    for request, outcome in results:
        typer.echo(f"{OUTCOME_LABELS[outcome]:<24} {request}")


@app.command("list")
def list_requests(config: Path = CONFIG_OPTION) -> None:
    """Show the watch list."""
    settings = _load_settings(config)
    watch_list = _load_store(settings).load()

    if not watch_list.requests:
        typer.echo(f"No watch requests in {settings.watch_list_path}")
    for i, request in enumerate(watch_list.requests, 1):
        typer.echo(f"{i:>3}. {request}")


@app.command()
def add(cinema: str, date: str, movie: str, config: Path = CONFIG_OPTION) -> None:
    """Add a watch request, e.g. `add Buitenhof 2024-03-01 Dune`."""
    request = _parse_request(cinema, date, movie)
    settings = _load_settings(config)
    store = _load_store(settings)
    watch_list = store.load()

    if request in watch_list.requests:
        typer.echo(f"Already watching {request}")
        return

    watch_list.requests.append(request)
    store.save(watch_list)
    typer.echo(f"✓ Watching {request}")


@app.command()
def remove(cinema: str, date: str, movie: str, config: Path = CONFIG_OPTION) -> None:
    """Remove a watch request."""
    request = _parse_request(cinema, date, movie)
    settings = _load_settings(config)
    store = _load_store(settings)
    watch_list = store.load()

    if request not in watch_list.requests:
        typer.echo(f"Not watching {request}", err=True)
        raise typer.Exit(code=1)

    watch_list.requests = [r for r in watch_list.requests if r != request]
    store.save(watch_list)
    typer.echo(f"✓ Stopped watching {request}")


if __name__ == "__main__":
    app()

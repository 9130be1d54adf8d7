from __future__ import annotations

import asyncio
import logging
import signal
import typer

from shipper.config import DEFAULT_CONFIG_PATH, get_settings
from shipper.exceptions import ConfigError
from shipper.scheduler import Scheduler
from shipper.utils import configure_logging

logger = logging.getLogger("shipper")

app = typer.Typer(name="airbox-shipper", help="Ship batches of JSON files to the airbox API.", add_completion=False)

def _install_signal_handlers(scheduler: Scheduler) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
        except (NotImplementedError, RuntimeError):
            # not available on this platform or outside the main thread
            pass

async def _serve(scheduler: Scheduler) -> None:
    _install_signal_handlers(scheduler)
    await scheduler.run()

@app.command()
def main(
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to the configuration file."),
    once: bool = typer.Option(False, "--once", help="Run a single cycle immediately and exit."),
):
    """
    Watch for JSON files and ship them on a fixed interval.
    """
    configure_logging()
    try:
        settings = get_settings(config)
    except ConfigError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1)

    configure_logging(settings.log_level)

    if once:
        outcome = asyncio.run(Scheduler(settings).tick())
        logger.info(
            "Cycle finished: status=%s discovered=%d loaded=%d skipped=%d deleted=%d",
            outcome.status,
            outcome.discovered,
            outcome.loaded,
            outcome.skipped,
            outcome.deleted,
        )
        raise typer.Exit(code=0 if outcome.ok else 1)

    asyncio.run(_serve(Scheduler(settings)))

if __name__ == "__main__":
    app()

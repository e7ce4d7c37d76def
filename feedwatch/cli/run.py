"""Run command implementation."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from ..config import Config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..exceptions import FeedwatchError
from ..logging import setup_logging
from ..service import IngestionService

console = Console()


async def _run(config: Config, once: bool) -> None:
    service = await IngestionService.from_config(config)
    async with service:
        if once:
            spawned = await service.scheduler.run_cycle()
            await service.supervisor.join()
            console.print(f"Refreshed {spawned} feeds")
            return

        service.start()
        await asyncio.Event().wait()


def run_command(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Configuration file"),
    once: bool = typer.Option(False, "--once", help="Run a single refresh cycle and exit"),
    log_level: str = typer.Option(None, "--log-level", "-l", help="Override the configured log level"),
) -> None:
    """Refresh every registered feed on a fixed schedule."""
    config = Config(config_path)
    try:
        setup_logging(log_level or config.config.logging.level)
        asyncio.run(_run(config, once))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    except (FeedwatchError, ValueError) as e:
        console.print(f"[red]Failed: {e}[/red]")
        raise typer.Exit(1)

"""Feed management commands."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..exceptions import FeedwatchError
from ..logging import setup_logging
from ..service import IngestionService

console = Console()
feeds_app = typer.Typer(help="Manage feeds and read entries")

ConfigOption = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Configuration file")


def _run(config_path: Path, action):
    """Run an async action against a service, turning errors into exit code 1."""
    config = Config(config_path)

    async def runner():
        service = await IngestionService.from_config(config)
        async with service:
            return await action(service)

    try:
        setup_logging(config.config.logging.level)
        return asyncio.run(runner())
    except (FeedwatchError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


@feeds_app.command("list")
def feeds_list(config_path: Path = ConfigOption) -> None:
    """List all registered feeds."""
    feeds = _run(config_path, lambda service: service.list_feeds())

    if not feeds:
        console.print("[yellow]No feeds registered.[/yellow]")
        return

    table = Table(title="Registered Feeds")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("URL", style="blue")

    for feed in feeds:
        table.add_row(str(feed.id), feed.name, feed.url)

    console.print(table)


@feeds_app.command("add")
def feeds_add(
    url: str = typer.Option(..., "--url", "-u", help="Feed URL"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    config_path: Path = ConfigOption,
) -> None:
    """Register a feed and ingest its current items."""

    async def action(service: IngestionService):
        feed = await service.add_feed(url, name)
        await service.supervisor.join()
        return feed

    feed = _run(config_path, action)
    console.print(f"[green]✅ Added feed {feed.id}: {feed.name}[/green]")


@feeds_app.command("entries")
def feeds_entries(
    feed_id: int = typer.Argument(..., help="Feed ID"),
    limit: int = typer.Option(50, "--limit", help="Maximum entries to show", min=1),
    config_path: Path = ConfigOption,
) -> None:
    """Show the latest entries of a feed."""
    entries = _run(config_path, lambda service: service.list_entries(feed_id, limit=limit))

    if not entries:
        console.print("[yellow]No entries stored for this feed.[/yellow]")
        return

    table = Table(title=f"Entries for feed {feed_id}")
    table.add_column("Published", style="green")
    table.add_column("Title", style="cyan")
    table.add_column("Link", style="blue")

    for entry in entries:
        published = entry.pub_date.strftime("%Y-%m-%d %H:%M") if entry.pub_date else "-"
        table.add_row(published, entry.title or "(untitled)", entry.link or "")

    console.print(table)


@feeds_app.command("refresh")
def feeds_refresh(
    feed_id: int = typer.Argument(..., help="Feed ID"),
    config_path: Path = ConfigOption,
) -> None:
    """Refresh one feed now."""
    result = _run(config_path, lambda service: service.refresh_feed(feed_id))

    if not result.success:
        console.print(f"[red]❌ {result.feed_url}: {result.error}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✅ {result.feed_url}[/green]: {result.item_count} items, "
        f"{result.new} new, {result.duplicates} duplicates, "
        f"{result.failed} failed, {result.skipped} skipped"
    )

"""Init command implementation."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, save_config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..db import close_connection_pool, create_connection_pool, init_database, validate_connection
from ..exceptions import FeedwatchError

console = Console()


async def _init_schema(config: Config) -> bool:
    pool = await create_connection_pool(config.get_db_config())
    try:
        if not await validate_connection(pool):
            return False
        await init_database(pool)
        return True
    finally:
        await close_connection_pool(pool)


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to create",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("feedwatch", "--db-name", help="Database name"),
    db_user: str = typer.Option("feedwatch", "--db-user", help="Database user"),
    interval: float = typer.Option(10.0, "--interval", help="Seconds between refresh cycles"),
) -> None:
    """Create the configuration file and database schema."""
    console.print(Panel.fit("Feedwatch - Initialization", style="bold blue"))

    model = ConfigModel(
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "FEEDWATCH_DB_PASSWORD",
        },
        scheduler={"interval_seconds": interval},
    )
    save_config(model, config_path)
    console.print(f"✅ Created config: {config_path}")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        ok = asyncio.run(_init_schema(Config(config_path)))
    except FeedwatchError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    if not ok:
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via [bold]FEEDWATCH_DB_PASSWORD[/bold] or a full [bold]DATABASE_URL[/bold]."
        )
        raise typer.Exit(1)

    console.print("✅ Database schema initialized")
    console.print(
        Panel(
            f"[green]✅ Feedwatch initialized![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Add a feed: [bold]feedwatch feeds add --url URL --name NAME[/bold]\n"
            f"2. Start ingesting: [bold]feedwatch run[/bold]",
            style="green",
        )
    )

"""Docspace CLI — run the server and manage the schema.

Usage:
    docspace serve                          # Run the API with uvicorn
    docspace serve --reload --port 9000
    docspace init-db                        # Create all tables
    docspace drop-db --yes                  # Drop all tables
"""

from __future__ import annotations

import asyncio

import click

from docspace.config import settings
from docspace.db.engine import Datastore


async def _with_datastore(url: str, action: str) -> None:
    datastore = Datastore(url)
    try:
        await getattr(datastore, action)()
    finally:
        await datastore.disconnect()


@click.group()
def cli() -> None:
    """Docspace backend management."""


@cli.command()
@click.option("--host", default=settings.host, show_default=True)
@click.option("--port", default=settings.port, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes (development).")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run("docspace.main:app", host=host, port=port, reload=reload)


@cli.command("init-db")
@click.option("--database-url", default=settings.database_url, show_default=False)
def init_db(database_url: str) -> None:
    """Create every table that does not exist yet."""
    asyncio.run(_with_datastore(database_url, "create_all"))
    click.echo("Schema created.")


@cli.command("drop-db")
@click.option("--database-url", default=settings.database_url, show_default=False)
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
def drop_db(database_url: str, yes: bool) -> None:
    """Drop every table. All data is lost."""
    if not yes:
        click.confirm("Drop all tables?", abort=True)
    asyncio.run(_with_datastore(database_url, "drop_all"))
    click.echo("Schema dropped.")


if __name__ == "__main__":
    cli()

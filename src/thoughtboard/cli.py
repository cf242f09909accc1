#!/usr/bin/env python3
"""
Main CLI entry point for Thoughtboard backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from thoughtboard import __version__
from thoughtboard.config import settings
from thoughtboard.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="thoughtboard")
def cli() -> None:
    """Thoughtboard CLI - run the API server and prepare the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option(
    "--reload/--no-reload",
    default=settings.api_reload,
    help="Enable auto-reload for development (default: THOUGHTBOARD_API_RELOAD)",
)
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Log level (default: THOUGHTBOARD_LOG_LEVEL)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Thoughtboard API server."""
    log_level = log_level.lower()
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting Thoughtboard API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The reloader re-imports the app in a fresh process that reads settings from env
    if log_level == "debug":
        os.environ["THOUGHTBOARD_DEBUG"] = "true"
        os.environ["THOUGHTBOARD_LOG_LEVEL"] = "debug"

    try:
        uvicorn.run(
            "thoughtboard.api.app:build_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        sys.exit(1)


@cli.command("init-db")
@click.option("--database-url", default=None, help="Database URL (default: from settings)")
def init_db(database_url: str | None) -> None:
    """Create the users and thoughts tables for the SQL store."""
    configure_logging(debug=settings.debug, level=settings.log_level)

    from thoughtboard.database import init_database
    from thoughtboard.store.sql import SQLDocumentStore

    async def _create() -> None:
        store = SQLDocumentStore(init_database(database_url, force_reinit=True))
        try:
            await store.create_tables()
        finally:
            await store.close()

    try:
        asyncio.run(_create())
        logger.info("Database tables created")
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

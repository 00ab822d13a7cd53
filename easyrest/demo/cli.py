"""Command line entry point for the people demo.

Usage:
    easyrest-demo --migrate            # create the people table
    easyrest-demo --server             # serve POST /new and GET /list
    easyrest-demo --migrate --server   # both, migration first
"""

from __future__ import annotations

import logging
import sys

import click
import uvicorn

from easyrest.config.settings import EasyRestSettings
from easyrest.demo.app import create_app
from easyrest.demo.store import PersistenceError, migrate_database
from easyrest.logging_config import configure_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option("--server", "do_server", is_flag=True, help="Run an HTTP server.")
@click.option(
    "--migrate",
    "do_migration",
    is_flag=True,
    help="Execute database migration (ie set up the db).",
)
@click.version_option(version="1.0.0", prog_name="easyrest-demo")
def main(do_server: bool, do_migration: bool) -> None:
    """People demo built on easyrest."""
    settings = EasyRestSettings()
    configure_logging(settings.log_level, json_logs=settings.json_logs)

    if do_migration:
        try:
            migrate_database(settings.database_path)
        except PersistenceError as exc:
            click.secho(f"Error: {exc}", fg="red", err=True)
            sys.exit(1)

    if do_server:
        logger.info("listening for HTTP requests on %s:%d", settings.host, settings.port)
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_config=None,
        )


if __name__ == "__main__":
    main()

"""
CLI for some management operations
"""

import asyncio
import logging.config
from pathlib import Path

import click

from atom_token.db import Database
from atom_token.exceptions import AppSettingsError
from atom_token.settings import (
    AppSettings,
    default_app_settings,
    get_app_settings,
    write_default_config,
)


async def create_tables(settings: AppSettings) -> bool:
    """Creates token storage (table with indexes)"""

    database = Database(settings.db)
    success = False
    try:
        await database.initialize()
        await database.create_tables()
        success = True

    except Exception as exc:
        click.echo(f"Unable to create tables: {exc!r}", err=True)
        success = False

    finally:
        await database.close()

    return success


@click.group("atom-token", help="Token service management.")
@click.help_option("--help", help="Show this help message")
def cli() -> None:
    pass


@cli.command("write-config", help="Write JSON config with default values.")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", default=False, is_flag=True, help="Overwrite existing file.")
def write_config(path: Path, force: bool = False) -> None:
    if path.exists() and not force:
        raise click.ClickException(f"Config {path} already exists (use --force to overwrite).")

    write_default_config(path, default_app_settings())
    click.echo(f"Config written to {path}")


@cli.command("init-db", help="Create token table and indexes.")
def init_db() -> None:
    try:
        settings = get_app_settings()
    except AppSettingsError as exc:
        raise click.ClickException(exc.message)

    logging.config.dictConfig(settings.log.log_config)
    click.echo("Creating tables...")
    if not asyncio.run(create_tables(settings)):
        raise click.ClickException("Tables weren't created.")

    click.echo("Tables created.")


if __name__ == "__main__":
    cli()

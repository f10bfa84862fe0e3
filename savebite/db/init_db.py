"""
Database initialisation utility.

Usage (CLI):
    savebite-init-db          # create tables if they don't exist
    savebite-init-db --reset  # drop all tables first, then recreate

The module can also be imported and `init_db()` called programmatically.
"""

from __future__ import annotations

import click
from sqlalchemy import Engine, MetaData

from savebite.core.config import get_settings
from savebite.db.base import Base
from savebite.db.session import create_db_engine
from savebite.models import food  # noqa: F401  – ensures Food models are registered


def init_db(engine: Engine, *, reset: bool = False) -> None:
    """
    Create all database tables (optionally dropping existing ones first).

    Args:
        engine: Engine to create the tables on.
        reset: If True, **drops** all tables before creating them again.
    """
    metadata: MetaData = Base.metadata

    if reset:
        metadata.drop_all(bind=engine)

    metadata.create_all(bind=engine)


@click.command(help="Initialise the database schema.")
@click.option(
    "--reset",
    is_flag=True,
    default=False,
    help="Drop all tables before recreating them.",
)
@click.option(
    "--database-url",
    default=None,
    help="Override DATABASE_URL from the environment.",
)
def cli(reset: bool, database_url: str | None) -> None:
    """CLI wrapper."""
    url = database_url or get_settings().DATABASE_URL
    engine = create_db_engine(url)
    if reset:
        click.echo("Dropping existing tables …")
    click.echo("Creating tables …")
    init_db(engine, reset=reset)
    click.echo("Done ✔")


if __name__ == "__main__":  # pragma: no cover
    cli()

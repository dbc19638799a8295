"""Database migration (Alembic) and connectivity CLI commands."""

import asyncio

import typer
from loguru import logger

db_app = typer.Typer()


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
) -> None:
    """Run database migrations up to the target revision."""
    from alembic import command
    from alembic.config import Config

    config = Config("alembic.ini")
    logger.info("Upgrading database to {}", revision)
    command.upgrade(config, revision)
    logger.info("Database upgrade complete")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
) -> None:
    """Roll back database migrations to the target revision."""
    from alembic import command
    from alembic.config import Config

    config = Config("alembic.ini")
    logger.info("Downgrading database to {}", revision)
    command.downgrade(config, revision)
    logger.info("Database downgrade complete")


@db_app.command()
def current() -> None:
    """Show the current database migration revision."""
    from alembic import command
    from alembic.config import Config

    config = Config("alembic.ini")
    command.current(config, verbose=True)


@db_app.command()
def check() -> None:
    """Verify that DATABASE_URL accepts connections."""
    if not asyncio.run(_check()):
        raise typer.Exit(code=1)


async def _check() -> bool:
    from civicos.core.config import get_settings
    from civicos.core.database import check_connection, dispose_engine, init_engine

    init_engine(get_settings().database_url)
    try:
        await check_connection()
    except Exception as e:
        logger.error("Database check failed: {}", e)
        return False
    finally:
        await dispose_engine()
    logger.info("Database connection OK")
    return True

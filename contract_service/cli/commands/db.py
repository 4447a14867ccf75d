"""Database management commands.

Example:bash
    # Check connectivity
    contract-service db check

    # Create all tables (local development)
    contract-service db init
"""

import sys

import click

from contract_service.cli.utils import coro, error, info, success
from contract_service.core.settings import get_db_settings
from contract_service.infra.database import close_database, init_database


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Create all tables for local development."""
    settings = get_db_settings()
    info(f"Database: {'configured DSN' if settings.is_configured else settings.url}")

    try:
        await init_database(create_tables=True)
        success("Tables created")
    except Exception as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command()
@coro
async def check() -> None:
    """Test the database connection."""
    try:
        await init_database(create_tables=False)
        success("Database connection successful")
    except Exception as e:
        error(f"Failed to connect to database: {e}")
        sys.exit(1)
    finally:
        await close_database()

"""Database migration utilities for the redpacket SQL backend."""

import logging
import os
import sys
from pathlib import Path

try:
    from alembic import command
    from alembic.config import Config
except ImportError as e:
    raise ImportError(
        "Alembic is required for SQL migrations. Install with: pip install redpacket[sql]"
    ) from e

from redpacket.constants import REDPACKET_DATABASE_URL


def get_alembic_config(database_url: str | None = None) -> Config:
    """Get Alembic configuration."""
    sql_dir = Path(__file__).parent
    config = Config(str(sql_dir / "alembic.ini"))
    config.attributes["configure_logger"] = False
    config.set_main_option("script_location", str(sql_dir / "migrations"))

    database_url = database_url or os.getenv(REDPACKET_DATABASE_URL)
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url)

    return config


def create_migration(message: str, database_url: str | None = None, autogenerate: bool = True):
    """Create a new migration."""
    config = get_alembic_config(database_url)
    command.revision(config, message=message, autogenerate=autogenerate)


def upgrade_database(database_url: str | None = None, revision: str = "head"):
    """Upgrade database to a specific revision."""
    config = get_alembic_config(database_url)
    command.upgrade(config, revision)


def downgrade_database(database_url: str | None = None, revision: str = "-1"):
    """Downgrade database to a specific revision."""
    config = get_alembic_config(database_url)
    command.downgrade(config, revision)


def show_current_revision(database_url: str | None = None):
    """Show current database revision."""
    config = get_alembic_config(database_url)
    command.current(config)


def main():
    """Command-line interface for database migrations."""
    if len(sys.argv) < 2:
        print("Usage: python -m redpacket.sql.migrate <command> [args...]")
        print("Commands:")
        print("  create <message>     - Create a new migration")
        print("  upgrade [revision]   - Upgrade database (default: head)")
        print("  downgrade [revision] - Downgrade database (default: -1)")
        print("  current              - Show current revision")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)
    command_name = sys.argv[1]
    database_url = os.getenv(REDPACKET_DATABASE_URL)

    try:
        if command_name == "create":
            if len(sys.argv) < 3:
                print("Error: Migration message required")
                sys.exit(1)
            message = sys.argv[2]
            create_migration(message, database_url)
            print(f"Created migration: {message}")

        elif command_name == "upgrade":
            revision = sys.argv[2] if len(sys.argv) > 2 else "head"
            upgrade_database(database_url, revision)
            print(f"Upgraded database to: {revision}")

        elif command_name == "downgrade":
            revision = sys.argv[2] if len(sys.argv) > 2 else "-1"
            downgrade_database(database_url, revision)
            print(f"Downgraded database to: {revision}")

        elif command_name == "current":
            show_current_revision(database_url)

        else:
            print(f"Unknown command: {command_name}")
            sys.exit(1)

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

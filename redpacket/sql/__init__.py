"""SQL-based packet store implementation using SQLAlchemy."""

try:
    from .sql_packet_store import SqlPacketStore
    from .models import Base, SqlPacket
    from .migrate import (
        create_migration,
        upgrade_database,
        downgrade_database,
        show_current_revision,
    )

    __all__ = [
        "SqlPacketStore",
        "Base",
        "SqlPacket",
        "create_migration",
        "upgrade_database",
        "downgrade_database",
        "show_current_revision",
    ]
except ImportError:
    # SQLAlchemy/Alembic not available
    __all__ = []

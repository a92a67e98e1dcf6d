"""Tests for SQL packet store implementation using unittest."""

import logging
import os
import tempfile
import unittest
from uuid import uuid4

try:
    from redpacket.sql.migrate import downgrade_database, upgrade_database
    from redpacket.sql.sql_packet_store import SqlPacketStore
    SQL_AVAILABLE = True
except ImportError:
    SQL_AVAILABLE = False

from redpacket.redpacket_error import RedPacketError
from tests.abstract_packet_store_base import AbstractPacketStoreTestBase, make_packet


@unittest.skipIf(not SQL_AVAILABLE, "SQL dependencies not available")
class TestSqlPacketStore(AbstractPacketStoreTestBase):
    """Test SQL packet store implementation."""

    def setUp(self):
        """Set up test fixtures"""
        super().setUp()
        # Create a temporary SQLite database
        self.temp_db = tempfile.NamedTemporaryFile(suffix='.db', delete=False)
        self.temp_db.close()
        self.database_url = f"sqlite+aiosqlite:///{self.temp_db.name}"

    def tearDown(self):
        """Clean up test fixtures"""
        super().tearDown()
        if hasattr(self, 'temp_db'):
            try:
                os.unlink(self.temp_db.name)
            except FileNotFoundError:
                pass

    async def create_store(self):
        """Create a test SQL packet store."""
        return SqlPacketStore(database_url=self.database_url)

    async def test_not_running_raises_error(self):
        store = SqlPacketStore(database_url=self.database_url)
        with self.assertRaises(RedPacketError):
            await store.get_packet(uuid4())

    async def test_packets_persist_across_stores(self):
        packet = await self.store.create_packet(make_packet())

        other = SqlPacketStore(database_url=self.database_url, create_tables=False)
        async with other:
            loaded = await other.get_packet(packet.id)
        self.assertEqual(loaded.unclaimed_shares, (200, 300, 500))
        self.assertEqual(loaded.version, 0)


@unittest.skipIf(not SQL_AVAILABLE, "SQL dependencies not available")
class TestSqlMigrations(unittest.IsolatedAsyncioTestCase):
    """Test the alembic migrations against a temporary SQLite database"""

    def setUp(self):
        self.temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
        self.temp_db.close()
        self.database_url = f"sqlite+aiosqlite:///{self.temp_db.name}"

    def tearDown(self):
        try:
            os.unlink(self.temp_db.name)
        except FileNotFoundError:
            pass

    async def test_store_on_migrated_schema(self):
        upgrade_database(self.database_url)

        store = SqlPacketStore(database_url=self.database_url, create_tables=False)
        async with store:
            packet = await store.create_packet(make_packet())
            loaded = await store.get_packet(packet.id)
        self.assertEqual(loaded.id, packet.id)

    def test_migrations_leave_host_logging_alone(self):
        root = logging.getLogger()
        level = root.level
        handlers = list(root.handlers)
        sqlalchemy_level = logging.getLogger("sqlalchemy.engine").level

        upgrade_database(self.database_url)
        downgrade_database(self.database_url, "base")
        upgrade_database(self.database_url)

        self.assertEqual(root.level, level)
        self.assertEqual(root.handlers, handlers)
        self.assertEqual(logging.getLogger("sqlalchemy.engine").level, sqlalchemy_level)

    def test_downgrade_removes_table(self):
        import sqlite3

        upgrade_database(self.database_url)
        downgrade_database(self.database_url, "base")

        with sqlite3.connect(self.temp_db.name) as conn:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            }
        self.assertNotIn("redpacket_packets", tables)
        self.assertIn("alembic_version", tables)


if __name__ == '__main__':
    unittest.main()

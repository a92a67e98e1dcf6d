"""SQL-based packet store implementation."""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional
from uuid import UUID

try:
    from sqlalchemy import update
    from sqlalchemy.ext.asyncio import (
        AsyncEngine,
        async_sessionmaker,
        create_async_engine,
    )
    from sqlalchemy.exc import IntegrityError, OperationalError, InterfaceError
except ImportError as e:
    raise ImportError(
        "SQLAlchemy is required for the SQL packet store. Install with: pip install redpacket[sql]"
    ) from e

from redpacket.packet import Packet
from redpacket.packet_store import PacketStore
from redpacket.redpacket_error import (
    PacketNotFound,
    RedPacketError,
    TransientStoreFailure,
)
from redpacket.serializers.serializer import Serializer, get_default_serializer
from redpacket.sql.models import Base, SqlPacket

_LOGGER = logging.getLogger(__name__)


@dataclass
class SqlPacketStore(PacketStore):
    """
    SQL-based packet store implementation using SQLAlchemy.

    Packets are stored serialized in the redpacket_packets table next to their version.
    A conditional update is a single statement:

        UPDATE redpacket_packets SET version = :expected + 1, packet_data = :data
        WHERE id = :id AND version = :expected

    which commits for exactly one of any number of concurrent writers.
    """

    database_url: str
    serializer: Serializer[Packet] = field(default_factory=get_default_serializer)
    create_tables: bool = True

    # Running state
    running: bool = field(default=False, init=False)

    # Database connection
    _engine: Optional[AsyncEngine] = field(default=None, init=False)
    _session_factory: Optional[async_sessionmaker] = field(default=None, init=False)

    def __post_init__(self):
        """Initialize database connection"""
        self._engine = create_async_engine(self.database_url)
        self._session_factory = async_sessionmaker(bind=self._engine)

    def _check_running(self):
        """Check if the store is running and raise error if not"""
        if not self.running:
            raise RedPacketError("PacketStore is not running. Call __aenter__ first.")

    def session_factory(self) -> async_sessionmaker:
        """Get the async session factory"""
        return self._session_factory

    async def __aenter__(self):
        """Start this store"""
        if self.create_tables:
            try:
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except (OperationalError, InterfaceError) as e:
                raise TransientStoreFailure(f"Database unavailable: {e}") from e

        self.running = True
        _LOGGER.info("Started SqlPacketStore")
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        """Close this store"""
        self.running = False
        if self._engine:
            await self._engine.dispose()
        _LOGGER.info("Stopped SqlPacketStore")

    async def create_packet(self, packet: Packet) -> Packet:
        self._check_running()

        packet = replace(packet, version=0)
        async with self.session_factory()() as session:
            try:
                sql_packet = SqlPacket(
                    id=packet.id,
                    creator_id=packet.creator_id,
                    version=0,
                    packet_data=self.serializer.serialize(packet),
                    created_at=packet.created_at,
                )
                session.add(sql_packet)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise RedPacketError(f"Packet {packet.id} already exists") from e
            except (OperationalError, InterfaceError) as e:
                raise TransientStoreFailure(f"Error creating packet {packet.id}: {e}") from e

        _LOGGER.debug(f"Created packet {packet.id}")
        return packet

    async def get_packet(self, packet_id: UUID) -> Packet:
        self._check_running()

        try:
            async with self.session_factory()() as session:
                sql_packet = await session.get(SqlPacket, packet_id)
                if not sql_packet:
                    raise PacketNotFound(f"Packet {packet_id} not found")
                version = sql_packet.version
                data = sql_packet.packet_data
        except (OperationalError, InterfaceError) as e:
            raise TransientStoreFailure(f"Error reading packet {packet_id}: {e}") from e

        return replace(self.serializer.deserialize(data), version=version)

    async def update_packet(self, packet: Packet, expected_version: int) -> bool:
        self._check_running()

        packet = replace(packet, version=expected_version + 1)
        data = self.serializer.serialize(packet)
        try:
            async with self.session_factory()() as session:
                result = await session.execute(
                    update(SqlPacket)
                    .where(
                        SqlPacket.id == packet.id,
                        SqlPacket.version == expected_version,
                    )
                    .values(version=packet.version, packet_data=data)
                )
                await session.commit()
                if result.rowcount == 1:
                    return True
                exists = await session.get(SqlPacket, packet.id)
        except (OperationalError, InterfaceError) as e:
            raise TransientStoreFailure(f"Error updating packet {packet.id}: {e}") from e

        if exists is None:
            raise PacketNotFound(f"Packet {packet.id} not found")
        return False

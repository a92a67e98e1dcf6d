from abc import ABC, abstractmethod
import logging
import os
from pathlib import Path
from typing import Optional
from uuid import UUID

from redpacket.constants import (
    DEFAULT_ROOT_DIR,
    REDPACKET_DATABASE_URL,
    REDPACKET_PACKET_STORE,
    REDPACKET_REDIS_URL,
    REDPACKET_ROOT_DIR,
)
from redpacket.packet import Packet
from redpacket.util import get_impl

_LOGGER = logging.getLogger(__name__)


class PacketStore(ABC):
    """Store for packet records. Each stored packet carries a version which is incremented
    on every write, and updates only commit if the version is unchanged since it was read.
    This conditional write is the only way a stored packet is ever changed."""

    @abstractmethod
    async def __aenter__(self):
        """Start this store"""

    @abstractmethod
    async def __aexit__(self, exc_type, exc_value, traceback):
        """Close this store"""

    @abstractmethod
    async def create_packet(self, packet: Packet) -> Packet:
        """Store a new packet at version 0

        Args:
            packet: The packet to store

        Returns:
            Packet: The packet as stored

        Raises:
            RedPacketError: If a packet with the same id already exists
            TransientStoreFailure: If the backing store is unavailable
        """

    @abstractmethod
    async def get_packet(self, packet_id: UUID) -> Packet:
        """Get the latest version of a packet

        Raises:
            PacketNotFound: If there is no packet with the id given
            TransientStoreFailure: If the backing store is unavailable
        """

    @abstractmethod
    async def update_packet(self, packet: Packet, expected_version: int) -> bool:
        """Replace the stored packet with the one given, as a single atomic step, but only
        if the stored version is still expected_version. The packet is stored with
        version expected_version + 1.

        Args:
            packet: The new state of the packet
            expected_version: The version the new state was derived from

        Returns:
            bool: True if the write committed, False if another write got there first

        Raises:
            PacketNotFound: If there is no packet with the id given
            TransientStoreFailure: If the backing store is unavailable
        """

    async def batch_get_packets(self, packet_ids: list[UUID]) -> list[Packet | None]:
        packets = []
        for packet_id in packet_ids:
            try:
                packet = await self.get_packet(packet_id)
                packets.append(packet)
            except Exception:
                _LOGGER.warning("error_getting_packet", exc_info=True, stack_info=True)
                packets.append(None)
        return packets


# Global cache for the default packet store instance
_default_packet_store: Optional[PacketStore] = None


def get_default_packet_store() -> PacketStore:
    """Get the default packet store instance with caching.

    The implementation can be overridden by setting the REDPACKET_PACKET_STORE
    environment variable to a fully qualified class name. Otherwise a Redis store is used
    if REDPACKET_REDIS_URL is set, a SQL store if REDPACKET_DATABASE_URL is set, and a
    filesystem store under REDPACKET_ROOT_DIR if neither is.

    Returns:
        PacketStore: The cached default packet store instance
    """
    global _default_packet_store

    if _default_packet_store is None:
        try:
            store_class = get_impl(REDPACKET_PACKET_STORE, PacketStore)
            _default_packet_store = store_class()
        except ValueError:
            redis_url = os.getenv(REDPACKET_REDIS_URL)
            database_url = os.getenv(REDPACKET_DATABASE_URL)
            if redis_url:
                from redpacket.redis.redis_packet_store import RedisPacketStore

                _default_packet_store = RedisPacketStore.from_url(redis_url)
            elif database_url:
                from redpacket.sql.sql_packet_store import SqlPacketStore

                _default_packet_store = SqlPacketStore(database_url=database_url)
            else:
                from redpacket.fs.filesystem_packet_store import FilesystemPacketStore

                root_dir = Path(os.getenv(REDPACKET_ROOT_DIR, DEFAULT_ROOT_DIR))
                _default_packet_store = FilesystemPacketStore(root_dir=root_dir)

        _LOGGER.info(f"Using Packet Store: {type(_default_packet_store).__name__}")

    return _default_packet_store


def reset_default_packet_store() -> None:
    global _default_packet_store
    _default_packet_store = None

"""
Tests for MemoryPacketStore, using the shared PacketStore test suite.
"""

import unittest
from uuid import uuid4

from redpacket.mem.memory_packet_store import MemoryPacketStore
from redpacket.redpacket_error import RedPacketError
from redpacket.serializers.pydantic_serializer import get_json_serializer
from redpacket.packet import Packet
from tests.abstract_packet_store_base import AbstractPacketStoreTestBase, make_packet


class TestMemoryPacketStore(AbstractPacketStoreTestBase):
    """Test MemoryPacketStore with the default (pickle) serializer"""

    async def create_store(self) -> MemoryPacketStore:
        return MemoryPacketStore()

    async def test_not_entered_raises_error(self):
        store = MemoryPacketStore()
        with self.assertRaises(RedPacketError):
            await store.create_packet(make_packet())
        with self.assertRaises(RedPacketError):
            await store.get_packet(uuid4())

    async def test_exit_stops_store(self):
        store = MemoryPacketStore()
        async with store:
            await store.create_packet(make_packet())
        with self.assertRaises(RedPacketError):
            await store.get_packet(uuid4())


class TestMemoryPacketStoreJson(AbstractPacketStoreTestBase):
    """Test MemoryPacketStore holding packets as JSON"""

    async def create_store(self) -> MemoryPacketStore:
        return MemoryPacketStore(serializer=get_json_serializer(Packet))


if __name__ == "__main__":
    unittest.main()

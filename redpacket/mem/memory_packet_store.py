from dataclasses import dataclass, field, replace
import logging
import threading
from typing import Dict, Tuple
from uuid import UUID

from redpacket.packet import Packet
from redpacket.packet_store import PacketStore
from redpacket.redpacket_error import PacketNotFound, RedPacketError
from redpacket.serializers.serializer import Serializer, get_default_serializer

_LOGGER = logging.getLogger(__name__)


@dataclass
class MemoryPacketStore(PacketStore):
    """In-memory implementation of PacketStore. Packets are held serialized, so callers
    never share mutable state with the store. A threading lock guards every read and
    conditional write, so the store is safe for tasks on one event loop and for threads
    each running their own loop."""

    serializer: Serializer[Packet] = field(default_factory=get_default_serializer)

    # Internal storage: packet id -> (version, serialized packet)
    _packets: Dict[UUID, Tuple[int, bytes]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _entered: bool = field(default=False, init=False)

    def _check_entered(self) -> None:
        """Check if the store has been entered, raise error if not"""
        if not self._entered:
            raise RedPacketError(
                "PacketStore must be entered using async context manager before use"
            )

    async def __aenter__(self):
        """Start this store"""
        self._entered = True
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        """Close this store"""
        self._entered = False

    async def create_packet(self, packet: Packet) -> Packet:
        """Store a new packet at version 0"""
        self._check_entered()

        packet = replace(packet, version=0)
        data = self.serializer.serialize(packet)
        with self._lock:
            if packet.id in self._packets:
                raise RedPacketError(f"Packet {packet.id} already exists")
            self._packets[packet.id] = (0, data)
        return packet

    async def get_packet(self, packet_id: UUID) -> Packet:
        """Get the latest version of a packet"""
        self._check_entered()

        with self._lock:
            entry = self._packets.get(packet_id)
        if entry is None:
            raise PacketNotFound(f"Packet {packet_id} not found")
        version, data = entry
        return replace(self.serializer.deserialize(data), version=version)

    async def update_packet(self, packet: Packet, expected_version: int) -> bool:
        """Conditionally replace a packet"""
        self._check_entered()

        packet = replace(packet, version=expected_version + 1)
        data = self.serializer.serialize(packet)
        with self._lock:
            entry = self._packets.get(packet.id)
            if entry is None:
                raise PacketNotFound(f"Packet {packet.id} not found")
            if entry[0] != expected_version:
                return False
            self._packets[packet.id] = (packet.version, data)
        return True

"""In-memory packet store implementation for redpacket."""

from redpacket.mem.memory_packet_store import MemoryPacketStore

__all__ = ["MemoryPacketStore"]

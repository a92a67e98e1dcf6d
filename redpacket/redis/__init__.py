"""Redis-based packet store implementation for redpacket."""

from redpacket.redis.redis_packet_store import RedisPacketStore

__all__ = ["RedisPacketStore"]

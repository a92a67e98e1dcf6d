from dataclasses import dataclass, field, replace
import logging
from uuid import UUID

from redpacket.packet import Packet
from redpacket.packet_store import PacketStore
from redpacket.redpacket_error import (
    PacketNotFound,
    RedPacketError,
    TransientStoreFailure,
)
from redpacket.serializers.serializer import Serializer, get_default_serializer

try:
    import redis.asyncio as redis
    from redis.asyncio import Redis
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import TimeoutError as RedisTimeoutError
    from redis.exceptions import WatchError
except ImportError:
    redis = None
    Redis = None

_LOGGER = logging.getLogger(__name__)


@dataclass
class RedisPacketStore(PacketStore):
    """
    Redis-based implementation of PacketStore.

    Each packet is a hash with a 'version' and a 'data' field. Conditional updates use
    optimistic locking: the key is WATCHed, the version compared, and the new state
    written in a MULTI / EXEC transaction which Redis aborts if the key changed.
    """

    redis_client: Redis = field(default=None)
    serializer: Serializer[Packet] = field(default_factory=get_default_serializer)
    key_prefix: str = field(default="redpacket")
    packet_ttl: int | None = field(default=None)  # seconds, None to keep forever

    def __post_init__(self):
        if redis is None:
            raise ImportError(
                "Redis is not installed. Install it with: pip install redpacket[redis]"
            )

        if self.redis_client is None:
            self.redis_client = redis.Redis(
                host='localhost',
                port=6379,
                decode_responses=False  # We handle bytes for serialization
            )

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "RedisPacketStore":
        if redis is None:
            raise ImportError(
                "Redis is not installed. Install it with: pip install redpacket[redis]"
            )
        return cls(redis_client=redis.from_url(redis_url, decode_responses=False), **kwargs)

    def _get_packet_key(self, packet_id: UUID) -> str:
        """Generate Redis key for a packet"""
        return f"{self.key_prefix}:packets:{packet_id}"

    async def __aenter__(self):
        """Begin using this store"""
        try:
            await self.redis_client.ping()
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise TransientStoreFailure(f"Redis unavailable: {e}") from e
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        """Finish using this store"""
        await self.redis_client.aclose()

    async def create_packet(self, packet: Packet) -> Packet:
        packet = replace(packet, version=0)
        key = self._get_packet_key(packet.id)
        data = self.serializer.serialize(packet)
        try:
            async with self.redis_client.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                if await pipe.exists(key):
                    await pipe.unwatch()
                    raise RedPacketError(f"Packet {packet.id} already exists")
                pipe.multi()
                pipe.hset(key, mapping={"version": 0, "data": data})
                if self.packet_ttl:
                    pipe.expire(key, self.packet_ttl)
                await pipe.execute()
        except WatchError as e:
            raise RedPacketError(f"Packet {packet.id} already exists") from e
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise TransientStoreFailure(f"Error creating packet {packet.id}: {e}") from e
        return packet

    async def get_packet(self, packet_id: UUID) -> Packet:
        key = self._get_packet_key(packet_id)
        try:
            version, data = await self.redis_client.hmget(key, ["version", "data"])
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise TransientStoreFailure(f"Error reading packet {packet_id}: {e}") from e
        if version is None or data is None:
            raise PacketNotFound(f"Packet {packet_id} not found")
        return replace(self.serializer.deserialize(data), version=int(version))

    async def update_packet(self, packet: Packet, expected_version: int) -> bool:
        packet = replace(packet, version=expected_version + 1)
        key = self._get_packet_key(packet.id)
        data = self.serializer.serialize(packet)
        try:
            async with self.redis_client.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                version = await pipe.hget(key, "version")
                if version is None:
                    await pipe.unwatch()
                    raise PacketNotFound(f"Packet {packet.id} not found")
                if int(version) != expected_version:
                    await pipe.unwatch()
                    return False
                pipe.multi()
                pipe.hset(key, mapping={"version": packet.version, "data": data})
                await pipe.execute()
                return True
        except WatchError:
            _LOGGER.debug(f"watch_error packet_id={packet.id}")
            return False
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise TransientStoreFailure(f"Error updating packet {packet.id}: {e}") from e

import pickle
from typing import TypeVar

from redpacket.serializers.serializer import Serializer

T = TypeVar("T")


class PickleSerializer(Serializer[T]):
    """Default serializer for the memory, Redis and SQL stores. Packets there are only
    ever read back by this library, so pickle restores them exactly as written with no
    schema to maintain. Only use it for stores written by trusted processes."""

    is_json: bool = False

    def serialize(self, obj: T) -> bytes:
        return pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL)

    def deserialize(self, data: bytes) -> T:
        return pickle.loads(data)

from dataclasses import dataclass
from functools import lru_cache
from typing import TypeVar

from pydantic import TypeAdapter
from redpacket.serializers.serializer import Serializer

T = TypeVar("T")


@dataclass
class PydanticSerializer(Serializer[T]):
    """JSON serializer backed by a pydantic TypeAdapter, for records which should stay
    readable outside of python (the filesystem store uses this by default)."""

    type_adapter: TypeAdapter[T]
    is_json: bool = True
    indent: int | None = None

    def serialize(self, obj: T) -> bytes:
        return self.type_adapter.dump_json(obj, indent=self.indent)

    def deserialize(self, data: bytes) -> T:
        return self.type_adapter.validate_json(data)


@lru_cache(maxsize=None)
def _get_type_adapter(value_type: type) -> TypeAdapter:
    return TypeAdapter(value_type)


def get_json_serializer(
    value_type: type[T], indent: int | None = None
) -> PydanticSerializer[T]:
    """Get a JSON serializer for value_type. The type adapter is built once per type."""
    return PydanticSerializer(_get_type_adapter(value_type), indent=indent)

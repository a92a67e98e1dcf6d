from abc import ABC, abstractmethod
import logging
from typing import TypeVar, Generic

from redpacket.constants import REDPACKET_SERIALIZER
from redpacket.util import get_impl

T = TypeVar("T")
_LOGGER = logging.getLogger(__name__)


class Serializer(Generic[T], ABC):
    """Converts stored records to and from bytes. Packet stores only ever hold packets in
    serialized form, so a packet read from a store never shares state with one held by a
    caller."""

    is_json: bool = False

    @abstractmethod
    def serialize(self, obj: T) -> bytes:
        """Encode a record for storage"""

    @abstractmethod
    def deserialize(self, data: bytes) -> T:
        """Decode a record read from storage

        Args:
            data: Bytes previously produced by serialize

        Returns:
            T: A new object equal to the one serialized
        """


def get_default_serializer() -> Serializer:
    """Get the serializer used by stores not given one explicitly.

    Pickle unless REDPACKET_SERIALIZER names another Serializer subclass, which must be
    constructible without arguments.
    """
    from redpacket.serializers.pickle_serializer import PickleSerializer

    serializer_class = get_impl(REDPACKET_SERIALIZER, Serializer, PickleSerializer)
    _LOGGER.debug(f"Using Serializer: {serializer_class.__name__}")
    return serializer_class()

"""
Serializers package for redpacket.

This package contains serializer implementations for converting packets
to and from serialized formats for storage.
"""

from .serializer import Serializer, get_default_serializer
from .pickle_serializer import PickleSerializer

__all__ = [
    'Serializer',
    'get_default_serializer',
    'PickleSerializer',
]

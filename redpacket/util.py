import importlib
import logging
import os
from typing import TypeVar

T = TypeVar("T")
_LOGGER = logging.getLogger(__name__)


def import_from(qual_name: str):
    """Import a value from its fully qualified name.

    This function is a utility to dynamically import any Python value (class, function, variable)
    from its fully qualified name. For example, 'redpacket.mem.memory_packet_store.MemoryPacketStore'
    would import the MemoryPacketStore class from the redpacket.mem.memory_packet_store module.

    Args:
        qual_name: A fully qualified name in the format 'module.submodule.name'

    Returns:
        The imported value (class, function, or variable)

    Example:
        >>> MemoryPacketStore = import_from('redpacket.mem.memory_packet_store.MemoryPacketStore')
        >>> store = MemoryPacketStore()
    """
    parts = qual_name.split(".")
    module_name = ".".join(parts[:-1])
    module = importlib.import_module(module_name)
    result = getattr(module, parts[-1])
    return result


def get_impl(key: str, base_type: type[T], default_type: type | None = None) -> type[T]:
    """Load the implementation type named by the environment variable given.

    Falls back to default_type when the variable is unset or blank.

    Raises:
        ValueError: If the variable is unset and there is no default type
        TypeError: If the type found is not a subclass of base_type
    """
    value = os.getenv(key)
    if not value or not value.strip():
        if default_type is None:
            raise ValueError(f"No implementation configured for {key}")
        if not issubclass(default_type, base_type):
            raise TypeError(f"{default_type} is not a subclass of {base_type}")
        return default_type
    imported_type = import_from(value.strip())
    if not isinstance(imported_type, type) or not issubclass(imported_type, base_type):
        raise TypeError(f"{value} is not a subclass of {base_type}")
    _LOGGER.debug(f"Using {imported_type.__name__} for {key}")
    return imported_type

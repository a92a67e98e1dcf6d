"""Environment variable constants for the redpacket library.

This module centralizes all environment variable keys used throughout the library
to avoid hardcoded strings and provide better maintainability.
"""

# Store Configuration
REDPACKET_PACKET_STORE = "REDPACKET_PACKET_STORE"
"""Environment variable to override the default packet store implementation.
Set this to a fully qualified class name to use a custom PacketStore implementation.
The class must be constructible without arguments.
"""

REDPACKET_REDIS_URL = "REDPACKET_REDIS_URL"
"""Environment variable holding a Redis url. When set (and REDPACKET_PACKET_STORE is not),
packets are stored in Redis.
"""

REDPACKET_DATABASE_URL = "REDPACKET_DATABASE_URL"
"""Environment variable holding an async SQLAlchemy database url
(e.g. sqlite+aiosqlite:///./redpacket.db). When set (and neither of the above is),
packets are stored in a SQL database.
"""

REDPACKET_ROOT_DIR = "REDPACKET_ROOT_DIR"
"""Environment variable to specify the root directory for the file system based store
"""

DEFAULT_ROOT_DIR = "redpacket_data"

# Serializer Configuration
REDPACKET_SERIALIZER = "REDPACKET_SERIALIZER"
"""Environment variable to override the default serializer implementation.
Default: redpacket.serializers.pickle_serializer.PickleSerializer
"""

# Configuration
REDPACKET_CONFIG = "REDPACKET_CONFIG"
"""Environment variable to specify the RedPacketConfig implementation.
Default: redpacket.config.default_redpacket_config.DefaultRedPacketConfig
"""

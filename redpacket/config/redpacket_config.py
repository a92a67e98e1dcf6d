from abc import ABC, abstractmethod

from redpacket.constants import REDPACKET_CONFIG
from redpacket.util import get_impl


class RedPacketConfig(ABC):
    """Configuration object for redpacket"""

    @abstractmethod
    def get_max_claim_attempts(self) -> int | None:
        """Get the number of read / conditional write rounds a claim may take before
        giving up with TransientStoreFailure. None means retry without limit."""

    @abstractmethod
    def get_retry_base_delay(self) -> float:
        """Get the backoff (seconds) after the first conflicting write"""

    @abstractmethod
    def get_retry_max_delay(self) -> float:
        """Get the upper bound (seconds) of the backoff between attempts"""

    @abstractmethod
    def get_max_share_count(self) -> int:
        """Get the largest share count a packet may be created with"""


_config: RedPacketConfig | None = None


def get_config() -> RedPacketConfig:
    global _config
    if _config is None:
        from redpacket.config.default_redpacket_config import DefaultRedPacketConfig

        config_type = get_impl(REDPACKET_CONFIG, RedPacketConfig, DefaultRedPacketConfig)
        _config = config_type()
    return _config


def set_config(config: RedPacketConfig | None):
    global _config
    _config = config

from dataclasses import dataclass

from redpacket.config.redpacket_config import RedPacketConfig


@dataclass
class DefaultRedPacketConfig(RedPacketConfig):
    """Configuration object for redpacket"""

    max_claim_attempts: int | None = 1000
    retry_base_delay: float = 0.001
    retry_max_delay: float = 0.05
    max_share_count: int = 1000

    def get_max_claim_attempts(self) -> int | None:
        return self.max_claim_attempts

    def get_retry_base_delay(self) -> float:
        return self.retry_base_delay

    def get_retry_max_delay(self) -> float:
        return self.retry_max_delay

    def get_max_share_count(self) -> int:
        return self.max_share_count

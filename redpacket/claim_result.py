from dataclasses import dataclass
from uuid import UUID

from redpacket.claim import Claim
from redpacket.claim_status import ClaimStatus


@dataclass(frozen=True)
class ClaimResult:
    """Result of ClaimAllocator.claim. claim is None only when the packet was exhausted."""

    packet_id: UUID
    status: ClaimStatus
    claim: Claim | None = None
    attempts: int = 1

    @property
    def granted(self) -> bool:
        return self.status == ClaimStatus.GRANTED

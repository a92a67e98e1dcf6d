from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from redpacket.claim import Claim
from redpacket.packet import Packet, PacketState, mark_best_shares


@dataclass(frozen=True)
class PacketStatus:
    """Read only snapshot of a packet. The amounts still unclaimed are not exposed,
    only how many shares remain."""

    id: UUID
    creator_id: str
    fund: int
    share_count: int
    message: str
    shares_left: int
    claims: list[Claim]
    created_at: datetime

    @property
    def state(self) -> PacketState:
        return PacketState.OPEN if self.shares_left else PacketState.EXHAUSTED

    @property
    def is_finished(self) -> bool:
        return self.shares_left == 0

    @property
    def best_shares(self) -> list[Claim]:
        return [claim for claim in self.claims if claim.is_best_share]

    def get_claim(self, claimant_id: str) -> Claim | None:
        for claim in self.claims:
            if claim.claimant_id == claimant_id:
                return claim
        return None


def to_status(packet: Packet) -> PacketStatus:
    claims = mark_best_shares(packet.claims)
    return PacketStatus(
        id=packet.id,
        creator_id=packet.creator_id,
        fund=packet.fund,
        share_count=packet.share_count,
        message=packet.message,
        shares_left=packet.shares_left,
        claims=list(claims.values()),
        created_at=packet.created_at,
    )

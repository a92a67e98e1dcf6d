from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
import logging
from typing import Mapping
from uuid import UUID, uuid4

from redpacket.claim import Claim
from redpacket.money import from_cents
from redpacket.redpacket_error import InvariantViolation

_LOGGER = logging.getLogger(__name__)


class PacketState(Enum):
    """Externally observable state of a packet. EXHAUSTED is terminal."""

    OPEN = "OPEN"
    EXHAUSTED = "EXHAUSTED"


@dataclass(frozen=True)
class Packet:
    """
    One fund-splitting instance. All amounts are in cents.

    unclaimed_shares only ever shrinks and claims only ever grows, one element each
    per successful claim. version is assigned by the store on every write and is
    used as the token for conditional updates.
    """

    creator_id: str
    fund: int
    share_count: int
    unclaimed_shares: tuple[int, ...]
    message: str = ""
    claims: dict[str, Claim] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def state(self) -> PacketState:
        return PacketState.OPEN if self.unclaimed_shares else PacketState.EXHAUSTED

    @property
    def is_finished(self) -> bool:
        return not self.unclaimed_shares

    @property
    def shares_left(self) -> int:
        return len(self.unclaimed_shares)

    @property
    def claimed_total(self) -> int:
        return sum(claim.amount for claim in self.claims.values())

    @property
    def fund_decimal(self) -> Decimal:
        return from_cents(self.fund)


def mark_best_shares(claims: Mapping[str, Claim]) -> dict[str, Claim]:
    """Recompute is_best_share across all claims.

    Every claim whose amount equals the maximum is flagged, so ties produce several
    best shares. A maximum of zero flags nothing. Claims whose flag is already correct
    are returned as is.
    """
    best = max((claim.amount for claim in claims.values()), default=0)
    result = {}
    for claimant_id, claim in claims.items():
        is_best = best > 0 and claim.amount == best
        if claim.is_best_share != is_best:
            claim = replace(claim, is_best_share=is_best)
        result[claimant_id] = claim
    return result


def check_invariants(packet: Packet) -> None:
    """Verify conservation of the fund and the share count.

    Raises:
        InvariantViolation: If any invariant does not hold
    """
    problems = []
    if packet.shares_left + len(packet.claims) != packet.share_count:
        problems.append(
            f"{packet.shares_left} unclaimed + {len(packet.claims)} claimed "
            f"!= {packet.share_count} shares"
        )
    total = sum(packet.unclaimed_shares) + packet.claimed_total
    if total != packet.fund:
        problems.append(f"shares sum to {total}, fund is {packet.fund}")
    if any(amount <= 0 for amount in packet.unclaimed_shares):
        problems.append("non positive unclaimed share")
    for claimant_id, claim in packet.claims.items():
        if claim.amount <= 0:
            problems.append(f"non positive claim for {claimant_id}")
        if claim.claimant_id != claimant_id:
            problems.append(f"claim for {claim.claimant_id} stored under {claimant_id}")
    if problems:
        _LOGGER.error(f"packet_invariant_violated packet_id={packet.id} {problems}")
        raise InvariantViolation(f"Packet {packet.id}: {'; '.join(problems)}")

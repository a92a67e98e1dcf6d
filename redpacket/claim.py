from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from redpacket.money import from_cents


@dataclass(frozen=True)
class ClaimantInfo:
    """Cosmetic display details for a claimant, supplied by the caller."""

    name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class Claim:
    """A claim represents one claimant's share of a packet. Amounts are in cents."""

    claimant_id: str
    amount: int
    claimed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    claimant_info: ClaimantInfo | None = None
    is_best_share: bool = False

    @property
    def amount_decimal(self) -> Decimal:
        return from_cents(self.amount)

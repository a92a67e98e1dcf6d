"""
Claim allocator: hands out the shares of a packet to concurrent claimants.

A claim is an optimistic concurrency loop over the packet store:

    1. read the latest packet and its version
    2. decide the outcome in memory
    3. write the new packet conditioned on the version being unchanged
    4. on conflict, back off and start again from a fresh read

Step 3 is the only mutation, so checking for an existing claim and taking a share
form one indivisible unit. A call abandoned at any point has either committed that
write or had no effect.
"""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
import logging
import random
from typing import Callable
from uuid import UUID

from redpacket.claim import Claim, ClaimantInfo
from redpacket.claim_result import ClaimResult
from redpacket.claim_status import ClaimStatus
from redpacket.config.redpacket_config import RedPacketConfig, get_config
from redpacket.money import to_cents
from redpacket.packet import Packet, check_invariants, mark_best_shares
from redpacket.packet_status import PacketStatus, to_status
from redpacket.packet_store import PacketStore
from redpacket.partition import generate_cents
from redpacket.redpacket_error import (
    InvalidConfiguration,
    PacketNotFound,
    TransientStoreFailure,
)

_LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class ClaimAllocator:
    """Creates packets and allocates their shares. Any number of allocators (in this
    process or others) may share one store."""

    store: PacketStore
    config: RedPacketConfig = field(default_factory=get_config)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = _utc_now

    async def __aenter__(self):
        await self.store.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.store.__aexit__(exc_type, exc_value, traceback)

    async def create_packet(
        self,
        fund: Decimal | str | int,
        share_count: int,
        message: str,
        creator_id: str,
    ) -> UUID:
        """Split the fund and store a new open packet.

        Raises:
            InvalidConfiguration: If the fund cannot be split into share_count shares
                of at least 0.01, or share_count exceeds the configured maximum
            TypeError: If creator_id or message is not a string
            ValueError: If creator_id is empty
        """
        _check_text("creator_id", creator_id, required=True)
        _check_text("message", message)
        max_share_count = self.config.get_max_share_count()
        if isinstance(share_count, int) and share_count > max_share_count:
            raise InvalidConfiguration(
                f"Share count {share_count} exceeds the maximum of {max_share_count}"
            )
        fund_cents = to_cents(fund)
        shares = generate_cents(fund_cents, share_count, self.rng)
        packet = Packet(
            creator_id=creator_id,
            fund=fund_cents,
            share_count=share_count,
            unclaimed_shares=tuple(shares),
            message=message,
            created_at=self.clock(),
        )
        check_invariants(packet)
        packet = await self.store.create_packet(packet)
        _LOGGER.info(
            f"packet_created packet_id={packet.id} creator_id={creator_id} "
            f"fund={fund_cents} share_count={share_count}"
        )
        return packet.id

    async def claim(
        self,
        packet_id: UUID | str,
        claimant_id: str,
        claimant_info: ClaimantInfo | None = None,
    ) -> ClaimResult:
        """Attempt to claim a share of a packet on behalf of claimant_id.

        Returns:
            ClaimResult: GRANTED with the new claim, ALREADY_CLAIMED with the claimant's
                existing claim, or EXHAUSTED if no shares remain

        Raises:
            PacketNotFound: If there is no packet with the id given
            TransientStoreFailure: If the store is unavailable, or the configured number
                of attempts was used up by conflicting writes
            TypeError: If claimant_id or claimant_info is malformed
            ValueError: If claimant_id is empty
        """
        _check_claimant(claimant_id, claimant_info)
        packet_id = _to_uuid(packet_id)
        max_attempts = self.config.get_max_claim_attempts()
        attempt = 0
        while True:
            attempt += 1
            packet = await self.store.get_packet(packet_id)
            check_invariants(packet)

            existing = packet.claims.get(claimant_id)
            if existing is not None:
                return ClaimResult(
                    packet_id, ClaimStatus.ALREADY_CLAIMED, existing, attempt
                )
            if not packet.unclaimed_shares:
                return ClaimResult(packet_id, ClaimStatus.EXHAUSTED, None, attempt)

            updated = self._grant(packet, claimant_id, claimant_info)
            if await self.store.update_packet(updated, packet.version):
                claim = updated.claims[claimant_id]
                _LOGGER.info(
                    f"claim_granted packet_id={packet_id} claimant_id={claimant_id} "
                    f"amount={claim.amount} shares_left={updated.shares_left} "
                    f"attempts={attempt}"
                )
                if updated.is_finished:
                    _LOGGER.info(f"packet_exhausted packet_id={packet_id}")
                return ClaimResult(packet_id, ClaimStatus.GRANTED, claim, attempt)

            _LOGGER.debug(
                f"claim_conflict packet_id={packet_id} claimant_id={claimant_id} "
                f"version={packet.version} attempt={attempt}"
            )
            if max_attempts is not None and attempt >= max_attempts:
                _LOGGER.warning(
                    f"claim_attempts_exhausted packet_id={packet_id} "
                    f"claimant_id={claimant_id} attempts={attempt}"
                )
                raise TransientStoreFailure(
                    f"Could not claim from packet {packet_id} after {attempt} attempts"
                )
            await asyncio.sleep(self._get_backoff(attempt))

    async def status(self, packet_id: UUID | str) -> PacketStatus:
        """Get a read only snapshot of a packet, with best shares freshly recomputed.

        Raises:
            PacketNotFound: If there is no packet with the id given
        """
        packet = await self.store.get_packet(_to_uuid(packet_id))
        check_invariants(packet)
        return to_status(packet)

    async def batch_get_status(
        self, packet_ids: list[UUID | str]
    ) -> list[PacketStatus | None]:
        statuses = []
        for packet_id in packet_ids:
            try:
                statuses.append(await self.status(packet_id))
            except PacketNotFound:
                statuses.append(None)
        return statuses

    def _grant(
        self, packet: Packet, claimant_id: str, claimant_info: ClaimantInfo | None
    ) -> Packet:
        amount = packet.unclaimed_shares[-1]
        claim = Claim(
            claimant_id=claimant_id,
            amount=amount,
            claimed_at=self.clock(),
            claimant_info=claimant_info,
        )
        claims = mark_best_shares({**packet.claims, claimant_id: claim})
        updated = replace(
            packet, unclaimed_shares=packet.unclaimed_shares[:-1], claims=claims
        )
        check_invariants(updated)
        return updated

    def _get_backoff(self, attempt: int) -> float:
        """Full jitter exponential backoff"""
        ceiling = min(
            self.config.get_retry_max_delay(),
            self.config.get_retry_base_delay() * 2 ** min(attempt - 1, 16),
        )
        return self.rng.uniform(0, ceiling)


def _to_uuid(packet_id: UUID | str) -> UUID:
    if isinstance(packet_id, UUID):
        return packet_id
    try:
        return UUID(str(packet_id))
    except ValueError as e:
        raise PacketNotFound(f"Packet {packet_id} not found") from e


def _check_text(name: str, value, required: bool = False) -> None:
    """Values stored in a packet must survive a round trip through every serializer,
    so only plain strings are accepted."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string: {value!r}")
    if required and not value:
        raise ValueError(f"{name} must not be empty")


def _check_claimant(claimant_id: str, claimant_info: ClaimantInfo | None) -> None:
    _check_text("claimant_id", claimant_id, required=True)
    if claimant_info is None:
        return
    if not isinstance(claimant_info, ClaimantInfo):
        raise TypeError(f"claimant_info must be a ClaimantInfo: {claimant_info!r}")
    for name in ("name", "avatar_url"):
        value = getattr(claimant_info, name)
        if value is not None:
            _check_text(f"claimant_info.{name}", value)

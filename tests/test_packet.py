from decimal import Decimal

import pytest

from redpacket.claim import Claim
from redpacket.packet import Packet, PacketState, check_invariants, mark_best_shares
from redpacket.packet_status import to_status
from redpacket.redpacket_error import InvariantViolation


def _claims(*amounts: int) -> dict[str, Claim]:
    return {
        f"claimant-{i}": Claim(claimant_id=f"claimant-{i}", amount=amount)
        for i, amount in enumerate(amounts)
    }


def _best(claims: dict[str, Claim]) -> list[str]:
    return sorted(c.claimant_id for c in claims.values() if c.is_best_share)


class TestMarkBestShares:
    def test_single_maximum(self):
        assert _best(mark_best_shares(_claims(300, 700, 500))) == ["claimant-1"]

    def test_ties_are_all_flagged(self):
        assert _best(mark_best_shares(_claims(300, 500, 500))) == [
            "claimant-1",
            "claimant-2",
        ]

    def test_zero_maximum_flags_nothing(self):
        assert _best(mark_best_shares(_claims(0, 0))) == []

    def test_empty(self):
        assert mark_best_shares({}) == {}

    def test_single_claim_is_best(self):
        assert _best(mark_best_shares(_claims(1))) == ["claimant-0"]

    def test_stale_flags_are_cleared(self):
        claims = mark_best_shares(_claims(300))
        claims["late"] = Claim(claimant_id="late", amount=400)
        assert _best(mark_best_shares(claims)) == ["late"]

    def test_unchanged_claims_are_reused(self):
        claims = mark_best_shares(_claims(300, 500))
        again = mark_best_shares(claims)
        for claimant_id, claim in claims.items():
            assert again[claimant_id] is claim


class TestPacket:
    def _packet(self, **kwargs) -> Packet:
        values = dict(
            creator_id="creator",
            fund=1000,
            share_count=3,
            unclaimed_shares=(200, 300),
            claims={"alice": Claim(claimant_id="alice", amount=500)},
        )
        values.update(kwargs)
        return Packet(**values)

    def test_properties(self):
        packet = self._packet()
        assert packet.state == PacketState.OPEN
        assert not packet.is_finished
        assert packet.shares_left == 2
        assert packet.claimed_total == 500
        assert packet.fund_decimal == Decimal("10.00")

    def test_exhausted(self):
        packet = self._packet(
            unclaimed_shares=(),
            claims=_claims(200, 300, 500),
        )
        assert packet.state == PacketState.EXHAUSTED
        assert packet.is_finished
        check_invariants(packet)

    def test_valid_packet_passes(self):
        check_invariants(self._packet())

    def test_sum_mismatch(self):
        with pytest.raises(InvariantViolation):
            check_invariants(self._packet(fund=999))

    def test_count_mismatch(self):
        with pytest.raises(InvariantViolation):
            check_invariants(self._packet(share_count=4))

    def test_zero_unclaimed_share(self):
        with pytest.raises(InvariantViolation):
            check_invariants(self._packet(unclaimed_shares=(0, 500)))

    def test_claim_under_wrong_key(self):
        claims = {"bob": Claim(claimant_id="alice", amount=500)}
        with pytest.raises(InvariantViolation):
            check_invariants(self._packet(claims=claims))


class TestPacketStatus:
    def test_status_hides_unclaimed_amounts(self):
        packet = Packet(
            creator_id="creator",
            fund=1000,
            share_count=3,
            unclaimed_shares=(200, 300),
            message="Enjoy",
            claims={"alice": Claim(claimant_id="alice", amount=500)},
        )
        status = to_status(packet)
        assert not hasattr(status, "unclaimed_shares")
        assert status.shares_left == 2
        assert status.state == PacketState.OPEN
        assert status.message == "Enjoy"
        assert status.get_claim("alice").amount == 500
        assert status.get_claim("bob") is None
        assert [c.claimant_id for c in status.best_shares] == ["alice"]

    def test_status_recomputes_best_shares(self):
        claims = {
            "alice": Claim(claimant_id="alice", amount=500, is_best_share=False),
            "bob": Claim(claimant_id="bob", amount=100, is_best_share=True),
        }
        packet = Packet(
            creator_id="creator",
            fund=600,
            share_count=2,
            unclaimed_shares=(),
            claims=claims,
        )
        status = to_status(packet)
        assert [c.claimant_id for c in status.best_shares] == ["alice"]
        assert status.is_finished
        # The stored claims are left as they were
        assert packet.claims["bob"].is_best_share

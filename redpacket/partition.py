"""
Partition generator: splits a fund into randomly sized shares ("lucky money").

Each share but the last is drawn uniformly from [0, 2 * remaining / remaining_shares),
truncated toward zero to a whole cent and floored at one cent. The last share is
whatever remains, so the shares always sum to the fund exactly. The result is
shuffled so that position carries no information about size.

All arithmetic is done in integer cents.
"""

from decimal import Decimal
import logging
import random

from redpacket.money import from_cents, to_cents
from redpacket.redpacket_error import InvalidConfiguration, InvariantViolation

_LOGGER = logging.getLogger(__name__)

MIN_SHARE_CENTS = 1


def generate(
    fund: Decimal | str | int,
    share_count: int,
    rng: random.Random | None = None,
) -> list[Decimal]:
    """Split fund into share_count positive two-place decimal amounts summing to fund.

    Args:
        fund: The total amount, with at most two decimal places
        share_count: The number of shares (at least 1)
        rng: Source of randomness. Defaults to a fresh random.Random

    Returns:
        list[Decimal]: The shares, in random order

    Raises:
        InvalidConfiguration: If fund < 0.01 * share_count, or either argument is malformed
    """
    cents = generate_cents(to_cents(fund), share_count, rng)
    return [from_cents(c) for c in cents]


def generate_cents(
    fund_cents: int, share_count: int, rng: random.Random | None = None
) -> list[int]:
    """Integer minor unit version of generate."""
    _check_args(fund_cents, share_count)
    if rng is None:
        rng = random.Random()

    shares: list[int] = []
    remaining = fund_cents
    remaining_shares = share_count
    for _ in range(share_count - 1):
        # floor(uniform[0, 2 * remaining / remaining_shares)) in whole cents
        amount = rng.randrange(2 * remaining) // remaining_shares
        amount = max(MIN_SHARE_CENTS, amount)
        shares.append(amount)
        remaining -= amount
        remaining_shares -= 1
    shares.append(remaining)

    rng.shuffle(shares)
    _check_result(fund_cents, share_count, shares)
    return shares


def _check_args(fund_cents: int, share_count: int) -> None:
    if isinstance(share_count, bool) or not isinstance(share_count, int):
        raise InvalidConfiguration(f"Share count must be an integer: {share_count!r}")
    if share_count < 1:
        raise InvalidConfiguration(f"Share count must be at least 1: {share_count}")
    if isinstance(fund_cents, bool) or not isinstance(fund_cents, int):
        raise InvalidConfiguration(f"Fund must be whole cents: {fund_cents!r}")
    if fund_cents <= 0:
        raise InvalidConfiguration(f"Fund must be positive: {from_cents(fund_cents)}")
    if fund_cents < MIN_SHARE_CENTS * share_count:
        raise InvalidConfiguration(
            f"Fund {from_cents(fund_cents)} cannot give {share_count} shares of at least "
            f"{from_cents(MIN_SHARE_CENTS)}"
        )


def _check_result(fund_cents: int, share_count: int, shares: list[int]) -> None:
    if (
        len(shares) != share_count
        or sum(shares) != fund_cents
        or any(s < MIN_SHARE_CENTS for s in shares)
    ):
        _LOGGER.error(
            f"partition_invariant_violated fund={fund_cents} share_count={share_count}"
        )
        raise InvariantViolation(
            f"Partition of {fund_cents} into {share_count} shares is invalid: {shares}"
        )

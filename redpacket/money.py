"""Conversion between decimal amounts and integer minor units (cents)."""

from decimal import Decimal, InvalidOperation

from redpacket.redpacket_error import InvalidConfiguration

CENT = Decimal("0.01")


def to_cents(amount: Decimal | str | int | float) -> int:
    """Convert an amount with at most two decimal places to integer cents.

    Floats are converted through their shortest string form, so 10.1 becomes 1010.

    Raises:
        InvalidConfiguration: If the amount is not a finite number or carries more
            than two decimal places
    """
    if isinstance(amount, bool):
        raise InvalidConfiguration(f"Invalid amount: {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidConfiguration(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidConfiguration(f"Invalid amount: {amount!r}")
    cents = value * 100
    if cents != cents.to_integral_value():
        raise InvalidConfiguration(
            f"Amount {amount} has more than two decimal places"
        )
    return int(cents)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)

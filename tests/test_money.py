from decimal import Decimal

import pytest

from redpacket.money import from_cents, to_cents
from redpacket.redpacket_error import InvalidConfiguration


class TestMoney:
    def test_to_cents(self):
        assert to_cents(Decimal("10.00")) == 1000
        assert to_cents("0.01") == 1
        assert to_cents("3") == 300
        assert to_cents(7) == 700
        assert to_cents(10.1) == 1010
        assert to_cents(Decimal("1.50")) == 150

    def test_trailing_zeros_allowed(self):
        assert to_cents("1.2300") == 123

    @pytest.mark.parametrize("amount", ["1.005", "0.001", "abc", "", "NaN", "-Infinity", True])
    def test_to_cents_rejects(self, amount):
        with pytest.raises(InvalidConfiguration):
            to_cents(amount)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            to_cents("1.005")

    def test_from_cents(self):
        assert from_cents(5) == Decimal("0.05")
        assert str(from_cents(1000)) == "10.00"
        assert str(from_cents(123456)) == "1234.56"

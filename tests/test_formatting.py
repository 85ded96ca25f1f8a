"""Tests for amount formatting."""

from decimal import Decimal

import pytest

from bank_ledger.formatting import format_currency


class TestFormatCurrency:
    """Tests for format_currency."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("10000"), "₡10 000,00"),
        (Decimal("509015.40"), "₡509 015,40"),
        (Decimal("0.005"), "₡0,01"),
        (Decimal("999"), "₡999,00"),
        (Decimal("-1500.5"), "-₡1 500,50"),
    ])
    def test_format(self, amount, expected):
        """Test grouping, decimals and rounding."""
        assert format_currency(amount) == expected

    def test_symbol(self):
        """Test a custom symbol."""
        assert format_currency(Decimal("1"), symbol="$") == "$1,00"

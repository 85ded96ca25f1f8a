"""Human-readable amounts for notification text."""

from decimal import ROUND_HALF_UP, Decimal


def format_currency(amount: Decimal, symbol: str = "₡") -> str:
    """
    Format an amount the way the Costa Rican locale writes it.

    >>> format_currency(Decimal("10000"))
    '₡10 000,00'
    """
    quantized = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    grouped = f"{abs(quantized):,.2f}".replace(",", " ").replace(".", ",")
    return f"{sign}{symbol}{grouped}"

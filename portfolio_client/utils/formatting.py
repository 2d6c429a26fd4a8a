"""Display formatting for monetary amounts and percent changes."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_cents(amount: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal, currency_symbol: str = "$", decimal_places: int = 2) -> str:
    """Format an amount as e.g. ``$50.00``."""
    return f"{currency_symbol}{amount:.{decimal_places}f}"


def format_percent(change: Decimal) -> str:
    """Format a percent change with two decimals, e.g. ``20.00``."""
    return f"{change:.2f}"

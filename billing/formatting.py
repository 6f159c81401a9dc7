"""Display formatting for amounts and durations"""
import math

from .errors import CalculationError
from .models import Currency, DEFAULT_CURRENCY


def format_money(amount: float, currency: Currency = DEFAULT_CURRENCY) -> str:
    """
    Render an amount with the currency symbol, fixed to its decimal places.

    No thousands grouping and no locale lookups, so the same input always
    gives the same string.

        >>> format_money(82.5, Currency('BD', 'before', 3))
        'BD 82.500'
    """
    if not math.isfinite(amount):
        raise CalculationError(f"Cannot format non-finite amount {amount}")
    formatted = f"{amount:.{currency.decimal_places}f}"
    if formatted.startswith('-') and float(formatted) == 0:
        # -0.0004 rounds to "-0.000"
        formatted = formatted[1:]
    if currency.symbol_position == 'after':
        return f"{formatted} {currency.symbol}"
    return f"{currency.symbol} {formatted}"


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as HH:MM:SS (hours are not capped at 24)."""
    total = max(0, int(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

"""Display formatting for money values."""

import math

from ..tables.columns import PLACEHOLDER


def format_dollars(value: float, symbol: str = "$", decimals: int = 2) -> str:
    """Format as currency: 1234.5 -> '$1,234.50', -3 -> '-$3.00'."""
    if value is None or not math.isfinite(float(value)):
        return PLACEHOLDER
    sign = '-' if value < 0 else ''
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"

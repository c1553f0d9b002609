"""
Money and date helpers shared by the store and the HTTP layer.

Form amounts arrive as free text, so parsing is lenient: the leading
numeric part of the string is used and anything unparsable counts as 0.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union

from booking_ledger.core.config import get_settings

Number = Union[int, float]

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> float:
    """
    Parse a form amount the way a browser ``parseFloat(x) || 0`` would.

    "150" -> 150.0, " 99.5 SAR" -> 99.5, "abc" -> 0.0, None -> 0.0.
    Non-finite results (overflow, NaN) also fall back to 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))

    if not math.isfinite(number):
        return 0.0
    # Normalises -0.0 as well
    return number or 0.0


def remaining_amount(total_price: float, paid_amount: float) -> float:
    return max(0.0, total_price - paid_amount)


def json_number(value: float) -> Number:
    """Integral amounts are written as JSON integers (1000, not 1000.0)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def payment_status(remaining: float) -> str:
    return "due" if remaining > 0 else "settled"


def format_amount(value: float, currency: Optional[str] = None) -> str:
    """Fixed display format: grouped thousands, up to 3 decimals, currency suffix."""
    if currency is None:
        currency = get_settings().CURRENCY_SYMBOL
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text} {currency}" if currency else text


def format_display_date(value: str) -> str:
    """Render an ISO date as DD/MM/YYYY; anything else is returned untouched."""
    try:
        parsed: Union[date, datetime] = date.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return parsed.strftime("%d/%m/%Y")

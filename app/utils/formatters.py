"""
Formatting helpers for API responses and quotation PDFs.
Amounts are Naira (base currency unit), timestamps are UTC.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import datetime, timezone
from typing import Union, Optional

Number = Union[int, float, Decimal, str, None]

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
    "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
_SCALES = [
    (1_000_000_000, "Billion"),
    (1_000_000, "Million"),
    (1_000, "Thousand"),
]


def iso_utc(value: Optional[datetime]) -> Optional[str]:
    """
    Render a datetime as 'YYYY-MM-DDTHH:MM:SSZ'.

    Naive datetimes (SQLite drops tzinfo) are taken to be UTC already.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%SZ')


def to_number(value: Number) -> Union[int, float]:
    """Convert a stored Decimal into a plain JSON number."""
    if value is None:
        return 0
    num = Decimal(str(value))
    if num == num.to_integral_value():
        return int(num)
    return float(num)


def money(value: Number, symbol: str = "N") -> str:
    """
    Format an amount with thousands separators and two decimals.

    Examples:
        money(96750) -> "N96,750.00"
        money(None) -> "N0.00"
    """
    try:
        num = Decimal(str(value if value not in (None, "") else 0))
    except (InvalidOperation, ValueError):
        num = Decimal('0')
    num = num.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f"{symbol}{num:,.2f}"


def quantity(value: Number) -> str:
    """Show whole quantities without decimals, fractional ones trimmed."""
    num = Decimal(str(value or 0))
    if num == num.to_integral_value():
        return str(int(num))
    return f"{num:.3f}".rstrip('0').rstrip('.')


def _in_words(n: int) -> str:
    if n < 20:
        return _ONES[n]
    if n < 100:
        return _TENS[n // 10] + (" " + _ONES[n % 10] if n % 10 else "")
    if n < 1000:
        rest = n % 100
        return _ONES[n // 100] + " Hundred" + (" and " + _in_words(rest) if rest else "")
    for scale, name in _SCALES:
        if n >= scale:
            head, rest = divmod(n, scale)
            return _in_words(head) + " " + name + (" " + _in_words(rest) if rest else "")
    return ""


def amount_in_words(value: Number) -> str:
    """
    Spell an amount in Naira and Kobo.

    Examples:
        amount_in_words(96750) -> "Ninety Six Thousand Seven Hundred and Fifty Naira Only"
        amount_in_words(12.5) -> "Twelve Naira and Fifty Kobo Only"
        amount_in_words(0) -> "Zero Naira Only"
    """
    try:
        num = Decimal(str(value or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return "Zero Naira Only"

    if num <= 0:
        return "Zero Naira Only"

    naira = int(num)
    kobo = int((num - naira) * 100)

    words = (_in_words(naira) if naira else "Zero") + " Naira"
    if kobo:
        words += " and " + _in_words(kobo) + " Kobo"
    return words + " Only"

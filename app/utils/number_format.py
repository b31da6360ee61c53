"""Number parsing utilities for JSON request payloads."""
from decimal import Decimal, InvalidOperation

from app.exceptions import ValidationError


def parse_decimal(value, field, default=None, allow_negative=True) -> Decimal:
    """
    Parse a JSON number or numeric string into a Decimal.

    Rules:
    - None or "" returns ``default`` (converted to Decimal when not None)
    - Booleans are rejected (``True`` is an int in Python)
    - Commas used as thousands separators are stripped ("1,500.50")
    - Negative values are rejected unless ``allow_negative``

    Raises:
        ValidationError: naming ``field`` if the value is not a finite number.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None if default is None else Decimal(str(default))

    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')

    cleaned = str(value).strip().replace(',', '')
    try:
        decimal_value = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        raise ValidationError(f'{field} must be a number')

    if not decimal_value.is_finite():
        raise ValidationError(f'{field} must be a number')

    if not allow_negative and decimal_value < 0:
        raise ValidationError(f'{field} cannot be negative')

    return decimal_value


def parse_int_id(value, field):
    """Parse an optional integer identifier (None/""/0 mean "no id")."""
    if value in (None, '', 0, '0'):
        return None
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer id')
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer id')
    if parsed < 0:
        raise ValidationError(f'{field} must be an integer id')
    return parsed or None

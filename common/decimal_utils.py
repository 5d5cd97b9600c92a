"""
Lenient numeric parsing for money and quantity fields.

Legacy records often carry amounts as strings, blanks or nothing at all.
Every numeric read in the totals and ageing code goes through
``lenient_decimal`` so the coerce-to-zero policy lives in one place.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
TWO_PLACES = Decimal("0.01")


def parse_decimal(value):
    """Return ``value`` as a Decimal, or None when it is absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, float):
        value = repr(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


def lenient_decimal(value, default=ZERO):
    """Parse ``value`` as a Decimal, falling back to ``default`` (0) instead of raising."""
    parsed = parse_decimal(value)
    return default if parsed is None else parsed


def money(value):
    """Lenient parse, then round half up to two places (paise), the precision money is stored at."""
    return lenient_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

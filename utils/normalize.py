# 📦 utils/normalize.py
# ─────────────────────────────
# String / number coercion shared by schemas and engine

import math
from enum import Enum


def norm(value) -> str:
    """Trimmed, lowercased string form. None becomes ''."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def is_set(value) -> bool:
    """A criterion is set when it is neither None nor blank."""
    return value is not None and str(value).strip() != ""


def to_number(value):
    """Parse into a finite float, or None if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_int(value):
    """Parse into an int. Fractional or non-numeric values give None."""
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)

import math
from decimal import ROUND_HALF_UP, Decimal

from liftoff.errors import ValidationError

NAME_MAX_LENGTH = 255
NOTES_MAX_LENGTH = 500
# weights live in NUMERIC(8, 2) columns
WEIGHT_MAX = 999999.99
_CENTS = Decimal("0.01")


def clean_name(value, field: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must not be empty")
    value = value.strip()
    if len(value) > NAME_MAX_LENGTH:
        raise ValidationError(field, f"must be at most {NAME_MAX_LENGTH} characters")
    return value


def check_count(value, field: str) -> int:
    # bool is an int subclass; True is not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be a whole number")
    if value < 1:
        raise ValidationError(field, "must be at least 1")
    return value


def check_weight(value, field: str = "weight") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, "must be a number")
    if not math.isfinite(value):
        raise ValidationError(field, "must be a finite number")
    if value < 0:
        raise ValidationError(field, "must not be negative")
    if value <= WEIGHT_MAX:
        # round half up on the decimal text, so 2.555 is 2.56 on every backend
        value = float(Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))
    if value > WEIGHT_MAX:
        raise ValidationError(field, f"must be at most {WEIGHT_MAX}")
    return value


def clean_notes(value, field: str = "notes") -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, "must be text")
    value = value.strip()
    if len(value) > NOTES_MAX_LENGTH:
        raise ValidationError(field, f"must be at most {NOTES_MAX_LENGTH} characters")
    return value or None

"""Validation helpers shared by the purchase service and its entry points."""

from __future__ import annotations

import re

from .exceptions import ValidationError

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_int(raw: object, field: str) -> int:
    """Convert an int or a decimal integer string to int."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and INTEGER_PATTERN.fullmatch(raw.strip()):
        try:
            return int(raw.strip())
        except ValueError as exc:
            # Python 3.11+ caps int() conversion of very long digit strings.
            raise ValidationError(f"{field} must be an integer of reasonable size") from exc
    if raw is None:
        raise ValidationError(f"{field} is required")
    raise ValidationError(f"{field} must be an integer, got {raw!r}")


def parse_amount(raw: object, field: str = "amount") -> int:
    return parse_int(raw, field)


def parse_id(raw: object, field: str = "id") -> int:
    value = parse_int(raw, field)
    if value <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return value


def parse_month(raw: object, field: str = "month") -> int:
    """Return a calendar month number in the range 1-12."""
    value = parse_int(raw, field)
    if not 1 <= value <= 12:
        raise ValidationError(f"{field} must be between 1 and 12")
    return value


def validate_required_str(value: object, field: str) -> str:
    """Return the text unchanged, rejecting missing or blank input."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value

"""Data models for the purchase tracker domain."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .exceptions import ParseError

__all__ = ["Purchase", "isoformat_utc", "parse_datetime", "utc_now"]

REQUIRED_FIELDS = ("id", "description", "amount", "created_at")

# Seconds followed by a fraction of any length, e.g. Go's RFC3339Nano output.
FRACTION_PATTERN = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with trailing Z for UTC-aware datetimes."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat()
    # datetime.isoformat renders +00:00 for UTC; replace with the shorter Z form.
    return iso.replace("+00:00", "Z")


def _microsecond_fraction(match: "re.Match[str]") -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into UTC-aware datetime.

    Fractions are cut or padded to microseconds, since ``fromisoformat`` before
    Python 3.11 only accepts three or six fractional digits.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    value = FRACTION_PATTERN.sub(_microsecond_fraction, value, count=1)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        # Naive timestamps are read as UTC.
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Purchase:
    id: int
    description: str
    amount: int
    created_at: datetime
    # Timestamp text as read from disk; written back verbatim so untouched records never drift.
    created_at_text: Optional[str] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the purchase to JSON-friendly natives."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "created_at": self.created_at_text or isoformat_utc(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Purchase":
        """Hydrate a Purchase from JSON-native data, rejecting malformed entries."""
        if not isinstance(data, dict):
            raise ParseError(f"expected an object, got {type(data).__name__}")
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise ParseError(f"missing field(s): {', '.join(missing)}")

        if not _is_int(data["id"]) or data["id"] <= 0:
            raise ParseError(f"id must be a positive integer, got {data['id']!r}")
        if not isinstance(data["description"], str):
            raise ParseError("description must be a string")
        if not _is_int(data["amount"]):
            raise ParseError(f"amount must be an integer, got {data['amount']!r}")
        if not isinstance(data["created_at"], str):
            raise ParseError("created_at must be an ISO 8601 string")
        try:
            created_at = parse_datetime(data["created_at"])
        except ValueError as exc:
            raise ParseError(f"created_at is not a valid timestamp: {data['created_at']!r}") from exc

        return cls(
            id=data["id"],
            description=data["description"],
            amount=data["amount"],
            created_at=created_at,
            created_at_text=data["created_at"],
        )

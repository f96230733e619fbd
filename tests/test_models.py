from datetime import datetime, timedelta, timezone

import pytest

from purchase_core.exceptions import ParseError
from purchase_core.models import Purchase, isoformat_utc, parse_datetime, utc_now


def test_to_dict_uses_exact_field_names():
    purchase = Purchase(1, "coffee", 5, datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc))
    assert purchase.to_dict() == {
        "id": 1,
        "description": "coffee",
        "amount": 5,
        "created_at": "2024-05-01T10:00:00Z",
    }


def test_from_dict_normalises_offsets_to_utc():
    purchase = Purchase.from_dict(
        {"id": 3, "description": "book", "amount": 20, "created_at": "2024-05-01T12:30:00+02:00"}
    )
    assert purchase.created_at == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


def test_parse_datetime_treats_naive_as_utc():
    assert parse_datetime("2024-01-31T23:00:00").tzinfo == timezone.utc


def test_isoformat_utc_converts_other_zones():
    dt = datetime(2024, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
    assert isoformat_utc(dt) == "2023-12-31T23:00:00Z"


def test_utc_now_has_whole_seconds():
    now = utc_now()
    assert now.microsecond == 0
    assert now.tzinfo == timezone.utc


@pytest.mark.parametrize(
    "payload, message",
    [
        ("not an object", "expected an object"),
        ({"id": 1, "description": "x", "amount": 1}, "missing field"),
        ({"id": "1", "description": "x", "amount": 1, "created_at": "2024-01-01T00:00:00Z"}, "id"),
        ({"id": 0, "description": "x", "amount": 1, "created_at": "2024-01-01T00:00:00Z"}, "id"),
        ({"id": 1, "description": None, "amount": 1, "created_at": "2024-01-01T00:00:00Z"}, "description"),
        ({"id": 1, "description": "x", "amount": 1.5, "created_at": "2024-01-01T00:00:00Z"}, "amount"),
        ({"id": 1, "description": "x", "amount": True, "created_at": "2024-01-01T00:00:00Z"}, "amount"),
        ({"id": 1, "description": "x", "amount": 1, "created_at": "yesterday"}, "created_at"),
        ({"id": 1, "description": "x", "amount": 1, "created_at": 12}, "created_at"),
    ],
)
def test_from_dict_rejects_shape_mismatch(payload, message):
    with pytest.raises(ParseError, match=message):
        Purchase.from_dict(payload)


def test_purchase_is_immutable():
    purchase = Purchase(1, "coffee", 5, utc_now())
    with pytest.raises(AttributeError):
        purchase.id = 2  # type: ignore[misc]


def test_parse_datetime_accepts_nanosecond_fractions():
    dt = parse_datetime("2024-05-01T10:00:00.123456789+02:00")
    assert dt == datetime(2024, 5, 1, 8, 0, 0, 123456, tzinfo=timezone.utc)


def test_parse_datetime_pads_short_fractions():
    assert parse_datetime("2024-05-01T10:00:00.5Z").microsecond == 500000


def test_isoformat_utc_keeps_microseconds():
    dt = datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
    assert isoformat_utc(dt) == "2024-05-01T10:00:00.123456Z"


def test_loaded_timestamp_text_is_written_back_verbatim():
    raw = {"id": 1, "description": "coffee", "amount": 5, "created_at": "2024-05-01T10:00:00.123456789+02:00"}
    purchase = Purchase.from_dict(raw)
    assert purchase.to_dict() == raw


def test_timestamp_text_does_not_affect_equality():
    loaded = Purchase.from_dict({"id": 1, "description": "x", "amount": 1, "created_at": "2024-05-01T12:00:00+02:00"})
    assert loaded == Purchase(1, "x", 1, datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc))

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bizintel.domain.entities.errors import ValidationError
from bizintel.domain.entities.query import DateRange, ensure_utc


def test_ensure_utc_treats_naive_as_utc() -> None:
    naive = datetime(2025, 1, 1, 10, 0)
    assert ensure_utc(naive) == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_ensure_utc_converts_offsets() -> None:
    aware = datetime(2025, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert ensure_utc(aware) == datetime(2025, 1, 1, 13, 0, tzinfo=timezone.utc)


def test_date_range_normalises_bounds_to_utc() -> None:
    window = DateRange(
        start=datetime(2025, 1, 1),
        end=datetime(2025, 2, 1, tzinfo=timezone(timedelta(hours=1))),
    )

    assert window.start == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert window.end == datetime(2025, 1, 31, 23, 0, tzinfo=timezone.utc)


def test_date_range_rejects_inverted_bounds() -> None:
    moment = datetime(2025, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        DateRange(start=moment, end=moment)


def test_open_range_has_no_bounds() -> None:
    window = DateRange()
    assert window.start is None
    assert window.end is None

# tests/unit/test_day_count.py
from datetime import date, datetime

import pytest

from src.core.finance.day_count import (
    SPREADSHEET_EPOCH,
    as_date,
    days_between,
    to_day_offsets,
    to_serial,
)


def test_spreadsheet_serial_numbers():
    assert to_serial(date(2008, 1, 1)) == 39448
    assert to_serial(SPREADSHEET_EPOCH) == 0
    assert to_serial("1900-03-01") == 61


def test_signed_swap_flips_sign():
    a, b = date(2020, 2, 1), date(2021, 2, 1)
    assert days_between(a, b) == 366  # leap year in between
    assert days_between(b, a) == -366


def test_unsigned_swap_keeps_magnitude():
    a, b = date(2023, 1, 1), date(2024, 1, 1)
    assert days_between(a, b, signed=False) == days_between(b, a, signed=False) == 365


def test_time_of_day_is_ignored():
    assert days_between(datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 2, 0, 1)) == 1


def test_iso_strings_are_accepted():
    assert as_date("2024-02-29") == date(2024, 2, 29)
    assert as_date(" 2024-02-29T10:00:00 ") == date(2024, 2, 29)


@pytest.mark.parametrize("bad", ["2024-13-01", "yesterday", ""])
def test_bad_strings_raise_value_error(bad):
    with pytest.raises(ValueError):
        as_date(bad)


def test_unsupported_types_raise_type_error():
    with pytest.raises(TypeError):
        as_date(20240101)  # type: ignore[arg-type]


def test_offsets_keep_input_order():
    dates = [date(2024, 1, 10), date(2024, 1, 1), "2024-01-31"]
    offsets = to_day_offsets(dates, epoch=date(2024, 1, 1))
    assert offsets == [9, 0, 30]


def test_offsets_default_to_spreadsheet_serials():
    assert to_day_offsets([date(2008, 1, 1), date(2008, 1, 2)]) == [39448, 39449]

import calendar

import pytest
from hypothesis import given, strategies as st

from ctfread.tstamp import SECOND, is_leap_year, parse_timestamp_ns, utc_to_epoch


@pytest.mark.parametrize(
    "year, expected",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False), (2400, True)],
)
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


def test_utc_to_epoch_origin():
    assert utc_to_epoch(1970, 1, 1, 0, 0, 0) == 0


@given(
    st.integers(min_value=1970, max_value=2400),
    st.integers(min_value=1, max_value=12),
    st.integers(min_value=1, max_value=28),
    st.integers(min_value=0, max_value=23),
    st.integers(min_value=0, max_value=59),
    st.integers(min_value=0, max_value=59),
)
def test_utc_to_epoch_matches_timegm(year, month, day, hour, minute, second):
    expected = calendar.timegm((year, month, day, hour, minute, second, 0, 0, 0))
    assert utc_to_epoch(year, month, day, hour, minute, second) == expected


def test_utc_to_epoch_rejects_bad_month():
    with pytest.raises(ValueError):
        utc_to_epoch(2000, 13, 1, 0, 0, 0)


def test_parse_dated_utc():
    base = calendar.timegm((2000, 1, 1, 0, 0, 0, 0, 0, 0)) * SECOND
    assert parse_timestamp_ns("2000-01-01 00:00", utc=True) == (base, True)


def test_parse_dated_utc_with_seconds_and_nanos():
    base = calendar.timegm((2000, 1, 1, 0, 0, 0, 0, 0, 0)) * SECOND
    ns, has_date = parse_timestamp_ns("2000-01-01 00:00:05.123", utc=True)
    assert has_date is True
    assert ns == base + 5 * SECOND + 123


def test_parse_dated_local_day_difference():
    a, _ = parse_timestamp_ns("2000-01-02 12:00", utc=False)
    b, _ = parse_timestamp_ns("2000-01-01 12:00", utc=False)
    assert a - b == 86400 * SECOND


def test_epoch_minus_one_is_rejected():
    with pytest.raises(ValueError):
        parse_timestamp_ns("1969-12-31 23:59:59", utc=True)


def test_parse_time_of_day_is_relative_and_undated():
    a, a_date = parse_timestamp_ns("12:30")
    b, b_date = parse_timestamp_ns("12:00")
    assert a_date is False and b_date is False
    assert a - b == 30 * 60 * SECOND


def test_parse_time_of_day_nanos():
    a, _ = parse_timestamp_ns("12:30:00.7")
    b, _ = parse_timestamp_ns("12:30")
    assert a - b == 7


def test_time_of_day_ignores_utc_flag():
    assert parse_timestamp_ns("01:00", utc=True) == parse_timestamp_ns("01:00", utc=False)


def test_parse_seconds():
    assert parse_timestamp_ns("12") == (12 * SECOND, True)
    assert parse_timestamp_ns("12.5") == (12 * SECOND + 5, True)
    assert parse_timestamp_ns("-3") == (-3 * SECOND, True)
    assert parse_timestamp_ns("-3.5") == (-(3 * SECOND + 5), True)


def test_parse_seconds_reads_whole_nano_digit_run():
    assert parse_timestamp_ns("12.1234567890") == (12 * SECOND + 1234567890, True)


@given(st.integers(min_value=0, max_value=10**9), st.integers(min_value=0, max_value=999_999_999))
def test_parse_seconds_round_trip(sec, nsec):
    assert parse_timestamp_ns(f"{sec}.{nsec}") == (sec * SECOND + nsec, True)


@pytest.mark.parametrize(
    "text",
    [
        "25:00",
        "12:60",
        "12:00:61",
        "2024-13-01 00:00",
        "2024-00-01 00:00",
        "2024-01-32 00:00",
        "2024-01-01 24:00",
        "abc",
        "12abc",
        "",
        "99999999999999999999",
    ],
)
def test_invalid_timestamps(text):
    with pytest.raises(ValueError):
        parse_timestamp_ns(text, utc=True)
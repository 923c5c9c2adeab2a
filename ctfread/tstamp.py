"""Parsing of the timestamps accepted by the trim options.

Three formats are understood:

- ``yyyy-mm-dd hh:ii[:ss[.nano]]``: a full date and time, in local time
  or in UTC.
- ``hh:ii[:ss[.nano]]``: a time of day. It is resolved against the local
  date 1970-01-01; the caller supplies the real date later.
- ``[-]sec[.nano]``: seconds from the clock origin.

The ``nano`` part is a count of nanoseconds, not a decimal fraction, so
``"12.5"`` is twelve seconds and five nanoseconds.
"""

from __future__ import annotations

import re
import time
from typing import Optional, Tuple

SECOND = 1_000_000_000

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_DAYS_TO_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

_DATETIME_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2}) ([0-9]{2}):([0-9]{2})"
    r"(\Z|:([0-9]{2})(\Z|\.([0-9]{1,9})\Z))"
)
_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})(\Z|:([0-9]{2})(\Z|\.([0-9]{1,9})\Z))")
_SECONDS_RE = re.compile(r"(-*)([0-9]+)(\Z|\.([0-9]{1,9}))")
_DIGITS_RE = re.compile(r"[0-9]*")


def is_leap_year(year: int) -> bool:
    """Return True if ``year`` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def utc_to_epoch(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    """Seconds since the Unix epoch of a UTC calendar time (POSIX formula)."""
    if not 1 <= month <= 12:
        raise ValueError(f"month {month} is out of range")
    tm_year = year - 1900
    yday = day - 1 + _DAYS_TO_MONTH[month - 1]
    if month > 2 and is_leap_year(year):
        yday += 1
    return (
        second
        + minute * 60
        + hour * 3600
        + yday * 86400
        + (tm_year - 70) * 31536000
        + _tdiv(tm_year - 69, 4) * 86400
        - _tdiv(tm_year - 1, 100) * 86400
        + _tdiv(tm_year + 299, 400) * 86400
    )


def _bounded(text: str, start: int, lower: int, upper: int, what: str) -> int:
    """Read the digit run at ``start`` as a 64-bit value within [lower, upper]."""
    digits = _DIGITS_RE.match(text, start).group()
    value = int(digits) if digits else 0
    if value > _UINT64_MAX:
        raise ValueError(f"{what} {digits} is too large")
    if value > INT64_MAX:
        value -= 1 << 64
    if not lower <= value <= upper:
        raise ValueError(f"{what} {digits} is out of range")
    return value


def _optional(text: str, m: "re.Match[str]", group: int, lower: int, upper: int, what: str) -> int:
    start = m.start(group)
    if start < 0:
        return 0
    return _bounded(text, start, lower, upper, what)


def _local_to_epoch(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    try:
        return int(time.mktime((year, month, day, hour, minute, second, 0, 1, -1)))
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"cannot convert local time: {exc}") from exc


def _check_ns(ns: int) -> int:
    if not INT64_MIN <= ns <= INT64_MAX:
        raise ValueError("timestamp does not fit in 64 bits of nanoseconds")
    return ns


def parse_timestamp_ns(text: str, utc: bool = False) -> Tuple[int, bool]:
    """Parse ``text`` into ``(nanoseconds, has_date)``; raise ValueError if invalid.

    ``utc`` selects UTC instead of local time for the dated format.
    ``has_date`` is False only for the ``hh:ii[:ss[.nano]]`` format.
    """
    m: Optional[re.Match[str]] = _DATETIME_RE.match(text)
    if m:
        year = _bounded(text, m.start(1), 0, INT64_MAX, "year")
        month = _bounded(text, m.start(2), 1, 12, "month")
        day = _bounded(text, m.start(3), 1, 31, "day")
        hour = _bounded(text, m.start(4), 0, 23, "hour")
        minute = _bounded(text, m.start(5), 0, 59, "minute")
        second = _optional(text, m, 7, 0, 60, "second")
        nsec = _optional(text, m, 9, 0, INT64_MAX, "nanosecond")
        if utc:
            epoch = utc_to_epoch(year, month, day, hour, minute, second)
        else:
            epoch = _local_to_epoch(year, month, day, hour, minute, second)
        if epoch == -1:
            raise ValueError(f"cannot represent {text!r}")
        return _check_ns(nsec + epoch * SECOND), True

    m = _TIME_RE.match(text)
    if m:
        hour = _bounded(text, m.start(1), 0, 23, "hour")
        minute = _bounded(text, m.start(2), 0, 59, "minute")
        second = _optional(text, m, 4, 0, 60, "second")
        nsec = _optional(text, m, 6, 0, INT64_MAX, "nanosecond")
        epoch = _local_to_epoch(1970, 1, 1, hour, minute, second)
        return _check_ns(epoch * SECOND + nsec), False

    m = _SECONDS_RE.match(text)
    if m:
        sign = -1 if m.group(1) else 1
        sec = _bounded(text, m.start(2), 0, INT64_MAX, "seconds")
        nsec = _optional(text, m, 4, 0, INT64_MAX, "nanosecond")
        return _check_ns(sign * (sec * SECOND + nsec)), True

    raise ValueError(f"unrecognized timestamp {text!r}")
"""Command-line options of the trace reader."""

from __future__ import annotations

import getopt
import sys
from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, Optional, Sequence

from ctfread.tstamp import INT64_MAX, INT64_MIN, parse_timestamp_ns

_USAGE = """\
Usage: actf [option(s)] [CTF_PATH(s)]
 The options are:
  -p <opts>   Select what to print. The opts argument is a comma-separated list
              with the event property to print. Supported properties are:
              packet-header, packet-context, event-header, event-common-context,
              event-specific-context, event-payload and all.
              For example: -p event-header,event-payload
  -l          Print labels for each event property
  -d          Print timestamp delta between events
  -c          Print timestamps in cycles (default [hh:mm:ss.ns] in localtime)
  -g          Print and parse (-b/-e) timestamps in UTC instead of localtime.
  -t          Print timestamps with the full date.
  -s          Print timestamps in seconds.nanoseconds.
  -b <tstamp> Trim events occurring before tstamp. The unit of tstamp is
              ns and can be given in the following formats:
                yyyy-mm-dd hh:ii[:ss[.nano]]
                hh:ii[:ss[.nano]]
                [-]sec[.nano]
              For the hh:ii[:ss[.nano]] format, the date will be taken from the first event.
              For the [-]sec[.nano] format, sec is the number of seconds from origin.
              The date is considered localtime. If you want UTC, set environment to TZ=UTC.
  -e <tstamp> Trim events occurring after tstamp. See available formats under -b.
  -q          Quiet, do not print events
  -h          Print help
"""

_TSTAMP_ERROR = (
    "invalid timestamp ({}), the formats "
    "yyyy-mm-dd hh:ii[:ss[.nano]], hh:ii[:ss[.nano]] and [-]sec[.nano] are supported"
)


class PrintFlags(IntFlag):
    """What to print for each event and how to show timestamps."""

    NONE = 0
    PKT_HEADER = 1 << 0
    PKT_CTX = 1 << 1
    EVENT_HEADER = 1 << 2
    EVENT_COMMON_CTX = 1 << 3
    EVENT_SPECIFIC_CTX = 1 << 4
    EVENT_PAYLOAD = 1 << 5
    PROP_LABELS = 1 << 6
    TSTAMP_DELTA = 1 << 7
    TSTAMP_CC = 1 << 8
    TSTAMP_UTC = 1 << 9
    TSTAMP_DATE = 1 << 10
    TSTAMP_SEC = 1 << 11
    ALL = (
        PKT_HEADER
        | PKT_CTX
        | EVENT_HEADER
        | EVENT_COMMON_CTX
        | EVENT_SPECIFIC_CTX
        | EVENT_PAYLOAD
    )


_PRINT_OPTS = {
    "packet-header": PrintFlags.PKT_HEADER,
    "packet-context": PrintFlags.PKT_CTX,
    "event-header": PrintFlags.EVENT_HEADER,
    "event-common-context": PrintFlags.EVENT_COMMON_CTX,
    "event-specific-context": PrintFlags.EVENT_SPECIFIC_CTX,
    "event-payload": PrintFlags.EVENT_PAYLOAD,
    "all": PrintFlags.ALL,
}

_FLAG_OPTS = {
    "-l": PrintFlags.PROP_LABELS,
    "-d": PrintFlags.TSTAMP_DELTA,
    "-c": PrintFlags.TSTAMP_CC,
    "-g": PrintFlags.TSTAMP_UTC,
    "-t": PrintFlags.TSTAMP_DATE,
    "-s": PrintFlags.TSTAMP_SEC,
}


@dataclass(frozen=True)
class TimeRange:
    """Inclusive time range, in nanoseconds, of the events to keep."""

    begin: int = INT64_MIN
    end: int = INT64_MAX
    begin_has_date: bool = True
    end_has_date: bool = True


@dataclass
class Options:
    """The parsed command line."""

    ctf_paths: List[str] = field(default_factory=list)
    quiet: bool = False
    printer_flags: PrintFlags = PrintFlags.NONE
    filter_range: TimeRange = field(default_factory=TimeRange)
    has_filter_range: bool = False
    show_help: bool = False


class OptionsError(Exception):
    """The command line is invalid.

    ``show_usage`` tells whether the usage text should accompany the message.
    """

    def __init__(self, message: str, show_usage: bool = True) -> None:
        super().__init__(message)
        self.message = message
        self.show_usage = show_usage


def usage() -> str:
    """Return the usage text."""
    return _USAGE


def parse_print_opts(text: str) -> PrintFlags:
    """Parse a comma-separated list of event properties to print."""
    parts = text.split(",")
    if parts[-1] == "":
        parts.pop()
    flags = PrintFlags.NONE
    for part in parts:
        name = part.split("=", 1)[0]
        try:
            flags |= _PRINT_OPTS[name]
        except KeyError:
            raise OptionsError(f'No match for print option: "{part}"') from None
    return flags


def _parse_bound(text: str, utc: bool):
    try:
        return parse_timestamp_ns(text, utc)
    except ValueError:
        raise OptionsError(_TSTAMP_ERROR.format(text), show_usage=False) from None


def parse_options(argv: Optional[Sequence[str]] = None) -> Options:
    """Parse command-line arguments (without the program name)."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts, args = getopt.gnu_getopt(list(argv), "p:ldcgtsb:e:qh")
    except getopt.GetoptError as exc:
        raise OptionsError(str(exc)) from None

    options = Options()
    flags = PrintFlags.NONE
    filter_begin: Optional[str] = None
    filter_end: Optional[str] = None
    for opt, value in opts:
        if opt == "-p":
            flags |= parse_print_opts(value)
        elif opt in _FLAG_OPTS:
            flags |= _FLAG_OPTS[opt]
        elif opt == "-b":
            filter_begin = value
        elif opt == "-e":
            filter_end = value
        elif opt == "-q":
            options.quiet = True
        elif opt == "-h":
            return Options(show_help=True)

    if not args:
        raise OptionsError("Expected one or more positional arguments with CTF directories")
    options.ctf_paths = list(args)

    if not flags & PrintFlags.ALL:
        flags |= PrintFlags.ALL
    options.printer_flags = flags

    options.has_filter_range = filter_begin is not None or filter_end is not None
    utc = bool(flags & PrintFlags.TSTAMP_UTC)
    default = TimeRange()
    begin, begin_has_date = default.begin, default.begin_has_date
    end, end_has_date = default.end, default.end_has_date
    if filter_begin is not None:
        begin, begin_has_date = _parse_bound(filter_begin, utc)
    if filter_end is not None:
        end, end_has_date = _parse_bound(filter_end, utc)
    options.filter_range = TimeRange(begin, end, begin_has_date, end_has_date)
    return options
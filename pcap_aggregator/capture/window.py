"""
Resolve user supplied timestamps into an inclusive microsecond window
"""

import re
from dataclasses import dataclass
from datetime import date

import pandas as pd

from pcap_aggregator.exceptions import InvalidTimestamp

MICROS_PER_SECOND = 1_000_000
NANOS_PER_SECOND = 1_000_000_000

# RFC 3339 date-time with a mandatory offset
_RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [first_micros, last_micros] range in microseconds since the epoch"""

    first: pd.Timestamp
    last: pd.Timestamp
    first_micros: int
    last_micros: int

    @property
    def first_date(self) -> date:
        """Calendar date of ``first`` in the offset it was given with"""
        return self.first.date()

    @property
    def last_date(self) -> date:
        return self.last.date()

    def __contains__(self, micros: int) -> bool:
        return self.first_micros <= micros <= self.last_micros


def parse_timestamp(text: str) -> pd.Timestamp:
    """
    Parse an offset-aware timestamp such as ``2022-01-31T23:59:59+09:00``.

    Raises InvalidTimestamp when the text is not an RFC 3339 date-time or
    carries no UTC offset.
    """
    if not isinstance(text, str) or not _RFC3339_PATTERN.fullmatch(text.strip()):
        raise InvalidTimestamp(f"Invalid timestamp (expected RFC 3339 with offset): {text!r}")

    try:
        timestamp = pd.Timestamp(text.strip())
    except (ValueError, OverflowError) as e:
        raise InvalidTimestamp(f"Invalid timestamp {text!r}: {e}") from e

    if timestamp is pd.NaT or timestamp.tzinfo is None:
        raise InvalidTimestamp(f"Timestamp lacks a UTC offset: {text!r}")
    return timestamp


def floor_to_second(timestamp: pd.Timestamp) -> int:
    """Whole seconds since the epoch, rounded towards negative infinity"""
    return timestamp.value // NANOS_PER_SECOND


def resolve_window(first: str, last: str) -> TimeWindow:
    """Build the inclusive window covering every microsecond from ``first`` through ``last``"""
    first_ts = parse_timestamp(first)
    last_ts = parse_timestamp(last)

    first_micros = floor_to_second(first_ts) * MICROS_PER_SECOND
    last_micros = (floor_to_second(last_ts) + 1) * MICROS_PER_SECOND - 1

    if first_micros > last_micros:
        raise InvalidTimestamp(f"Window start {first} is after window end {last}")

    return TimeWindow(
        first=first_ts, last=last_ts, first_micros=first_micros, last_micros=last_micros
    )

"""Unit tests for core utilities."""

import re
from datetime import timezone

from examnotes.backend.core.utils import parse_timestamp, utc_now, utc_timestamp

ISO_MILLIS_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_utc_now_is_naive():
    assert utc_now().tzinfo is None


def test_timestamp_format():
    assert ISO_MILLIS_Z.match(utc_timestamp())


def test_parse_round_trip():
    parsed = parse_timestamp("2025-01-05T09:30:00.123Z")
    assert parsed.tzinfo == timezone.utc
    assert (parsed.year, parsed.month, parsed.day) == (2025, 1, 5)
    assert parsed.microsecond == 123000


def test_timestamps_sort_chronologically():
    first = utc_timestamp()
    second = utc_timestamp()
    assert first <= second

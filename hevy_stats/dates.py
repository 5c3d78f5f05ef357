"""
Hevy Stats — Locale-aware date parsing

Hevy exports dates in the phone's locale, e.g. "16 Dez 2025, 15:06" on a German
device. German month abbreviations are swapped for English ones before pandas
parses the string.
"""
import time
from typing import NamedTuple

import pandas as pd

from hevy_stats.config import CSV_TIMEZONE, GERMAN_MONTHS
from hevy_stats.errors import DateParseError


class ParsedDate(NamedTuple):
    """Epoch seconds, plus the reason when the value is a fallback to "now"."""

    timestamp: int
    source: str = ""
    fallback: bool = False
    reason: str | None = None

    def unwrap(self) -> int:
        """Return the timestamp, raising DateParseError if it is a fallback."""
        if self.fallback:
            raise DateParseError(self.source, self.reason or "")
        return self.timestamp


def translate_months(text: str) -> str:
    """Replace the first German month abbreviation found with its English equivalent."""
    for german, english in GERMAN_MONTHS:
        if german in text:
            return text.replace(german, english, 1)
    return text


def normalize_date(text: str, tz: str = CSV_TIMEZONE) -> ParsedDate:
    """
    Parse a free-text export timestamp into epoch seconds.

    Never raises: an unparseable string yields the current time with
    fallback=True so the caller decides whether to accept it.
    """
    text = text or ""
    try:
        ts = pd.to_datetime(translate_months(text))
        if pd.isna(ts):
            raise ValueError("empty date")
        if ts.tzinfo is None:
            ts = ts.tz_localize(tz)
    except (ValueError, TypeError, OverflowError) as e:
        return ParsedDate(int(time.time()), text, fallback=True, reason=str(e))
    return ParsedDate(int(ts.timestamp()), text)


def parse_date(text: str, tz: str = CSV_TIMEZONE) -> int:
    """Lenient variant: epoch seconds, "now" when the string cannot be parsed."""
    return normalize_date(text, tz).timestamp

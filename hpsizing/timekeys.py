# ──────────────────────────────────────────────────────────────────────────────
# File: hpsizing/timekeys.py
# Decodes PVGIS-style "YYYYMMDD:HHMM" time keys into calendar positions
# ──────────────────────────────────────────────────────────────────────────────
from __future__ import annotations
from typing import NamedTuple

# Non-leap year on purpose; 29 Feb collapses onto 1 Mar.
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class TimeKey(NamedTuple):
    month: int
    day_of_year: int
    hour: int


def _int_or(text: str, default: int) -> int:
    try:
        return int(text)
    except (TypeError, ValueError):
        return default


def decode_time_key(token: str | None) -> TimeKey:
    """Split e.g. "20070115:0800" into (month=1, day_of_year=15, hour=8).

    Lossy on purpose: an empty or malformed token never raises, each field
    that cannot be read falls back to 1 Jan, hour 0.
    """
    if not token:
        return TimeKey(1, 1, 0)

    token = str(token)
    month = _int_or(token[4:6], 1)
    if not 1 <= month <= 12:
        month = 1
    day = _int_or(token[6:8], 1)

    hour = 0
    if ":" in token:
        hour = _int_or(token.split(":")[1][:2], 0)

    day_of_year = day + sum(DAYS_IN_MONTH[: month - 1])
    return TimeKey(month, day_of_year, hour)

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

PARIS_TZ: ZoneInfo = ZoneInfo("Europe/Paris")

# Compact encoding used by the SNCF API: YYYYMMDDTHHMMSS
TIMESTAMP_LENGTH = 15
_ENCODE_FORMAT = "%Y%m%dT%H%M%S"


def now_paris() -> datetime:
    """Return the current wall-clock time in Europe/Paris as a naive datetime.

    The API interprets from_datetime in the coverage's local time, so the
    value is stripped of its tzinfo before encoding.
    """
    return datetime.now(tz=PARIS_TZ).replace(tzinfo=None)


def decode_timestamp(raw: str) -> datetime | None:
    """Decode a compact ``YYYYMMDDTHHMMSS`` timestamp into a naive datetime.

    Fields are read at fixed offsets, the separator at index 8 is never
    inspected. Returns None for input shorter than 15 characters, for any
    non-integer field, and for impossible dates. Never raises.
    """
    if not raw or len(raw) < TIMESTAMP_LENGTH:
        return None
    try:
        return datetime(
            int(raw[0:4]),
            int(raw[4:6]),
            int(raw[6:8]),
            int(raw[9:11]),
            int(raw[11:13]),
            int(raw[13:15]),
        )
    except ValueError:
        return None


def encode_timestamp(dt: datetime) -> str:
    """Return dt in the compact form expected by the from_datetime parameter."""
    return dt.strftime(_ENCODE_FORMAT)


def format_display_time(dt: datetime) -> str:
    """Return a zero-padded 24-hour "HH:MM" string (French display convention)."""
    return dt.strftime("%H:%M")


def slice_display_time(raw: str) -> str:
    """Fallback for timestamps that cannot be fully decoded.

    Reads hour and minute at their fixed offsets when at least 13 characters
    are present, e.g. "20240115T1430" -> "14:30". Returns "" otherwise.
    """
    if not raw or len(raw) < 13:
        return ""
    hour, minute = raw[9:11], raw[11:13]
    if not (hour.isdigit() and minute.isdigit()):
        return ""
    return f"{hour}:{minute}"


def minutes_since_midnight(hhmm: str) -> int | None:
    """Return the number of minutes since midnight for an "HH:MM" string.

    Returns None when the string is not in that shape.
    """
    hours, sep, minutes = hhmm.partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        return None
    return int(hours) * 60 + int(minutes)

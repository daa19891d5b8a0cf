"""Time parsing utilities for CLI commands."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from beepctl.core.exceptions import InvalidDateFormatError, InvalidTimeFormatError

# ASCII digits only
_PAST_RE = re.compile(r"^(\d+)(h|d|w|mo)\s*ago$", re.IGNORECASE | re.ASCII)
_FUTURE_RE = re.compile(r"^(\d+)(m|h|d|w)$", re.IGNORECASE | re.ASCII)

_UNITS: dict[str, str] = {
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Hour used for "tomorrow" reminders
REMINDER_HOUR = 9


def _now(now: datetime | None) -> datetime:
    return datetime.now() if now is None else now


def _midnight(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_full_date(text: str, current: datetime) -> datetime:
    """Parse *text* with dateutil, requiring an explicit year, month and day.

    dateutil fills missing fields from ``default``, so "5pm" or "1" would
    land on the default's date. Parsing against two defaults that differ in
    every date field exposes strings that leave any of them out. Naive
    results take the zone of *current*.
    """
    default = _midnight(current)
    parsed = date_parser.parse(text, default=default)
    shifted = date_parser.parse(text, default=default + relativedelta(years=1, months=1, days=1))
    if parsed != shifted:
        raise ValueError(f"incomplete date: {text!r}")
    return parsed


def to_iso(dt: datetime) -> str:
    """Format *dt* as a UTC ISO-8601 string with millisecond precision.

    Naive datetimes are interpreted as local time.

    >>> to_iso(datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
    '2026-01-02T03:04:05.678Z'
    """
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def epoch_ms(dt: datetime) -> int:
    """Return *dt* as integer milliseconds since the Unix epoch."""
    return (dt.astimezone(timezone.utc) - _EPOCH) // timedelta(milliseconds=1)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp from the API into an aware datetime.

    Naive values are interpreted as local time.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def parse_relative_date(value: str, now: datetime | None = None) -> str:
    """Parse a past-looking date expression into an ISO-8601 timestamp.

    Accepted formats (case-insensitive, surrounding whitespace ignored):

    * ``"today"`` – local midnight of the current date.
    * ``"yesterday"`` – local midnight of the previous date.
    * ``"<N>h ago"``, ``"<N>d ago"``, ``"<N>w ago"`` – the current instant
      minus N hours, days or weeks.
    * ``"<N>mo ago"`` – N calendar months earlier. The day of month is
      clamped when the target month is shorter (Mar 31 -> Feb 28/29).

    Args:
        value: The expression to parse.
        now: Reference time. Defaults to the wall clock. Naive values are
            local time; aware values set the zone used for midnight.

    Returns:
        UTC timestamp such as ``"2026-02-23T18:00:00.000Z"``.

    Raises:
        InvalidDateFormatError: If *value* matches none of the formats.
    """
    text = value.strip()
    lowered = text.lower()
    current = _now(now)

    if lowered == "today":
        return to_iso(_midnight(current))

    if lowered == "yesterday":
        return to_iso(_midnight(current - timedelta(days=1)))

    match = _PAST_RE.match(text)
    if match:
        amount = int(match.group(1))
        unit = match.group(2).lower()
        try:
            if unit == "mo":
                return to_iso(current - relativedelta(months=amount))
            return to_iso(current.astimezone() - timedelta(**{_UNITS[unit]: amount}))
        except (OverflowError, ValueError):
            pass

    raise InvalidDateFormatError(
        f'Invalid date format: "{value}". '
        'Use: "1h ago", "2d ago", "3w ago", "1mo ago", "yesterday", or "today"'
    )


def parse_future_time(value: str, now: datetime | None = None) -> int:
    """Parse a forward-looking time expression into epoch milliseconds.

    Accepted formats (case-insensitive, surrounding whitespace ignored):

    * ``"tomorrow"`` – the next calendar day at 09:00 local time.
    * ``"30m"``, ``"1h"``, ``"2d"``, ``"1w"`` – the current instant plus N
      minutes, hours, days or weeks. No whitespace, no suffix.
    * Any date-time string understood by :func:`dateutil.parser.parse` that
      names a full date, e.g. ``"2026-02-23T18:00:00Z"`` or ``"2026-03-01"``.
      Naive values are in the zone of *now* (local time by default). Bare
      times or partial dates such as ``"5pm"`` or ``"1 h"`` are rejected.

    Raises:
        InvalidTimeFormatError: If *value* cannot be parsed.
    """
    text = value.strip()
    current = _now(now)

    if text.lower() == "tomorrow":
        tomorrow = current + timedelta(days=1)
        return epoch_ms(tomorrow.replace(hour=REMINDER_HOUR, minute=0, second=0, microsecond=0))

    match = _FUTURE_RE.match(text)
    if match:
        amount = int(match.group(1))
        unit = _UNITS[match.group(2).lower()]
        try:
            return epoch_ms(current.astimezone() + timedelta(**{unit: amount}))
        except OverflowError:
            pass
    elif text:
        try:
            return epoch_ms(_parse_full_date(text, current))
        except (ValueError, OverflowError):
            pass

    raise InvalidTimeFormatError(
        f'Invalid time format: "{value}". '
        'Use: "30m", "1h", "2d", "1w", "tomorrow", or ISO date'
    )

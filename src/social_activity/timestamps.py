"""Provider timestamp parsing and rough relative-time rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from social_activity.errors import TimestampParseError

TWITTER_FORMAT = "%a %b %d %H:%M:%S %z %Y"
ISO8601_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# (upper bound in seconds, unit seconds, singular text, plural unit) in ascending order.
_ROUGH_PERIODS: tuple[tuple[int, int, str, str], ...] = (
    (90, _MINUTE, "a minute", "minutes"),
    (45 * _MINUTE, _MINUTE, "a minute", "minutes"),
    (90 * _MINUTE, _HOUR, "an hour", "hours"),
    (22 * _HOUR, _HOUR, "an hour", "hours"),
    (36 * _HOUR, _DAY, "a day", "days"),
    (6 * _DAY + 12 * _HOUR, _DAY, "a day", "days"),
    (10 * _DAY + 12 * _HOUR, _WEEK, "a week", "weeks"),
    (29 * _DAY, _WEEK, "a week", "weeks"),
    (45 * _DAY, _MONTH, "a month", "months"),
    (345 * _DAY, _MONTH, "a month", "months"),
    (547 * _DAY, _YEAR, "a year", "years"),
)


def parse_timestamp(value: object, fmt: str) -> datetime:
    """Parse ``value`` with ``fmt`` into a naive UTC datetime."""
    if not isinstance(value, str):
        raise TimestampParseError(value, fmt)
    try:
        parsed = datetime.strptime(value.strip(), fmt)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError) as exc:
        raise TimestampParseError(value, fmt) from exc
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def humanize_since(moment: datetime, now: datetime | None = None) -> str:
    """Render a rough, past-tense description of how long ago ``moment`` was."""
    reference = now if now is not None else utc_now()
    seconds = abs(int((_naive_utc(moment) - _naive_utc(reference)).total_seconds()))
    text = _rough_period(seconds)
    if text == "now":
        return text
    return f"{text} ago"


def _rough_period(seconds: int) -> str:
    if seconds <= 10:
        return "now"
    if seconds <= 45:
        return f"{seconds} seconds"

    for index, (upper, unit, singular, plural) in enumerate(_ROUGH_PERIODS):
        if seconds > upper:
            continue
        # Even entries cover the "one unit" band, odd entries the counted band.
        if index % 2 == 0:
            return singular
        return f"{max(seconds // unit, 2)} {plural}"

    return f"{max(seconds // _YEAR, 2)} years"


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

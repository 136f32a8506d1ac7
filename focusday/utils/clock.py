import re

from focusday.engine.errors import InvalidTimeFormat

MINUTES_PER_DAY = 1440
LAST_MINUTE = MINUTES_PER_DAY - 1

_HHMM_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def time_to_minutes(text: str) -> int:
    """
    Parse a 24-hour "HH:MM" string into minutes from midnight.

    Raises:
        InvalidTimeFormat: wrong separator, non-numeric parts, or an hour/minute
            outside 00-23 / 00-59.
    """
    if not isinstance(text, str):
        raise InvalidTimeFormat(f"expected an 'HH:MM' string, got {type(text).__name__}")
    m = _HHMM_RE.match(text.strip())
    if not m:
        raise InvalidTimeFormat(f"invalid time {text!r}: expected 'HH:MM'")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"invalid time {text!r}: out of range")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format a minute offset as zero-padded "HH:MM", clamped to the day."""
    m = max(0, min(int(minutes), LAST_MINUTE))
    return f"{m // 60:02d}:{m % 60:02d}"

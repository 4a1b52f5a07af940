"""Wall-clock helpers.

Dates travel as ``YYYY-MM-DD`` and times as zero-padded 24-hour ``HH:MM``
strings. Inside the core every time is an integer count of minutes since
midnight; only the edges deal in strings.
"""

from __future__ import annotations

import re
from datetime import date

from reserveflow.domain.common.errors import InvalidInputError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_time(value: str) -> int:
    """Return minutes since midnight for ``HH:MM``.

    ``24:00`` is accepted as the end of the day so a closing time or a
    reservation end can sit exactly on midnight.
    """
    match = _TIME_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidInputError(f"time must be HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise InvalidInputError(f"time out of range: {value!r}")
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise InvalidInputError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise InvalidInputError(f"date must be YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInputError(f"invalid calendar date: {value!r}") from exc

# SPDX-License-Identifier: MIT

import datetime
import logging
import re
from typing import Any, Optional

import pendulum

logger = logging.getLogger(__name__)

_TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def now_in_tz(tz: str = "local") -> pendulum.DateTime:
    return pendulum.now(tz)


def today_in_tz(tz: str = "local") -> pendulum.Date:
    return pendulum.now(tz).date()


def to_instant(value: Any, tz: str = "local") -> Optional[pendulum.DateTime]:
    """
    Convert an API date value to a pendulum.DateTime in the given timezone.

    Accepts ISO-8601 strings, datetime.datetime and datetime.date values.
    Naive values are interpreted in ``tz``; aware values are converted to it.

    Returns:
        The instant, or None when the value is missing or cannot be parsed
    """
    if value is None:
        return None

    try:
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                return pendulum.instance(value, tz=tz)
            return pendulum.instance(value).in_tz(tz)
        if isinstance(value, datetime.date):
            return pendulum.datetime(value.year, value.month, value.day, tz=tz)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            parsed = pendulum.parse(text, tz=tz)
            if not isinstance(parsed, pendulum.DateTime):
                return None
            return parsed.in_tz(tz)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug("Could not parse date value %r: %s", value, e)
        return None

    return None


def parse_time_of_day(value: Any) -> Optional[tuple[int, int]]:
    """Parse an ``HH:mm`` (or ``HH:mm:ss``) string into (hour, minute)."""
    if not isinstance(value, str):
        return None
    match = _TIME_OF_DAY_PATTERN.match(value.strip())
    if match is None:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return (hour, minute)


def start_of_day(day: pendulum.Date, tz: str = "local") -> pendulum.DateTime:
    return pendulum.datetime(day.year, day.month, day.day, tz=tz)


def end_of_day(day: pendulum.Date, tz: str = "local") -> pendulum.DateTime:
    return start_of_day(day, tz).end_of("day")


def date_to_display_str(day: pendulum.Date) -> str:
    return day.format("YYYY-MM-DD ddd")


def datetime_to_display_time_str(value: pendulum.DateTime) -> str:
    return value.format("HH:mm")


def datetime_to_display_datetime_str(value: pendulum.DateTime) -> str:
    return value.format("MMM-DD ddd HH:mm")

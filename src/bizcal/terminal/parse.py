# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from bizcal.repository.configuration import CONFIGURATION_REPO
from bizcal.time import today_in_tz


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date_str = str(date_param).strip()
    tz = CONFIGURATION_REPO.get_config()["timezone"]

    # Match YYYY-MM-DD format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        try:
            parsed = pendulum.parse(date_str, exact=True)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date {date_str}: {e}")
        if not isinstance(parsed, pendulum.Date):
            raise typer.BadParameter(f"Invalid date {date_str}")
        return parsed

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date_str):
        return today_in_tz(tz).add(days=int(date_str))

    if date_str == "today" or date_str == "t":
        return today_in_tz(tz)
    if date_str == "yesterday" or date_str == "y":
        return today_in_tz(tz).subtract(days=1)
    if date_str == "tomorrow" or date_str == "o":
        return today_in_tz(tz).add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_hour(hour_param: Optional[str | int]) -> Optional[int]:
    """
    Parse an hour of the day given as "H", "HH" or "HH:00".

    Returns:
        The hour as an integer between 0 and 23, or None when not given
    """
    if hour_param is None:
        return None

    hour_str = str(hour_param).strip()
    hour_match = re.match(r"^(\d{1,2})(?::00)?$", hour_str)
    if not hour_match:
        raise typer.BadParameter(f"Hour must look like 8 or 08:00, got {hour_str}")

    hour = int(hour_match.group(1))
    if hour < 0 or hour > 23:
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    return hour

# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from bizcal.model.bucket import (
    BucketError,
    DayBucket,
    HourSlot,
    MonthCell,
    PositionedOccurrence,
)
from bizcal.model.occurrence import Occurrence
from bizcal.time import end_of_day, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_HOUR_START = 8
DEFAULT_HOUR_END = 18
DEFAULT_MONTH_CELL_LIMIT = 3


class BucketingError(ValueError):
    pass


def _bucket_error(
    occurrence_id: Optional[str],
    day: pendulum.Date,
    hour: Optional[int],
    error: Exception,
) -> BucketError:
    logger.warning(
        "Could not bucket occurrence %s on %s%s: %s",
        occurrence_id if occurrence_id is not None else "<unknown>",
        day.to_date_string(),
        f" at {hour:02d}:00" if hour is not None else "",
        error,
    )
    return {
        "occurrence_id": occurrence_id,
        "day": day,
        "hour": hour,
        "message": str(error) or type(error).__name__,
    }


def _occurrence_id(occurrence: Occurrence) -> Optional[str]:
    if isinstance(occurrence, dict):
        occurrence_id = occurrence.get("id")
        return str(occurrence_id) if occurrence_id is not None else None
    return None


def occurs_on(occurrence: Occurrence, day: pendulum.Date, tz: str = "local") -> bool:
    """
    Whether an occurrence overlaps a calendar day.

    The comparison is by calendar day in ``tz``: the day of the start, the day
    of the end, or any day strictly between them.
    """
    start_day = occurrence["start"].in_tz(tz).date()
    end_day = occurrence["end"].in_tz(tz).date()
    return day == start_day or day == end_day or start_day < day < end_day


def clamp_to_day(
    occurrence: Occurrence, day: pendulum.Date, tz: str = "local"
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Clip an occurrence to the part of it that falls on ``day``."""
    day_start = start_of_day(day, tz)
    day_end = end_of_day(day, tz)
    start = max(occurrence["start"].in_tz(tz), day_start)
    end = min(occurrence["end"].in_tz(tz), day_end)
    return start, end


def in_hour(start: pendulum.DateTime, end: pendulum.DateTime, hour: int) -> bool:
    return (
        (start.hour <= hour and end.hour >= hour)
        or start.hour == hour
        or (end.hour == hour and end.minute > 0)
    )


def hour_placement(
    start: pendulum.DateTime, end: pendulum.DateTime, hour: int
) -> tuple[float, float]:
    """
    Vertical placement of an occurrence within a 60-minute cell.

    Returns:
        (top, height) as percentages of the cell
    """
    top = start.minute / 60 * 100 if start.hour == hour else 0.0
    # An end clamped to the close of the day fills its last hour
    ends_here = end.hour == hour and end != end.end_of("day")
    end_offset = end.minute / 60 * 100 if ends_here else 100.0
    height = end_offset - top
    if height < 0:
        raise BucketingError(
            f"Negative height in hour {hour}: ends at {end.format('HH:mm')} "
            f"before it starts at {start.format('HH:mm')}"
        )
    return top, height


def bucket_hours(
    occurrences: list[Occurrence],
    day: pendulum.Date,
    hour_start: int = DEFAULT_HOUR_START,
    hour_end: int = DEFAULT_HOUR_END,
    tz: str = "local",
) -> tuple[list[HourSlot], list[BucketError]]:
    """
    Distribute timed occurrences over the hour slots of a day.

    Returns:
        The hour slots from ``hour_start`` to ``hour_end`` inclusive, and the
        errors of occurrences that could not be clipped to the day at all
    """
    slots: list[HourSlot] = [
        {"hour": hour, "occurrences": [], "errors": []}
        for hour in range(hour_start, hour_end + 1)
    ]
    errors: list[BucketError] = []

    for occurrence in occurrences:
        try:
            start, end = clamp_to_day(occurrence, day, tz)
        except Exception as e:
            errors.append(_bucket_error(_occurrence_id(occurrence), day, None, e))
            continue

        for slot in slots:
            hour = slot["hour"]
            try:
                if not in_hour(start, end, hour):
                    continue
                top, height = hour_placement(start, end, hour)
            except Exception as e:
                slot["errors"].append(
                    _bucket_error(_occurrence_id(occurrence), day, hour, e)
                )
                continue
            positioned: PositionedOccurrence = {
                "occurrence": occurrence,
                "top_percent": top,
                "height_percent": height,
            }
            slot["occurrences"].append(positioned)

    return slots, errors


def empty_day_bucket(day: pendulum.Date) -> DayBucket:
    return {"day": day, "occurrences": [], "all_day": [], "hours": [], "errors": []}


def bucket_day(
    occurrences: list[Occurrence],
    day: pendulum.Date,
    hour_start: int = DEFAULT_HOUR_START,
    hour_end: int = DEFAULT_HOUR_END,
    tz: str = "local",
    with_hours: bool = True,
) -> DayBucket:
    """
    Collect the occurrences of one day.

    All-day occurrences are listed separately and kept out of the hour slots.
    An occurrence that fails to bucket is reported in ``errors`` and skipped.
    """
    bucket = empty_day_bucket(day)

    for occurrence in occurrences:
        try:
            if not occurs_on(occurrence, day, tz):
                continue
        except Exception as e:
            bucket["errors"].append(
                _bucket_error(_occurrence_id(occurrence), day, None, e)
            )
            continue
        bucket["occurrences"].append(occurrence)
        if occurrence.get("all_day"):
            bucket["all_day"].append(occurrence)

    if with_hours:
        timed = [o for o in bucket["occurrences"] if not o.get("all_day")]
        hours, errors = bucket_hours(timed, day, hour_start, hour_end, tz)
        bucket["hours"] = hours
        bucket["errors"].extend(errors)

    return bucket


def bucket_days(
    occurrences: list[Occurrence],
    days: list[pendulum.Date],
    hour_start: int = DEFAULT_HOUR_START,
    hour_end: int = DEFAULT_HOUR_END,
    tz: str = "local",
    with_hours: bool = True,
) -> list[DayBucket]:
    """Bucket every day; a day that fails entirely contributes an empty bucket."""
    buckets: list[DayBucket] = []
    for day in days:
        try:
            bucket = bucket_day(occurrences, day, hour_start, hour_end, tz, with_hours)
        except Exception as e:
            bucket = empty_day_bucket(day)
            bucket["errors"].append(_bucket_error(None, day, None, e))
        buckets.append(bucket)
    return buckets


def month_cells(
    occurrences: list[Occurrence],
    days: list[pendulum.Date],
    month_anchor: pendulum.Date,
    today: pendulum.Date,
    limit: int = DEFAULT_MONTH_CELL_LIMIT,
    tz: str = "local",
) -> list[MonthCell]:
    """
    Group occurrences by day for a month grid, capped at ``limit`` per cell.

    ``overflow`` counts the occurrences hidden by the cap.
    """
    cells: list[MonthCell] = []
    for bucket in bucket_days(occurrences, days, tz=tz, with_hours=False):
        day = bucket["day"]
        day_occurrences = bucket["occurrences"]
        cells.append(
            {
                "day": day,
                "occurrences": day_occurrences[:limit],
                "overflow": max(0, len(day_occurrences) - limit),
                "in_current_month": day.year == month_anchor.year
                and day.month == month_anchor.month,
                "is_today": day == today,
                "errors": bucket["errors"],
            }
        )
    return cells

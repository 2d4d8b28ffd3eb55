# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from bizcal.model.occurrence import Occurrence


class BucketError(TypedDict):
    occurrence_id: Optional[str]
    day: pendulum.Date
    hour: Optional[int]
    message: str


class PositionedOccurrence(TypedDict):
    occurrence: Occurrence
    top_percent: float
    height_percent: float


class HourSlot(TypedDict):
    hour: int
    occurrences: list[PositionedOccurrence]
    errors: list[BucketError]


class DayBucket(TypedDict):
    day: pendulum.Date
    occurrences: list[Occurrence]
    all_day: list[Occurrence]
    hours: list[HourSlot]
    errors: list[BucketError]


class MonthCell(TypedDict):
    day: pendulum.Date
    occurrences: list[Occurrence]
    overflow: int
    in_current_month: bool
    is_today: bool
    errors: list[BucketError]

# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import TypedDict

import pendulum


class ViewMode(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    AGENDA = "agenda"


class NavigationAction(StrEnum):
    PREVIOUS = "previous"
    NEXT = "next"
    TODAY = "today"
    PICK = "pick"


class VisibleRange(TypedDict):
    view_mode: ViewMode
    anchor: pendulum.Date
    days: list[pendulum.Date]


class ViewContext(TypedDict):
    view_mode: ViewMode
    anchor: pendulum.Date
    now: pendulum.DateTime
    tz: str
    hour_start: int
    hour_end: int
    month_cell_limit: int
    agenda_window_days: int

# SPDX-License-Identifier: MIT

from typing import TypedDict

from bizcal.model.bucket import DayBucket, MonthCell
from bizcal.model.occurrence import Occurrence
from bizcal.model.view import ViewContext, VisibleRange


class CalendarViewModel(TypedDict):
    context: ViewContext
    range: VisibleRange
    occurrences: list[Occurrence]
    days: list[DayBucket]
    month: list[MonthCell]
    agenda: list[Occurrence]

# SPDX-License-Identifier: MIT

from enum import StrEnum


class FilterType(StrEnum):
    AND = "and"
    OR = "or"
    STR = "str"


class EventCategory(StrEnum):
    ALL = "all"
    MEETINGS = "meetings"
    DEADLINES = "deadlines"
    TASKS = "tasks"
    APPOINTMENTS = "appointments"
    REMINDERS = "reminders"

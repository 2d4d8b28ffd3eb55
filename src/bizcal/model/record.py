# SPDX-License-Identifier: MIT

import datetime
from typing import NotRequired, Optional, TypeAlias, TypedDict

# Dates arrive as ISO-8601 strings or, from snapshots, as native values
DateValue: TypeAlias = str | datetime.date | datetime.datetime

RecordId: TypeAlias = int | str


class EventRecord(TypedDict):
    id: RecordId
    title: str
    description: NotRequired[Optional[str]]
    start_date: Optional[DateValue]
    end_date: Optional[DateValue]
    location: NotRequired[Optional[str]]
    type: str
    project_id: NotRequired[Optional[RecordId]]
    client_id: NotRequired[Optional[RecordId]]
    all_day: NotRequired[Optional[bool]]


class TaskRecord(TypedDict):
    id: RecordId
    title: str
    description: NotRequired[Optional[str]]
    due_date: NotRequired[Optional[DateValue]]
    due_time: NotRequired[Optional[str]]
    priority: Optional[str]
    status: Optional[str]
    project_id: NotRequired[Optional[RecordId]]
    assigned_to: NotRequired[Optional[RecordId]]


class ProjectRecord(TypedDict):
    id: RecordId
    name: str
    description: NotRequired[Optional[str]]
    startDate: NotRequired[Optional[DateValue]]
    endDate: NotRequired[Optional[DateValue]]
    start_date: NotRequired[Optional[DateValue]]
    end_date: NotRequired[Optional[DateValue]]
    progress: NotRequired[Optional[int | str]]
    client_id: NotRequired[Optional[RecordId]]


class NamedRecord(TypedDict):
    """Clients and users: only ``id`` and ``name`` are read."""

    id: RecordId
    name: str


class CalendarData(TypedDict):
    events: list[EventRecord]
    tasks: list[TaskRecord]
    projects: list[ProjectRecord]
    clients: list[NamedRecord]
    users: list[NamedRecord]


COLLECTIONS = ("events", "tasks", "projects", "clients", "users")


def empty_calendar_data() -> CalendarData:
    return {"events": [], "tasks": [], "projects": [], "clients": [], "users": []}

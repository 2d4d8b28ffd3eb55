# SPDX-License-Identifier: MIT

import logging
from typing import Any, Iterable, Mapping, Optional, TypeAlias

from bizcal.model.occurrence import (
    MilestoneKind,
    Occurrence,
    OccurrenceKind,
    ProjectMilestoneOccurrence,
    RegularOccurrence,
    TaskDueOccurrence,
)
from bizcal.model.record import (
    EventRecord,
    NamedRecord,
    ProjectRecord,
    RecordId,
    TaskRecord,
)
from bizcal.time import parse_time_of_day, to_instant

logger = logging.getLogger(__name__)

TASK_TITLE_PREFIX = "Tarefa: "
MILESTONE_START_TITLE_PREFIX = "Início: "
MILESTONE_END_TITLE_PREFIX = "Fim: "

TASK_EVENT_TYPE = "prazo"
MILESTONE_START_EVENT_TYPE = "projeto"
MILESTONE_END_EVENT_TYPE = "entrega"
DEFAULT_EVENT_TYPE = "other"

Lookup: TypeAlias = dict[RecordId, Mapping[str, Any]]


def build_lookup(records: Optional[Iterable[Mapping[str, Any]]]) -> Lookup:
    """Index records by id. The first record wins when ids repeat."""
    lookup: Lookup = {}
    for record in records or []:
        if isinstance(record, dict) and record.get("id") is not None:
            lookup.setdefault(record["id"], record)
    return lookup


def lookup_name(lookup: Lookup, record_id: Optional[RecordId]) -> str:
    if record_id is None:
        return ""
    record = lookup.get(record_id)
    if record is None:
        return ""
    name = record.get("name")
    return str(name) if name is not None else ""


def unify_occurrences(
    events: Optional[Iterable[EventRecord]],
    tasks: Optional[Iterable[TaskRecord]],
    projects: Optional[Iterable[ProjectRecord]],
    clients: Optional[Iterable[NamedRecord]] = None,
    users: Optional[Iterable[NamedRecord]] = None,
    tz: str = "local",
) -> list[Occurrence]:
    """
    Merge events, task due-dates and project milestones into one occurrence list.

    Output order is regular events, then task occurrences, then project
    milestones, each in input order (a project's start milestone before its
    end milestone). Records whose relevant date is missing or unparseable are
    left out. Any of the collections may be empty or not yet loaded; names
    that cannot be resolved are empty strings.

    Args:
        events: Raw event records
        tasks: Raw task records
        projects: Raw project records, also used as the project lookup table
        clients: Raw client records used for client names
        users: Raw user records used for assignee names
        tz: Timezone in which naive dates are interpreted

    Returns:
        The unified list of occurrences
    """
    project_list = [project for project in projects or [] if isinstance(project, dict)]
    project_lookup = build_lookup(project_list)
    client_lookup = build_lookup(clients)
    user_lookup = build_lookup(users)

    occurrences: list[Occurrence] = []

    for event in events or []:
        if not isinstance(event, dict):
            continue
        regular = regular_occurrence(event, project_lookup, client_lookup, tz)
        if regular is not None:
            occurrences.append(regular)

    for task in tasks or []:
        if not isinstance(task, dict):
            continue
        task_due = task_occurrence(task, project_lookup, client_lookup, user_lookup, tz)
        if task_due is not None:
            occurrences.append(task_due)

    for project in project_list:
        occurrences.extend(milestone_occurrences(project, client_lookup, tz))

    return occurrences


def regular_occurrence(
    event: EventRecord,
    project_lookup: Lookup,
    client_lookup: Lookup,
    tz: str = "local",
) -> Optional[RegularOccurrence]:
    event_id = event.get("id")
    start = to_instant(event.get("start_date"), tz)
    end = to_instant(event.get("end_date"), tz)
    if event_id is None or start is None or end is None:
        logger.debug("Skipping event %r: missing id or dates", event_id)
        return None
    if end < start:
        logger.debug("Skipping event %r: ends before it starts", event_id)
        return None

    event_type = event.get("type") or DEFAULT_EVENT_TYPE
    project_id = event.get("project_id")
    client_id = event.get("client_id")

    return {
        "id": str(event_id),
        "kind": OccurrenceKind.REGULAR,
        "title": str(event.get("title") or ""),
        "description": event.get("description"),
        "start": start,
        "end": end,
        "all_day": bool(event.get("all_day")),
        "event_type": str(event_type),
        "color_key": str(event_type),
        "project_id": project_id,
        "project_name": lookup_name(project_lookup, project_id),
        "client_name": lookup_name(client_lookup, client_id),
        "event_id": event_id,
        "client_id": client_id,
        "location": event.get("location"),
    }


def task_occurrence(
    task: TaskRecord,
    project_lookup: Lookup,
    client_lookup: Lookup,
    user_lookup: Lookup,
    tz: str = "local",
) -> Optional[TaskDueOccurrence]:
    task_id = task.get("id")
    due = to_instant(task.get("due_date"), tz)
    if task_id is None or due is None:
        return None

    all_day = True
    due_time = parse_time_of_day(task.get("due_time"))
    if due_time is not None:
        hour, minute = due_time
        due = due.set(hour=hour, minute=minute, second=0, microsecond=0)
        all_day = False

    project_id = task.get("project_id")
    project = project_lookup.get(project_id) if project_id is not None else None
    client_id = project.get("client_id") if project is not None else None
    priority = task.get("priority")
    assignee_id = task.get("assigned_to")

    return {
        "id": f"task-{task_id}",
        "kind": OccurrenceKind.TASK,
        "title": f"{TASK_TITLE_PREFIX}{task.get('title') or ''}",
        "description": task.get("description"),
        "start": due,
        "end": due,
        "all_day": all_day,
        "event_type": TASK_EVENT_TYPE,
        "color_key": str(priority) if priority is not None else "",
        "project_id": project_id,
        "project_name": lookup_name(project_lookup, project_id),
        "client_name": lookup_name(client_lookup, client_id),
        "task_id": task_id,
        "priority": priority,
        "status": task.get("status"),
        "assignee_id": assignee_id,
        "assignee_name": lookup_name(user_lookup, assignee_id),
    }


def milestone_occurrences(
    project: ProjectRecord,
    client_lookup: Lookup,
    tz: str = "local",
) -> list[ProjectMilestoneOccurrence]:
    project_id = project.get("id")
    if project_id is None:
        return []

    name = str(project.get("name") or "")
    client_name = lookup_name(client_lookup, project.get("client_id"))
    try:
        progress = int(project.get("progress") or 0)
    except (TypeError, ValueError):
        progress = 0

    milestones: list[ProjectMilestoneOccurrence] = []
    for milestone, field, fallback_field, prefix, event_type in (
        (
            MilestoneKind.START,
            "startDate",
            "start_date",
            MILESTONE_START_TITLE_PREFIX,
            MILESTONE_START_EVENT_TYPE,
        ),
        (
            MilestoneKind.END,
            "endDate",
            "end_date",
            MILESTONE_END_TITLE_PREFIX,
            MILESTONE_END_EVENT_TYPE,
        ),
    ):
        value = project.get(field)
        if value is None:
            value = project.get(fallback_field)
        instant = to_instant(value, tz)
        if instant is None:
            continue
        milestones.append(
            {
                "id": f"project-{project_id}-{milestone}",
                "kind": OccurrenceKind.PROJECT,
                "title": f"{prefix}{name}",
                "description": project.get("description"),
                "start": instant,
                "end": instant,
                "all_day": True,
                "event_type": event_type,
                "color_key": event_type,
                "project_id": project_id,
                "project_name": name,
                "client_name": client_name,
                "milestone": milestone,
                "progress_percent": progress,
            }
        )
    return milestones

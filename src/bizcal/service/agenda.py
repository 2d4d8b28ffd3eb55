# SPDX-License-Identifier: MIT

import pendulum

from bizcal.model.occurrence import Occurrence, OccurrenceKind
from bizcal.model.view import ViewMode
from bizcal.query.sort import sort_items
from bizcal.service.bucket import bucket_days
from bizcal.service.visible_range import DEFAULT_AGENDA_WINDOW_DAYS, visible_days

COMPLETED_TASK_STATUSES = {"concluido", "concluida", "completed", "done"}

DEFAULT_UPCOMING_LIMIT = 5


def dedupe_by_id(occurrences: list[Occurrence]) -> list[Occurrence]:
    """Drop repeated occurrence ids, keeping the first."""
    seen: set[str] = set()
    unique: list[Occurrence] = []
    for occurrence in occurrences:
        if occurrence["id"] in seen:
            continue
        seen.add(occurrence["id"])
        unique.append(occurrence)
    return unique


def agenda_occurrences(
    occurrences: list[Occurrence],
    anchor: pendulum.Date,
    agenda_window_days: int = DEFAULT_AGENDA_WINDOW_DAYS,
    tz: str = "local",
) -> list[Occurrence]:
    """
    Occurrences of the agenda window around ``anchor``, once each, in start order.

    Multi-day occurrences are found on every day they overlap; only the first
    sighting is kept. Equal start instants keep their collection order.
    """
    days = visible_days(ViewMode.AGENDA, anchor, agenda_window_days)
    collected: list[Occurrence] = []
    for bucket in bucket_days(occurrences, days, tz=tz, with_hours=False):
        collected.extend(bucket["occurrences"])
    return sort_items(dedupe_by_id(collected), ["start"])


def upcoming_occurrences(
    occurrences: list[Occurrence],
    now: pendulum.DateTime,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> list[Occurrence]:
    """The next regular events starting at or after ``now``."""
    upcoming = [
        occurrence
        for occurrence in occurrences
        if occurrence["kind"] == OccurrenceKind.REGULAR and occurrence["start"] >= now
    ]
    return sort_items(upcoming, ["start"])[:limit]


def is_overdue(occurrence: Occurrence, now: pendulum.DateTime) -> bool:
    if occurrence["end"] >= now:
        return False
    if occurrence["kind"] == OccurrenceKind.REGULAR:
        return True
    if occurrence["kind"] == OccurrenceKind.TASK:
        status = occurrence["status"]
        return status is None or status.lower() not in COMPLETED_TASK_STATUSES
    return False

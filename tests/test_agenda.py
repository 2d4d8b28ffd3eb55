"""Tests for the agenda list, upcoming events and overdue detection."""

# SPDX-License-Identifier: MIT

import pendulum

from bizcal.service.agenda import (
    agenda_occurrences,
    dedupe_by_id,
    is_overdue,
    upcoming_occurrences,
)
from bizcal.service.unify import unify_occurrences


def _occurrences(events=(), tasks=(), projects=()):
    return unify_occurrences(list(events), list(tasks), list(projects), tz="UTC")


def _ids(occurrences):
    return [occurrence["id"] for occurrence in occurrences]


class TestAgenda:
    def test_multi_day_event_appears_once(self, events, tasks, projects):
        occurrences = _occurrences(events, tasks, projects)
        agenda = agenda_occurrences(occurrences, pendulum.date(2025, 3, 11), tz="UTC")
        ids = _ids(agenda)
        assert len(ids) == len(set(ids))
        assert ids.count("2") == 1

    def test_starts_are_non_decreasing(self, events, tasks, projects):
        occurrences = _occurrences(events, tasks, projects)
        agenda = agenda_occurrences(occurrences, pendulum.date(2025, 3, 11), tz="UTC")
        starts = [occurrence["start"] for occurrence in agenda]
        assert starts == sorted(starts)

    def test_window_bounds(self, events, tasks, projects):
        occurrences = _occurrences(events, tasks, projects)
        agenda = agenda_occurrences(occurrences, pendulum.date(2025, 3, 11), tz="UTC")
        # Podcast runs from February to April, outside the 14 day window
        assert "project-6-start" not in _ids(agenda)
        assert "project-6-end" not in _ids(agenda)
        assert "project-5-start" in _ids(agenda)

    def test_duplicate_ids_collapse(self):
        event = {
            "id": 1,
            "title": "Twice",
            "start_date": "2025-03-11T10:00:00",
            "end_date": "2025-03-11T11:00:00",
        }
        occurrences = _occurrences([event, dict(event)])
        assert _ids(dedupe_by_id(occurrences)) == ["1"]
        agenda = agenda_occurrences(occurrences, pendulum.date(2025, 3, 11), tz="UTC")
        assert _ids(agenda) == ["1"]

    def test_equal_starts_keep_collection_order(self):
        events = [
            {"id": 2, "title": "B", "start_date": "2025-03-11T10:00:00", "end_date": "2025-03-11T11:00:00"},
            {"id": 1, "title": "A", "start_date": "2025-03-11T10:00:00", "end_date": "2025-03-11T10:30:00"},
        ]
        agenda = agenda_occurrences(_occurrences(events), pendulum.date(2025, 3, 11), tz="UTC")
        assert _ids(agenda) == ["2", "1"]


class TestUpcoming:
    def test_next_regular_events_only(self, events, tasks, projects):
        occurrences = _occurrences(events, tasks, projects)
        now = pendulum.datetime(2025, 3, 10, 9, 30, tz="UTC")
        assert _ids(upcoming_occurrences(occurrences, now)) == ["1", "3"]

    def test_limit(self):
        events = [
            {
                "id": i,
                "title": f"Event {i}",
                "start_date": f"2025-03-{10 + i:02d}T10:00:00",
                "end_date": f"2025-03-{10 + i:02d}T11:00:00",
            }
            for i in range(8)
        ]
        now = pendulum.datetime(2025, 3, 1, tz="UTC")
        upcoming = upcoming_occurrences(_occurrences(events), now)
        assert _ids(upcoming) == ["0", "1", "2", "3", "4"]
        assert _ids(upcoming_occurrences(_occurrences(events), now, limit=2)) == ["0", "1"]


class TestOverdue:
    now = pendulum.datetime(2025, 3, 20, tz="UTC")

    def test_past_event_is_overdue(self, events):
        occurrence = _occurrences(events)[0]
        assert is_overdue(occurrence, self.now)
        assert not is_overdue(occurrence, pendulum.datetime(2025, 3, 1, tz="UTC"))

    def test_completed_task_is_not_overdue(self, tasks):
        pending, completed = _occurrences(tasks=tasks)
        assert is_overdue(pending, self.now)
        assert not is_overdue(completed, self.now)

    def test_milestones_are_never_overdue(self, projects):
        for occurrence in _occurrences(projects=projects):
            assert not is_overdue(occurrence, pendulum.datetime(2030, 1, 1, tz="UTC"))

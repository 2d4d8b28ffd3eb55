"""Tests for merging events, task deadlines and project milestones."""

# SPDX-License-Identifier: MIT

import datetime

import pendulum

from bizcal.model.occurrence import MilestoneKind, OccurrenceKind
from bizcal.service.unify import (
    build_lookup,
    lookup_name,
    unify_occurrences,
)


def _unify(events=None, tasks=None, projects=None, clients=None, users=None):
    return unify_occurrences(events, tasks, projects, clients, users, tz="UTC")


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

class TestLookup:
    def test_first_record_wins(self):
        lookup = build_lookup([{"id": 1, "name": "First"}, {"id": 1, "name": "Second"}])
        assert lookup_name(lookup, 1) == "First"

    def test_miss_is_empty_string(self):
        lookup = build_lookup([{"id": 1, "name": "First"}])
        assert lookup_name(lookup, 2) == ""
        assert lookup_name(lookup, None) == ""

    def test_records_without_id_are_ignored(self):
        lookup = build_lookup([{"name": "No id"}, "not a record"])
        assert lookup == {}


# ---------------------------------------------------------------------------
# Unification
# ---------------------------------------------------------------------------

class TestUnify:
    def test_order_is_events_tasks_milestones(self, events, tasks, projects):
        occurrences = _unify(events, tasks, projects)
        kinds = [occurrence["kind"] for occurrence in occurrences]
        assert kinds == [OccurrenceKind.REGULAR] * 3 + [OccurrenceKind.TASK] * 2 + [
            OccurrenceKind.PROJECT
        ] * 4

    def test_regular_event_fields(self, events, projects, clients):
        occurrence = _unify(events, [], projects, clients)[0]
        assert occurrence["id"] == "1"
        assert occurrence["title"] == "Kickoff meeting"
        assert occurrence["event_type"] == "reuniao"
        assert occurrence["color_key"] == "reuniao"
        assert occurrence["project_name"] == "Brand film"
        assert occurrence["client_name"] == "Acme"
        assert occurrence["location"] == "Office"
        assert occurrence["start"] == pendulum.datetime(2025, 3, 10, 10, 0, tz="UTC")
        assert occurrence["end"] == pendulum.datetime(2025, 3, 10, 11, 30, tz="UTC")
        assert occurrence["all_day"] is False

    def test_task_due_date_is_a_point(self):
        tasks = [
            {
                "id": 7,
                "title": "Deliver",
                "due_date": "2025-04-01T00:00:00",
                "priority": "alta",
                "status": "pendente",
            }
        ]
        occurrences = _unify([], tasks, [])
        assert len(occurrences) == 1
        occurrence = occurrences[0]
        assert occurrence["id"] == "task-7"
        assert occurrence["title"] == "Tarefa: Deliver"
        assert occurrence["start"] == occurrence["end"]
        assert occurrence["start"] == pendulum.datetime(2025, 4, 1, tz="UTC")
        assert occurrence["event_type"] == "prazo"
        assert occurrence["color_key"] == "alta"
        assert occurrence["all_day"] is True

    def test_task_due_time_makes_it_timed(self, tasks, projects, users):
        occurrence = _unify([], tasks, projects, users=users)[1]
        assert occurrence["all_day"] is False
        assert occurrence["start"] == pendulum.datetime(2025, 3, 11, 14, 30, tz="UTC")
        assert occurrence["assignee_name"] == "Bruno"

    def test_task_client_comes_from_its_project(self, tasks, projects, clients):
        occurrences = _unify([], tasks, projects, clients)
        assert occurrences[0]["client_name"] == "Acme"
        assert occurrences[1]["client_name"] == ""

    def test_project_yields_start_and_end_milestones(self, projects, clients):
        occurrences = _unify([], [], projects, clients)
        assert [occurrence["id"] for occurrence in occurrences] == [
            "project-5-start",
            "project-5-end",
            "project-6-start",
            "project-6-end",
        ]
        start, end = occurrences[0], occurrences[1]
        assert start["milestone"] == MilestoneKind.START
        assert start["title"] == "Início: Brand film"
        assert start["event_type"] == "projeto"
        assert end["milestone"] == MilestoneKind.END
        assert end["title"] == "Fim: Brand film"
        assert end["event_type"] == "entrega"
        assert start["progress_percent"] == 40
        assert start["client_name"] == "Acme"

    def test_snake_case_project_dates_are_accepted(self, projects):
        occurrences = _unify([], [], projects)
        podcast_start = occurrences[2]
        assert podcast_start["start"] == pendulum.datetime(2025, 2, 1, tz="UTC")
        assert podcast_start["progress_percent"] == 75

    def test_project_without_end_date_has_one_milestone(self):
        occurrences = _unify([], [], [{"id": 9, "name": "Open", "startDate": "2025-01-01"}])
        assert [occurrence["id"] for occurrence in occurrences] == ["project-9-start"]

    def test_missing_clients_give_empty_names(self, events, tasks, projects):
        occurrences = _unify(events, tasks, projects, clients=[])
        assert occurrences
        assert all(occurrence["client_name"] == "" for occurrence in occurrences)

    def test_all_collections_missing(self):
        assert _unify() == []

    def test_unparseable_dates_are_excluded(self):
        events = [
            {"id": 1, "title": "Bad", "start_date": "not a date", "end_date": "2025-01-01"},
            {"id": 2, "title": "Missing end", "start_date": "2025-01-01"},
        ]
        tasks = [{"id": 3, "title": "No due date"}]
        assert _unify(events, tasks, []) == []

    def test_event_ending_before_start_is_excluded(self):
        events = [
            {
                "id": 1,
                "title": "Backwards",
                "start_date": "2025-01-02T10:00:00",
                "end_date": "2025-01-01T10:00:00",
            }
        ]
        assert _unify(events, [], []) == []

    def test_native_dates_are_accepted(self):
        events = [
            {
                "id": 1,
                "title": "Native",
                "start_date": datetime.datetime(2025, 5, 1, 9, 0),
                "end_date": datetime.date(2025, 5, 2),
            }
        ]
        occurrence = _unify(events, [], [])[0]
        assert occurrence["start"] == pendulum.datetime(2025, 5, 1, 9, 0, tz="UTC")
        assert occurrence["end"] == pendulum.datetime(2025, 5, 2, tz="UTC")

    def test_untyped_event_gets_default_type(self):
        events = [
            {"id": 1, "title": "Untyped", "start_date": "2025-01-01", "end_date": "2025-01-01"}
        ]
        assert _unify(events, [], [])[0]["event_type"] == "other"

    def test_start_never_after_end(self, events, tasks, projects):
        for occurrence in _unify(events, tasks, projects):
            assert occurrence["start"] <= occurrence["end"]

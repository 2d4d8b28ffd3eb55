"""Tests for day, hour and month bucketing."""

# SPDX-License-Identifier: MIT

import pendulum
import pytest

from bizcal.service.bucket import (
    BucketingError,
    bucket_day,
    bucket_days,
    bucket_hours,
    clamp_to_day,
    hour_placement,
    month_cells,
    occurs_on,
)
from bizcal.service.unify import unify_occurrences


def _event(id, start, end, all_day=False, type="reuniao"):
    return unify_occurrences(
        [
            {
                "id": id,
                "title": f"Event {id}",
                "start_date": start,
                "end_date": end,
                "type": type,
                "all_day": all_day,
            }
        ],
        [],
        [],
        tz="UTC",
    )[0]


# ---------------------------------------------------------------------------
# Day overlap
# ---------------------------------------------------------------------------

class TestOccursOn:
    def test_multi_day_event_covers_days_between(self):
        occurrence = _event(1, "2025-03-10T09:00:00", "2025-03-12T17:00:00")
        assert occurs_on(occurrence, pendulum.date(2025, 3, 10), "UTC")
        assert occurs_on(occurrence, pendulum.date(2025, 3, 11), "UTC")
        assert occurs_on(occurrence, pendulum.date(2025, 3, 12), "UTC")
        assert not occurs_on(occurrence, pendulum.date(2025, 3, 9), "UTC")
        assert not occurs_on(occurrence, pendulum.date(2025, 3, 13), "UTC")

    def test_calendar_day_follows_timezone(self):
        occurrence = _event(1, "2025-03-10T01:00:00", "2025-03-10T02:00:00")
        # 01:00 UTC is still the 9th in Sao Paulo
        assert occurs_on(occurrence, pendulum.date(2025, 3, 9), "America/Sao_Paulo")
        assert not occurs_on(occurrence, pendulum.date(2025, 3, 10), "America/Sao_Paulo")


# ---------------------------------------------------------------------------
# Hour placement
# ---------------------------------------------------------------------------

class TestHourPlacement:
    def test_point_in_half_hour(self):
        start = pendulum.datetime(2025, 3, 10, 10, 30, tz="UTC")
        top, height = hour_placement(start, start, 10)
        assert top == 50
        assert 0 <= height <= 50

    def test_full_hour_in_the_middle(self):
        start = pendulum.datetime(2025, 3, 10, 9, 15, tz="UTC")
        end = pendulum.datetime(2025, 3, 10, 11, 45, tz="UTC")
        assert hour_placement(start, end, 10) == (0.0, 100.0)
        assert hour_placement(start, end, 9) == (25.0, 75.0)
        assert hour_placement(start, end, 11) == (0.0, 75.0)

    def test_negative_height_raises(self):
        start = pendulum.datetime(2025, 3, 10, 10, 45, tz="UTC")
        end = pendulum.datetime(2025, 3, 10, 10, 15, tz="UTC")
        with pytest.raises(BucketingError):
            hour_placement(start, end, 10)


class TestBucketHours:
    def test_point_lands_in_its_hour_only(self):
        occurrence = _event(1, "2025-03-10T10:30:00", "2025-03-10T10:30:00")
        slots, errors = bucket_hours([occurrence], pendulum.date(2025, 3, 10), tz="UTC")
        assert errors == []
        assert [slot["hour"] for slot in slots] == list(range(8, 19))
        placed = {slot["hour"]: slot["occurrences"] for slot in slots if slot["occurrences"]}
        assert list(placed) == [10]
        assert placed[10][0]["top_percent"] == 50
        assert 0 <= placed[10][0]["height_percent"] <= 50

    def test_hour_range_is_configurable(self):
        slots, _ = bucket_hours([], pendulum.date(2025, 3, 10), 6, 9, "UTC")
        assert [slot["hour"] for slot in slots] == [6, 7, 8, 9]

    def test_multi_day_event_is_clamped_to_the_day(self):
        occurrence = _event(1, "2025-03-10T09:00:00", "2025-03-12T17:00:00")
        day = pendulum.date(2025, 3, 11)
        start, end = clamp_to_day(occurrence, day, "UTC")
        assert start == pendulum.datetime(2025, 3, 11, tz="UTC")
        assert end.date() == day
        slots, _ = bucket_hours([occurrence], day, tz="UTC")
        assert all(len(slot["occurrences"]) == 1 for slot in slots)
        assert all(slot["occurrences"][0]["height_percent"] == 100 for slot in slots)

    def test_middle_day_fills_the_last_hour_of_the_day(self):
        occurrence = _event(1, "2025-03-10T09:00:00", "2025-03-12T17:00:00")
        slots, errors = bucket_hours([occurrence], pendulum.date(2025, 3, 11), 20, 23, "UTC")
        assert errors == []
        heights = {
            slot["hour"]: slot["occurrences"][0]["height_percent"] for slot in slots
        }
        assert heights == {20: 100, 21: 100, 22: 100, 23: 100}

    def test_end_within_the_last_hour_is_kept(self):
        occurrence = _event(1, "2025-03-11T23:00:00", "2025-03-11T23:30:00")
        slots, _ = bucket_hours([occurrence], pendulum.date(2025, 3, 11), 23, 23, "UTC")
        assert slots[0]["occurrences"][0]["height_percent"] == 50

    def test_bad_occurrence_becomes_an_error(self):
        good = _event(1, "2025-03-10T10:00:00", "2025-03-10T11:00:00")
        bad = dict(good, id="broken", start="not a datetime")
        slots, errors = bucket_hours([bad, good], pendulum.date(2025, 3, 10), tz="UTC")
        assert len(errors) == 1
        assert errors[0]["occurrence_id"] == "broken"
        assert errors[0]["message"]
        slot_10 = next(slot for slot in slots if slot["hour"] == 10)
        assert [p["occurrence"]["id"] for p in slot_10["occurrences"]] == ["1"]

    def test_negative_height_is_reported_on_the_slot(self):
        good = _event(1, "2025-03-10T10:00:00", "2025-03-10T11:00:00")
        backwards = dict(
            good,
            id="backwards",
            start=pendulum.datetime(2025, 3, 10, 10, 45, tz="UTC"),
            end=pendulum.datetime(2025, 3, 10, 10, 15, tz="UTC"),
        )
        slots, errors = bucket_hours([backwards, good], pendulum.date(2025, 3, 10), tz="UTC")
        assert errors == []
        slot_10 = next(slot for slot in slots if slot["hour"] == 10)
        assert [error["occurrence_id"] for error in slot_10["errors"]] == ["backwards"]
        assert slot_10["errors"][0]["hour"] == 10
        assert [p["occurrence"]["id"] for p in slot_10["occurrences"]] == ["1"]


class TestBucketDay:
    def test_all_day_items_stay_out_of_hours(self):
        timed = _event(1, "2025-03-14T10:00:00", "2025-03-14T11:00:00")
        all_day = _event(2, "2025-03-14", "2025-03-14", all_day=True)
        bucket = bucket_day([timed, all_day], pendulum.date(2025, 3, 14), tz="UTC")
        assert [o["id"] for o in bucket["occurrences"]] == ["1", "2"]
        assert [o["id"] for o in bucket["all_day"]] == ["2"]
        placed = [p["occurrence"]["id"] for slot in bucket["hours"] for p in slot["occurrences"]]
        assert "2" not in placed

    def test_empty_day_has_no_errors(self):
        bucket = bucket_day([], pendulum.date(2025, 3, 14), tz="UTC")
        assert bucket["occurrences"] == []
        assert bucket["errors"] == []
        assert len(bucket["hours"]) == 11

    def test_malformed_occurrence_does_not_hide_siblings(self):
        good = _event(1, "2025-03-14T10:00:00", "2025-03-14T11:00:00")
        bad = dict(good, id="broken", start=None)
        buckets = bucket_days([bad, good], [pendulum.date(2025, 3, 14)], tz="UTC")
        assert [o["id"] for o in buckets[0]["occurrences"]] == ["1"]
        assert [error["occurrence_id"] for error in buckets[0]["errors"]] == ["broken"]


# ---------------------------------------------------------------------------
# Month grid
# ---------------------------------------------------------------------------

class TestMonthCells:
    def test_cap_and_overflow(self):
        day = pendulum.date(2025, 3, 10)
        occurrences = [
            _event(i, "2025-03-10T10:00:00", "2025-03-10T11:00:00") for i in range(5)
        ]
        cells = month_cells(
            occurrences, [day], pendulum.date(2025, 3, 1), pendulum.date(2025, 3, 10), 3, "UTC"
        )
        assert len(cells[0]["occurrences"]) == 3
        assert cells[0]["overflow"] == 2
        assert cells[0]["is_today"] is True

    def test_padding_days_are_outside_the_month(self):
        days = [pendulum.date(2025, 2, 28), pendulum.date(2025, 3, 1)]
        cells = month_cells(
            [], days, pendulum.date(2025, 3, 15), pendulum.date(2025, 1, 1), tz="UTC"
        )
        assert [cell["in_current_month"] for cell in cells] == [False, True]
        assert all(cell["overflow"] == 0 for cell in cells)

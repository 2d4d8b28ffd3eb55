# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from bizcal.configuration import Configuration
from bizcal.model.calendar import CalendarViewModel
from bizcal.model.filter import FilterState
from bizcal.model.occurrence import Occurrence
from bizcal.model.view import ViewContext, ViewMode
from bizcal.query.filter import filter_occurrences
from bizcal.query.filter_type import EventCategory
from bizcal.service.agenda import agenda_occurrences
from bizcal.service.bucket import bucket_days, month_cells
from bizcal.service.visible_range import visible_range


def build_view_context(
    view_mode: ViewMode,
    anchor: pendulum.Date,
    now: pendulum.DateTime,
    config: Configuration,
) -> ViewContext:
    return {
        "view_mode": view_mode,
        "anchor": anchor,
        "now": now.in_tz(config["timezone"]),
        "tz": config["timezone"],
        "hour_start": config["hour_start"],
        "hour_end": config["hour_end"],
        "month_cell_limit": config["month_cell_limit"],
        "agenda_window_days": config["agenda_window_days"],
    }


def compute_calendar(
    context: ViewContext,
    occurrences: list[Occurrence],
    filter_state: Optional[FilterState] = None,
    category: EventCategory = EventCategory.ALL,
    search: Optional[str] = None,
) -> CalendarViewModel:
    """
    Derive everything the active view mode renders.

    Nothing is cached: the model is rebuilt from the occurrences on every call.
    """
    filtered = filter_occurrences(occurrences, filter_state, category, search)
    shown = visible_range(
        context["view_mode"], context["anchor"], context["agenda_window_days"]
    )

    model: CalendarViewModel = {
        "context": context,
        "range": shown,
        "occurrences": filtered,
        "days": [],
        "month": [],
        "agenda": [],
    }

    match context["view_mode"]:
        case ViewMode.DAY | ViewMode.WEEK:
            model["days"] = bucket_days(
                filtered,
                shown["days"],
                context["hour_start"],
                context["hour_end"],
                context["tz"],
            )
        case ViewMode.MONTH:
            model["month"] = month_cells(
                filtered,
                shown["days"],
                context["anchor"],
                context["now"].date(),
                context["month_cell_limit"],
                context["tz"],
            )
        case ViewMode.AGENDA:
            model["agenda"] = agenda_occurrences(
                filtered,
                context["anchor"],
                context["agenda_window_days"],
                context["tz"],
            )

    return model

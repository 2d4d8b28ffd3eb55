# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from bizcal.model.view import NavigationAction, ViewMode, VisibleRange

DEFAULT_AGENDA_WINDOW_DAYS = 14


def _days_between(start: pendulum.Date, end: pendulum.Date) -> list[pendulum.Date]:
    days: list[pendulum.Date] = []
    current = start
    while current <= end:
        days.append(current)
        current = current.add(days=1)
    return days


def visible_days(
    view_mode: ViewMode,
    anchor: pendulum.Date,
    agenda_window_days: int = DEFAULT_AGENDA_WINDOW_DAYS,
) -> list[pendulum.Date]:
    """
    Compute the calendar days shown for a view mode around an anchor date.

    Day is the anchor alone, week runs Monday to Sunday, month is the full
    month padded out to whole weeks, and agenda spans the anchor plus or minus
    the agenda window.
    """
    match view_mode:
        case ViewMode.DAY:
            return [anchor]
        case ViewMode.WEEK:
            week_start = anchor.start_of("week")
            return [week_start.add(days=offset) for offset in range(7)]
        case ViewMode.MONTH:
            grid_start = anchor.start_of("month").start_of("week")
            grid_end = anchor.end_of("month").end_of("week")
            return _days_between(grid_start, grid_end)
        case ViewMode.AGENDA:
            return _days_between(
                anchor.subtract(days=agenda_window_days),
                anchor.add(days=agenda_window_days),
            )
    raise ValueError(f"Unknown view mode: {view_mode}")


def visible_range(
    view_mode: ViewMode,
    anchor: pendulum.Date,
    agenda_window_days: int = DEFAULT_AGENDA_WINDOW_DAYS,
) -> VisibleRange:
    return {
        "view_mode": view_mode,
        "anchor": anchor,
        "days": visible_days(view_mode, anchor, agenda_window_days),
    }


def step_anchor(
    view_mode: ViewMode,
    anchor: pendulum.Date,
    steps: int,
    agenda_window_days: int = DEFAULT_AGENDA_WINDOW_DAYS,
) -> pendulum.Date:
    """Move the anchor by whole view pages; negative steps go back."""
    match view_mode:
        case ViewMode.DAY:
            return anchor.add(days=steps)
        case ViewMode.WEEK:
            return anchor.add(days=7 * steps)
        case ViewMode.MONTH:
            return anchor.add(months=steps)
        case ViewMode.AGENDA:
            return anchor.add(days=agenda_window_days * steps)
    raise ValueError(f"Unknown view mode: {view_mode}")


def navigate(
    view_mode: ViewMode,
    anchor: pendulum.Date,
    action: NavigationAction,
    today: Optional[pendulum.Date] = None,
    picked: Optional[pendulum.Date] = None,
    agenda_window_days: int = DEFAULT_AGENDA_WINDOW_DAYS,
) -> pendulum.Date:
    match action:
        case NavigationAction.PREVIOUS:
            return step_anchor(view_mode, anchor, -1, agenda_window_days)
        case NavigationAction.NEXT:
            return step_anchor(view_mode, anchor, 1, agenda_window_days)
        case NavigationAction.TODAY:
            if today is None:
                raise ValueError("Navigating to today requires the current date")
            return today
        case NavigationAction.PICK:
            if picked is None:
                raise ValueError("Picking a date requires a date")
            return picked
    raise ValueError(f"Unknown navigation action: {action}")

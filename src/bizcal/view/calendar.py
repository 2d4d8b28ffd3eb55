# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from bizcal.color import (
    EVENT_COLORS,
    EVENT_TYPE_LABELS,
    OUTSIDE_MONTH_STYLE,
    OVERDUE_STYLE,
    TASK_STATUS_COLORS,
    TODAY_STYLE,
    WEEKEND_STYLE,
    color_for_key,
)
from bizcal.model.bucket import BucketError, HourSlot, MonthCell
from bizcal.model.calendar import CalendarViewModel
from bizcal.model.occurrence import Occurrence, OccurrenceKind
from bizcal.service.agenda import is_overdue
from bizcal.time import (
    date_to_display_str,
    datetime_to_display_datetime_str,
    datetime_to_display_time_str,
)
from bizcal.view.header import header
from bizcal.view.state import get_show_legend

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def calendar_day_view(model: CalendarViewModel, source: Optional[str] = None) -> None:
    """
    Display a single day: all-day items first, then the hourly grid.

    Args:
        model: The computed calendar for a day view
        source: Description of where the data came from, for the header
    """
    day = model["range"]["anchor"]
    header(f"Day {date_to_display_str(day)}", source)
    _render_hour_grid(model, day_width=60)


def calendar_week_view(model: CalendarViewModel, source: Optional[str] = None) -> None:
    """
    Display Monday to Sunday side by side on the hourly grid.

    Args:
        model: The computed calendar for a week view
        source: Description of where the data came from, for the header
    """
    days = model["range"]["days"]
    header(
        f"Week {days[0].format('DD')} - {days[-1].format('DD MMM, YYYY')}",
        source,
    )
    _render_hour_grid(model, day_width=18)


def calendar_month_view(model: CalendarViewModel, source: Optional[str] = None) -> None:
    """
    Display the month grid padded to whole weeks.

    Each cell lists up to the configured number of occurrences and counts the
    rest as "+N mais".
    """
    anchor = model["range"]["anchor"]
    header(anchor.format("MMMM YYYY"), source)

    console = Console()
    console.print(_render_month_grid(model["month"]))
    _render_legend(console)


def calendar_agenda_view(
    model: CalendarViewModel, source: Optional[str] = None
) -> None:
    """
    Display the agenda window as a chronological list grouped by start day.
    """
    context = model["context"]
    days = model["range"]["days"]
    header(
        f"Agenda {date_to_display_str(days[0])} - {date_to_display_str(days[-1])}",
        source,
    )

    console = Console()
    today = context["now"].date()
    current_day: Optional[pendulum.Date] = None

    if not model["agenda"]:
        console.print("\n[dim]No occurrences in this period[/dim]\n")
        return

    for occurrence in model["agenda"]:
        start = occurrence["start"].in_tz(context["tz"])
        if start.date() != current_day:
            current_day = start.date()
            render_day_header(console, current_day, today)
        console.print(_agenda_line(occurrence, context["now"], context["tz"]))

    console.print()
    _render_legend(console)


def upcoming_view(
    occurrences: list[Occurrence],
    now: pendulum.DateTime,
    tz: str,
    source: Optional[str] = None,
) -> None:
    """Display the next events from now on."""
    header("Upcoming events", source)

    console = Console()
    if not occurrences:
        console.print("\n[dim]No upcoming events[/dim]\n")
        return

    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    table.add_column("When", style="bold")
    table.add_column("Title")
    table.add_column("Type", style="dim")
    table.add_column("Project", style="dim")
    table.add_column("Client", style="dim")
    for occurrence in occurrences:
        color = color_for_key(occurrence["color_key"])
        table.add_row(
            datetime_to_display_datetime_str(occurrence["start"].in_tz(tz)),
            Text(occurrence["title"], style=color),
            EVENT_TYPE_LABELS.get(occurrence["event_type"], occurrence["event_type"]),
            occurrence["project_name"],
            occurrence["client_name"],
        )
    console.print(table)


def render_day_header(
    console: Console, day: pendulum.Date, today: pendulum.Date
) -> None:
    date_str = date_to_display_str(day)
    if day == today:
        console.print(f"\n• [{TODAY_STYLE}]{date_str}[/{TODAY_STYLE}]")
    elif day.day_of_week in (pendulum.SATURDAY, pendulum.SUNDAY):
        console.print(f"\n• [{WEEKEND_STYLE}]{date_str}[/{WEEKEND_STYLE}]")
    else:
        console.print(f"\n• [bold]{date_str}[/bold]")


def _day_column_header(day: pendulum.Date, today: pendulum.Date) -> Text:
    label = f"{WEEKDAY_NAMES[day.day_of_week]} {day.day:2d}"
    if day == today:
        return Text(label, style=TODAY_STYLE)
    if day.day_of_week in (pendulum.SATURDAY, pendulum.SUNDAY):
        return Text(label, style=WEEKEND_STYLE)
    return Text(label, style="bold")


def _truncate(text: str, width: int) -> str:
    if width <= 3:
        return text[: max(width, 0)]
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def _render_hour_grid(model: CalendarViewModel, day_width: int) -> None:
    context = model["context"]
    buckets = model["days"]
    today = context["now"].date()

    console = Console()
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    table.add_column("", style="dim", width=7)
    for bucket in buckets:
        table.add_column(_day_column_header(bucket["day"], today), width=day_width)

    # All-day band
    if any(bucket["all_day"] for bucket in buckets):
        all_day_cells: list[Text] = []
        for bucket in buckets:
            cell = Text()
            for occurrence in bucket["all_day"]:
                color = color_for_key(occurrence["color_key"])
                cell.append("■ ", style=color)
                cell.append(
                    _truncate(occurrence["title"], day_width - 2) + "\n", style=color
                )
            all_day_cells.append(cell)
        table.add_row(Text("all-day", style="dim"), *all_day_cells)
        table.add_section()

    for hour_index in range(context["hour_end"] - context["hour_start"] + 1):
        hour = context["hour_start"] + hour_index
        cells: list[Text] = []
        for bucket in buckets:
            slot = bucket["hours"][hour_index] if bucket["hours"] else None
            cells.append(
                _render_hour_cell(slot, bucket["day"], context["tz"], day_width)
            )
        time_label = Text(f"{hour:02d}:00")
        if hour == 12:
            time_label.stylize("bold black on yellow")
        table.add_row(time_label, *cells)

    console.print()
    console.print(table)

    errors = [error for bucket in buckets for error in bucket["errors"]]
    _render_errors(console, errors)
    _render_legend(console)


def _render_hour_cell(
    slot: Optional[HourSlot], day: pendulum.Date, tz: str, width: int
) -> Text:
    cell = Text()
    if slot is None:
        return cell

    for positioned in slot["occurrences"]:
        occurrence = positioned["occurrence"]
        color = color_for_key(occurrence["color_key"])
        start = occurrence["start"].in_tz(tz)
        if start.date() == day and start.hour == slot["hour"]:
            prefix = f"■ {datetime_to_display_time_str(start)} "
        else:
            prefix = "│ "
        cell.append(prefix, style=color)
        cell.append(_truncate(occurrence["title"], width - len(prefix)) + "\n", style=color)

    if slot["errors"]:
        cell.append(f"! {len(slot['errors'])} not shown\n", style=OVERDUE_STYLE)
    return cell


def _render_month_grid(cells: list[MonthCell]) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    for day_name in WEEKDAY_NAMES:
        table.add_column(day_name, style="bold", width=18)

    row: list[Text] = []
    for cell in cells:
        row.append(_render_month_cell(cell, 18))
        if len(row) == 7:
            table.add_row(*row)
            row = []
    if row:
        table.add_row(*row)
    return table


def _render_month_cell(cell: MonthCell, width: int) -> Text:
    content = Text()
    day = cell["day"]

    if cell["is_today"]:
        content.append(f"{day.day:2d}   \n", style=TODAY_STYLE)
    elif not cell["in_current_month"]:
        content.append(f"{day.day:2d}\n", style=OUTSIDE_MONTH_STYLE)
    elif day.day_of_week in (pendulum.SATURDAY, pendulum.SUNDAY):
        content.append(f"{day.day:2d}   \n", style=WEEKEND_STYLE)
    else:
        content.append(f"{day.day:2d}\n", style="bold")

    for occurrence in cell["occurrences"]:
        color = color_for_key(occurrence["color_key"])
        content.append("■ ", style=color)
        content.append(_truncate(occurrence["title"], width - 2) + "\n", style=color)

    if cell["overflow"] > 0:
        content.append(f"  + {cell['overflow']} mais\n", style="dim")
    if cell["errors"]:
        content.append(f"! {len(cell['errors'])} not shown\n", style=OVERDUE_STYLE)
    return content


def _agenda_line(occurrence: Occurrence, now: pendulum.DateTime, tz: str) -> Text:
    color = color_for_key(occurrence["color_key"])
    line = Text("  ")

    if occurrence["all_day"]:
        line.append("all day      ", style="dim")
    else:
        start = datetime_to_display_time_str(occurrence["start"].in_tz(tz))
        end = datetime_to_display_time_str(occurrence["end"].in_tz(tz))
        line.append(f"{start}-{end}  ", style="dim")

    line.append("■ ", style=color)
    line.append(occurrence["title"], style=color)

    details: list[str] = []
    if occurrence["project_name"]:
        details.append(occurrence["project_name"])
    if occurrence["client_name"]:
        details.append(occurrence["client_name"])
    if occurrence["kind"] == OccurrenceKind.TASK:
        if occurrence["assignee_name"]:
            details.append(occurrence["assignee_name"])
    if occurrence["kind"] == OccurrenceKind.PROJECT:
        details.append(f"{occurrence['progress_percent']}%")
    if details:
        line.append(f"  ({', '.join(details)})", style="dim")
    if occurrence["kind"] == OccurrenceKind.TASK and occurrence["status"]:
        status = occurrence["status"]
        line.append(f"  [{status}]", style=TASK_STATUS_COLORS.get(status, "dim"))

    if is_overdue(occurrence, now):
        line.append("  overdue", style=OVERDUE_STYLE)
    return line


def _render_errors(console: Console, errors: list[BucketError]) -> None:
    if not errors:
        return
    console.print(
        f"[{OVERDUE_STYLE}]{len(errors)} occurrence(s) could not be placed, "
        f"see the log for details[/{OVERDUE_STYLE}]"
    )


def _render_legend(console: Console) -> None:
    if not get_show_legend():
        return
    legend = Text()
    for event_type, color in EVENT_COLORS.items():
        legend.append("■ ", style=color)
        legend.append(f"{EVENT_TYPE_LABELS.get(event_type, event_type)}  ", style="dim")
    console.print(legend)
    console.print()

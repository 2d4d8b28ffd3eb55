# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from yaml import YAMLError

from bizcal.model.filter import FilterState
from bizcal.model.occurrence import Occurrence
from bizcal.model.record import CalendarData
from bizcal.model.view import ViewMode
from bizcal.query.filter import filter_occurrences
from bizcal.query.filter_type import EventCategory
from bizcal.repository.calendar_data import CalendarDataRepository
from bizcal.repository.configuration import CONFIGURATION_REPO
from bizcal.service.agenda import DEFAULT_UPCOMING_LIMIT, upcoming_occurrences
from bizcal.service.calendar import build_view_context, compute_calendar
from bizcal.service.unify import unify_occurrences
from bizcal.service.visible_range import step_anchor
from bizcal.terminal.custom_typer import OrderedTyperGroup
from bizcal.terminal.parse import parse_date
from bizcal.time import now_in_tz
from bizcal.view import state as view_state
from bizcal.view.calendar import (
    calendar_agenda_view,
    calendar_day_view,
    calendar_month_view,
    calendar_week_view,
    upcoming_view,
)

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

app = typer.Typer(cls=OrderedTyperGroup, invoke_without_command=True)

DateOption = Annotated[
    Optional[pendulum.Date],
    typer.Option(
        "--date",
        "-d",
        parser=parse_date,
        help="Anchor date, valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
    ),
]
PreviousOption = Annotated[
    int,
    typer.Option(
        "--previous", "-pv", min=0, help="Number of pages to move back from the date"
    ),
]
NextOption = Annotated[
    int,
    typer.Option(
        "--next", "-nx", min=0, help="Number of pages to move forward from the date"
    ),
]
SourceOption = Annotated[
    Optional[Path],
    typer.Option(
        "--source",
        "-s",
        exists=True,
        dir_okay=False,
        help="Read collections from a YAML or JSON snapshot instead of the API",
    ),
]
ApiOption = Annotated[
    Optional[str],
    typer.Option("--api", help="API base URL, overrides the configured one"),
]
ProjectOption = Annotated[
    Optional[list[str]],
    typer.Option("--project", "-p", help="Only show items of these project ids"),
]
AssigneeOption = Annotated[
    Optional[list[str]],
    typer.Option("--assignee", "-as", help="Only show tasks assigned to these user ids"),
]
TypeOption = Annotated[
    Optional[list[str]],
    typer.Option("--type", "-t", help="Only show these event types"),
]
StatusOption = Annotated[
    Optional[list[str]],
    typer.Option("--status", "-st", help="Only show tasks with these statuses"),
]
CategoryOption = Annotated[
    EventCategory,
    typer.Option("--category", "-c", help="Only show one category of event types"),
]
SearchOption = Annotated[
    Optional[str],
    typer.Option("--search", "-q", help="Only show items whose title contains this"),
]
NoLegendOption = Annotated[
    bool,
    typer.Option("--no-legend", "-nl", help="Do not print the color legend"),
]


def load_calendar_data(
    source: Optional[Path], api: Optional[str]
) -> tuple[CalendarData, str]:
    """
    Read the collections from a snapshot file or from the API.

    Returns:
        The collections and a description of where they came from
    """
    config = CONFIGURATION_REPO.get_config()

    if source is not None:
        repository = CalendarDataRepository()
        try:
            data = repository.load_snapshot(source)
        except (OSError, ValueError, YAMLError) as e:
            err_console.print(f"[red]Could not read snapshot {source}: {e}[/red]")
            raise typer.Exit(1)
        return data, str(source)

    base_url = api if api is not None else config["api_base_url"]
    if not base_url:
        err_console.print(
            "[red]No data source. Pass --source or --api, or set one with "
            "'bizcal config set --api-base-url'.[/red]"
        )
        raise typer.Exit(1)

    repository = CalendarDataRepository(
        base_url=base_url,
        api_token=config["api_token"],
        timeout=config["request_timeout"],
    )
    return repository.data, base_url


def load_occurrences(
    source: Optional[Path], api: Optional[str]
) -> tuple[list[Occurrence], str]:
    data, origin = load_calendar_data(source, api)
    occurrences = unify_occurrences(
        data["events"],
        data["tasks"],
        data["projects"],
        data["clients"],
        data["users"],
        tz=CONFIGURATION_REPO.get_config()["timezone"],
    )
    logger.debug("Unified %d occurrences from %s", len(occurrences), origin)
    return occurrences, origin


def build_filter_state(
    project: Optional[list[str]],
    assignee: Optional[list[str]],
    event_type: Optional[list[str]],
    status: Optional[list[str]],
) -> FilterState:
    filter_state: FilterState = {}
    if project:
        filter_state["project"] = list(project)
    if assignee:
        filter_state["assignee"] = list(assignee)
    if event_type:
        filter_state["type"] = list(event_type)
    if status:
        filter_state["status"] = list(status)
    return filter_state


def show_calendar(
    view_mode: ViewMode,
    date: Optional[pendulum.Date] = None,
    previous: int = 0,
    next: int = 0,
    source: Optional[Path] = None,
    api: Optional[str] = None,
    project: Optional[list[str]] = None,
    assignee: Optional[list[str]] = None,
    event_type: Optional[list[str]] = None,
    status: Optional[list[str]] = None,
    category: EventCategory = EventCategory.ALL,
    search: Optional[str] = None,
    no_legend: bool = False,
) -> None:
    config = CONFIGURATION_REPO.get_config()
    now = now_in_tz(config["timezone"])

    anchor = date if date is not None else now.date()
    anchor = step_anchor(
        view_mode, anchor, next - previous, config["agenda_window_days"]
    )

    view_state.set_show_legend(not no_legend)

    occurrences, origin = load_occurrences(source, api)
    context = build_view_context(view_mode, anchor, now, config)
    model = compute_calendar(
        context,
        occurrences,
        build_filter_state(project, assignee, event_type, status),
        category,
        search,
    )

    match view_mode:
        case ViewMode.DAY:
            calendar_day_view(model, origin)
        case ViewMode.WEEK:
            calendar_week_view(model, origin)
        case ViewMode.MONTH:
            calendar_month_view(model, origin)
        case ViewMode.AGENDA:
            calendar_agenda_view(model, origin)


@app.callback()
def view_callback(ctx: typer.Context) -> None:
    """
    Calendar views of events, task deadlines and project milestones.

    Without a command the configured default view is shown for today.
    """
    if ctx.invoked_subcommand is not None:
        return

    default_view = CONFIGURATION_REPO.get_config()["default_view"]
    try:
        view_mode = ViewMode(default_view)
    except ValueError:
        raise typer.BadParameter(
            f"Unknown default view '{default_view}', expected one of "
            f"{', '.join(mode.value for mode in ViewMode)}"
        )
    show_calendar(view_mode)


@app.command("day, d")
def day(
    date: DateOption = None,
    previous: PreviousOption = 0,
    next: NextOption = 0,
    source: SourceOption = None,
    api: ApiOption = None,
    project: ProjectOption = None,
    assignee: AssigneeOption = None,
    event_type: TypeOption = None,
    status: StatusOption = None,
    category: CategoryOption = EventCategory.ALL,
    search: SearchOption = None,
    no_legend: NoLegendOption = False,
) -> None:
    """Display one day: all-day items and the hourly grid."""
    show_calendar(
        ViewMode.DAY,
        date,
        previous,
        next,
        source,
        api,
        project,
        assignee,
        event_type,
        status,
        category,
        search,
        no_legend,
    )


@app.command("week, w")
def week(
    date: DateOption = None,
    previous: PreviousOption = 0,
    next: NextOption = 0,
    source: SourceOption = None,
    api: ApiOption = None,
    project: ProjectOption = None,
    assignee: AssigneeOption = None,
    event_type: TypeOption = None,
    status: StatusOption = None,
    category: CategoryOption = EventCategory.ALL,
    search: SearchOption = None,
    no_legend: NoLegendOption = False,
) -> None:
    """Display the Monday to Sunday week containing the date."""
    show_calendar(
        ViewMode.WEEK,
        date,
        previous,
        next,
        source,
        api,
        project,
        assignee,
        event_type,
        status,
        category,
        search,
        no_legend,
    )


@app.command("month, m")
def month(
    date: DateOption = None,
    previous: PreviousOption = 0,
    next: NextOption = 0,
    source: SourceOption = None,
    api: ApiOption = None,
    project: ProjectOption = None,
    assignee: AssigneeOption = None,
    event_type: TypeOption = None,
    status: StatusOption = None,
    category: CategoryOption = EventCategory.ALL,
    search: SearchOption = None,
    no_legend: NoLegendOption = False,
) -> None:
    """Display the month containing the date, padded to whole weeks."""
    show_calendar(
        ViewMode.MONTH,
        date,
        previous,
        next,
        source,
        api,
        project,
        assignee,
        event_type,
        status,
        category,
        search,
        no_legend,
    )


@app.command("agenda, a")
def agenda(
    date: DateOption = None,
    previous: PreviousOption = 0,
    next: NextOption = 0,
    source: SourceOption = None,
    api: ApiOption = None,
    project: ProjectOption = None,
    assignee: AssigneeOption = None,
    event_type: TypeOption = None,
    status: StatusOption = None,
    category: CategoryOption = EventCategory.ALL,
    search: SearchOption = None,
    no_legend: NoLegendOption = False,
) -> None:
    """Display a chronological list of the days around the date."""
    show_calendar(
        ViewMode.AGENDA,
        date,
        previous,
        next,
        source,
        api,
        project,
        assignee,
        event_type,
        status,
        category,
        search,
        no_legend,
    )


@app.command("upcoming, u")
def upcoming(
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, help="Number of events to show"),
    ] = DEFAULT_UPCOMING_LIMIT,
    source: SourceOption = None,
    api: ApiOption = None,
    project: ProjectOption = None,
    event_type: TypeOption = None,
    category: CategoryOption = EventCategory.ALL,
    search: SearchOption = None,
) -> None:
    """Display the next calendar events from now on."""
    config = CONFIGURATION_REPO.get_config()
    now = now_in_tz(config["timezone"])

    occurrences, origin = load_occurrences(source, api)
    filtered = filter_occurrences(
        occurrences,
        build_filter_state(project, None, event_type, None),
        category,
        search,
    )
    upcoming_view(
        upcoming_occurrences(filtered, now, limit), now, config["timezone"], origin
    )

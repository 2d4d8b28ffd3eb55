# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from bizcal import configuration
from bizcal.configuration import Configuration
from bizcal.model.view import ViewMode
from bizcal.repository.configuration import CONFIGURATION_REPO
from bizcal.terminal.custom_typer import OrderedTyperGroup
from bizcal.terminal.parse import parse_hour

app = typer.Typer(cls=OrderedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _config_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("api_base_url", config["api_base_url"] or "None")
    table.add_row("api_token", "✓ Set" if config["api_token"] else "✗ Not set")
    table.add_row("request_timeout", f"{config['request_timeout']}s")
    table.add_row("timezone", config["timezone"])
    table.add_row("hours", f"{config['hour_start']:02d}:00 - {config['hour_end']:02d}:00")
    table.add_row("month_cell_limit", str(config["month_cell_limit"]))
    table.add_row("agenda_window_days", str(config["agenda_window_days"]))
    table.add_row("default_view", config["default_view"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    return table


@app.command("show, s")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_config_table(config))
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")


@app.command("set, st")
def set(
    api_base_url: Annotated[
        Optional[str],
        typer.Option("--api-base-url", help="Base URL of the business API"),
    ] = None,
    remove_api_base_url: Annotated[
        bool,
        typer.Option("--remove-api-base-url", help="Forget the API base URL"),
    ] = False,
    api_token: Annotated[
        Optional[str],
        typer.Option("--api-token", help="Bearer token sent with every request"),
    ] = None,
    remove_api_token: Annotated[
        bool,
        typer.Option("--remove-api-token", help="Stop sending a bearer token"),
    ] = False,
    request_timeout: Annotated[
        Optional[float],
        typer.Option("--request-timeout", min=0.1, help="Request timeout in seconds"),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone", help="Timezone for days and hours, e.g. America/Sao_Paulo"
        ),
    ] = None,
    hour_start: Annotated[
        Optional[int],
        typer.Option(
            "--hour-start",
            parser=parse_hour,
            help="First hour of the day and week grids (e.g. 8 or 08:00)",
        ),
    ] = None,
    hour_end: Annotated[
        Optional[int],
        typer.Option(
            "--hour-end",
            parser=parse_hour,
            help="Last hour of the day and week grids (e.g. 18 or 18:00)",
        ),
    ] = None,
    month_cell_limit: Annotated[
        Optional[int],
        typer.Option(
            "--month-cell-limit", min=1, help="Items listed per month cell"
        ),
    ] = None,
    agenda_window_days: Annotated[
        Optional[int],
        typer.Option(
            "--agenda-window-days",
            min=1,
            help="Days shown on each side of the agenda date",
        ),
    ] = None,
    default_view: Annotated[
        Optional[ViewMode],
        typer.Option("--default-view", help="View shown by a bare 'bizcal view'"),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header", help="Print the view header"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=f"One of {', '.join(LOG_LEVELS)}"),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Unknown log level {log_level}", param_hint="--log-level"
        )
    if timezone is not None and timezone != "local":
        try:
            pendulum.timezone(timezone)
        except (KeyError, ValueError):
            raise typer.BadParameter(
                f"Unknown timezone {timezone}", param_hint="--timezone"
            )

    try:
        CONFIGURATION_REPO.update_config(
            api_base_url=api_base_url,
            remove_api_base_url=remove_api_base_url,
            api_token=api_token,
            remove_api_token=remove_api_token,
            request_timeout=request_timeout,
            timezone=timezone,
            hour_start=hour_start,
            hour_end=hour_end,
            month_cell_limit=month_cell_limit,
            agenda_window_days=agenda_window_days,
            default_view=default_view.value if default_view is not None else None,
            show_header=show_header,
            log_level=log_level.upper() if log_level is not None else None,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    CONFIGURATION_REPO.flush()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table(CONFIGURATION_REPO.get_config(), "Updated Configuration"))

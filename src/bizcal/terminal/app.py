# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from bizcal.terminal import configuration, view
from bizcal.terminal.custom_typer import OrderedTyperGroup
from bizcal.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="bizcal - Business calendar in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(view.app, name="view, v")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    bizcal - Business calendar in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()

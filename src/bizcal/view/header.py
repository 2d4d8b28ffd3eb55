# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from bizcal.view.state import get_show_header


def header(title: str, source: Optional[str] = None) -> None:
    """Print the application header with the view title and data source."""
    if not get_show_header():
        return

    print(Padding("[dark_orange]bizcal[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(f"[sandy_brown]{title}[/sandy_brown]", (0, 1)))
    if source is not None:
        print(Padding(f"[plum1]{source}[/plum1]", (0, 1)))

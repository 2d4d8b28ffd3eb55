"""Rendering switches shared by the calendar views."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Whether views print the application header; on unless disabled
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)

# Whether views print the color legend under the calendar
_show_legend_var: ContextVar[bool] = ContextVar("show_legend", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_show_legend(value: bool) -> None:
    _show_legend_var.set(value)


def get_show_legend() -> bool:
    return _show_legend_var.get()

# SPDX-License-Identifier: MIT

from typing import Any, Mapping, TypeVar

T = TypeVar("T", bound=Mapping[str, Any])


def sort_items(items: list[T], sort_instructions: list[str]) -> list[T]:
    """
    Sort items by one or more columns, e.g. ``["start"]`` or ``["desc end", "title"]``.

    Sorting is stable, so items that compare equal keep their input order.
    Items whose column is None sort after all others.
    """
    sorted_items = list(items)

    for sort_instruction in reversed(sort_instructions):
        descending = False
        column = sort_instruction
        if " " in sort_instruction:
            direction, column = sort_instruction.split(" ")
            if direction == "desc":
                descending = True
        none_items = [item for item in sorted_items if item.get(column) is None]
        value_items = [item for item in sorted_items if item.get(column) is not None]
        value_items.sort(key=lambda item: item[column], reverse=descending)
        sorted_items = value_items + none_items

    return sorted_items

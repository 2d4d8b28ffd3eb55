# SPDX-License-Identifier: MIT

from typing import TypedDict

from bizcal.model.record import RecordId
from bizcal.query.filter_type import FilterType


class Filter(TypedDict):
    filter_type: FilterType


class BooleanFilter(Filter):
    predicates: list["Filters"]


class PropertyFilter(Filter):
    property: str
    filter: str


Filters = BooleanFilter | PropertyFilter


class FilterState(TypedDict, total=False):
    """Selected value(s) per filter dimension; absent or empty means no constraint."""

    project: RecordId | list[RecordId]
    assignee: RecordId | list[RecordId]
    type: str | list[str]
    status: str | list[str]

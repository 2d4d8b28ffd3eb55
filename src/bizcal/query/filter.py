# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, cast

from bizcal.model.filter import (
    BooleanFilter,
    Filter,
    Filters,
    FilterState,
    PropertyFilter,
)
from bizcal.model.occurrence import Occurrence
from bizcal.query.filter_type import EventCategory, FilterType

# Filter dimension -> occurrence property it is tested against
FILTER_DIMENSIONS: dict[str, str] = {
    "project": "project_id",
    "assignee": "assignee_id",
    "type": "event_type",
    "status": "status",
}

CATEGORY_EVENT_TYPES: dict[EventCategory, list[str]] = {
    EventCategory.MEETINGS: ["reuniao"],
    EventCategory.DEADLINES: ["prazo"],
    EventCategory.TASKS: ["gravacao", "edicao"],
    EventCategory.APPOINTMENTS: ["externo"],
    EventCategory.REMINDERS: ["financeiro", "entrega", "despesa"],
}


def generate_filter(filter: Filters) -> "Predicate":
    filter_obj = filter_factory(filter)
    if isinstance(filter_obj, And | Or):
        for child_filter in cast(BooleanFilter, filter)["predicates"]:
            filter_obj.add_predicate(generate_filter(child_filter))
    return filter_obj


def filter_factory(filter: Filter) -> "Predicate":
    match filter["filter_type"]:
        case FilterType.AND:
            return And()
        case FilterType.OR:
            return Or()
        case FilterType.STR:
            return Str(cast(PropertyFilter, filter))
    raise ValueError(f"Unknown filter type: {filter['filter_type']}")


class Predicate(ABC):
    @abstractmethod
    def filter(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]: ...


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def filter(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        result = items
        for predicate in self.predicates:
            result = predicate.filter(result)
        return result


class Or(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def filter(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        matched: set[int] = set()
        for predicate in self.predicates:
            matched.update(id(item) for item in predicate.filter(items))
        # Keep input order and multiplicity
        return [item for item in items if id(item) in matched]


class Str(Predicate):
    def __init__(self, property_filter: PropertyFilter) -> None:
        self.property_filter = property_filter

    def filter(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        filtered_items = []

        for item in items:
            if self.__include(item):
                filtered_items.append(item)

        return filtered_items

    def __include(self, item: dict[str, Any]) -> bool:
        property = self.property_filter["property"]
        instruction, value = split_instruction(self.property_filter["filter"])

        if property in item:
            if item[property] is not None:
                match instruction:
                    case "equals":
                        return str(item[property]) == value
                    case "equals_no_case":
                        return str(item[property]).lower() == value.lower()
                    case "contains":
                        return value in str(item[property])
                    case "contains_no_case":
                        return value.lower() in str(item[property]).lower()
        return False


def split_instruction(filter: str) -> tuple[str, str]:
    instruction_value = filter.strip()
    instruction = instruction_value.split(" ")[0].strip()
    value = instruction_value[len(instruction) :].strip()

    return instruction, value


def equals_filter(property: str, value: Any) -> PropertyFilter:
    return {"filter_type": FilterType.STR, "property": property, "filter": f"equals {value}"}


def any_of_filter(property: str, values: Sequence[Any]) -> Filters:
    if len(values) == 1:
        return equals_filter(property, values[0])
    or_filter: BooleanFilter = {
        "filter_type": FilterType.OR,
        "predicates": [equals_filter(property, value) for value in values],
    }
    return or_filter


def selected_values(selection: Any) -> list[Any]:
    if selection is None:
        return []
    if isinstance(selection, list | tuple | set):
        return [value for value in selection if value is not None and value != ""]
    if selection == "":
        return []
    return [selection]


def filter_from_state(filter_state: FilterState) -> BooleanFilter:
    """
    Build the conjunction of the active filter dimensions.

    Each dimension with selected values becomes an equality test (or a
    disjunction of equality tests when several values are selected).
    """
    predicates: list[Filters] = []
    for dimension, property in FILTER_DIMENSIONS.items():
        values = selected_values(filter_state.get(dimension))
        if values:
            predicates.append(any_of_filter(property, values))
    return {"filter_type": FilterType.AND, "predicates": predicates}


def category_filter(category: EventCategory) -> Optional[Filters]:
    if category == EventCategory.ALL:
        return None
    return any_of_filter("event_type", CATEGORY_EVENT_TYPES[category])


def search_filter(text: str) -> PropertyFilter:
    return {
        "filter_type": FilterType.STR,
        "property": "title",
        "filter": f"contains_no_case {text}",
    }


def filter_occurrences(
    occurrences: list[Occurrence],
    filter_state: Optional[FilterState] = None,
    category: EventCategory = EventCategory.ALL,
    search: Optional[str] = None,
) -> list[Occurrence]:
    root = filter_from_state(filter_state or {})

    preset = category_filter(category)
    if preset is not None:
        root["predicates"].append(preset)
    if search is not None and search.strip():
        root["predicates"].append(search_filter(search.strip()))

    if not root["predicates"]:
        return list(occurrences)

    predicate = generate_filter(root)
    return cast(
        list[Occurrence],
        predicate.filter(cast(list[dict[str, Any]], list(occurrences))),
    )

# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Literal, Optional, TypedDict

import pendulum

from bizcal.model.record import RecordId


class OccurrenceKind(StrEnum):
    REGULAR = "regular"
    TASK = "task"
    PROJECT = "project"


class MilestoneKind(StrEnum):
    START = "start"
    END = "end"


class RegularOccurrence(TypedDict):
    id: str
    kind: Literal[OccurrenceKind.REGULAR]
    title: str
    description: Optional[str]
    start: pendulum.DateTime
    end: pendulum.DateTime
    all_day: bool
    event_type: str
    color_key: str
    project_id: Optional[RecordId]
    project_name: str
    client_name: str
    event_id: RecordId
    client_id: Optional[RecordId]
    location: Optional[str]


class TaskDueOccurrence(TypedDict):
    id: str
    kind: Literal[OccurrenceKind.TASK]
    title: str
    description: Optional[str]
    start: pendulum.DateTime
    end: pendulum.DateTime
    all_day: bool
    event_type: str
    color_key: str
    project_id: Optional[RecordId]
    project_name: str
    client_name: str
    task_id: RecordId
    priority: Optional[str]
    status: Optional[str]
    assignee_id: Optional[RecordId]
    assignee_name: str


class ProjectMilestoneOccurrence(TypedDict):
    id: str
    kind: Literal[OccurrenceKind.PROJECT]
    title: str
    description: Optional[str]
    start: pendulum.DateTime
    end: pendulum.DateTime
    all_day: bool
    event_type: str
    color_key: str
    project_id: Optional[RecordId]
    project_name: str
    client_name: str
    milestone: MilestoneKind
    progress_percent: int


Occurrence = RegularOccurrence | TaskDueOccurrence | ProjectMilestoneOccurrence

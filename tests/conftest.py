"""Shared fixtures for the bizcal tests."""

# SPDX-License-Identifier: MIT

import logging
from typing import Any

import pytest

from bizcal import configuration
from bizcal.repository.configuration import CONFIGURATION_REPO
from bizcal.view import state as view_state


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Point the configuration at a temporary file and forget cached state."""
    monkeypatch.setattr(configuration, "CONFIG_PATH", tmp_path / "config")
    monkeypatch.setattr(
        configuration, "APP_CONFIG_PATH", tmp_path / "config" / "config.yaml"
    )
    CONFIGURATION_REPO.reset()
    view_state.set_show_header(True)
    view_state.set_show_legend(True)
    yield
    CONFIGURATION_REPO.reset()
    app_logger = logging.getLogger("bizcal")
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
    view_state.set_show_header(True)
    view_state.set_show_legend(True)


@pytest.fixture
def events() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Kickoff meeting",
            "start_date": "2025-03-10T10:00:00",
            "end_date": "2025-03-10T11:30:00",
            "type": "reuniao",
            "project_id": 5,
            "client_id": 100,
            "location": "Office",
        },
        {
            "id": 2,
            "title": "Recording week",
            "start_date": "2025-03-10T09:00:00",
            "end_date": "2025-03-12T17:00:00",
            "type": "gravacao",
            "project_id": 6,
        },
        {
            "id": 3,
            "title": "Holiday",
            "start_date": "2025-03-14",
            "end_date": "2025-03-14",
            "type": "externo",
            "all_day": True,
        },
    ]


@pytest.fixture
def tasks() -> list[dict[str, Any]]:
    return [
        {
            "id": 10,
            "title": "Edit teaser",
            "due_date": "2025-03-11T00:00:00",
            "priority": "alta",
            "status": "pendente",
            "project_id": 5,
            "assigned_to": 200,
        },
        {
            "id": 11,
            "title": "Send invoice",
            "due_date": "2025-03-11",
            "due_time": "14:30",
            "priority": "media",
            "status": "concluido",
            "project_id": 6,
            "assigned_to": 201,
        },
    ]


@pytest.fixture
def projects() -> list[dict[str, Any]]:
    return [
        {
            "id": 5,
            "name": "Brand film",
            "startDate": "2025-03-03",
            "endDate": "2025-03-28",
            "progress": 40,
            "client_id": 100,
        },
        {
            "id": 6,
            "name": "Podcast",
            "start_date": "2025-02-01",
            "end_date": "2025-04-30",
            "progress": "75",
        },
    ]


@pytest.fixture
def clients() -> list[dict[str, Any]]:
    return [{"id": 100, "name": "Acme"}]


@pytest.fixture
def users() -> list[dict[str, Any]]:
    return [{"id": 200, "name": "Ana"}, {"id": 201, "name": "Bruno"}]


@pytest.fixture
def calendar_data(events, tasks, projects, clients, users) -> dict[str, Any]:
    return {
        "events": events,
        "tasks": tasks,
        "projects": projects,
        "clients": clients,
        "users": users,
    }

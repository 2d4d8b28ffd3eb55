# SPDX-License-Identifier: MIT

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import httpx
from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from bizcal.model.record import COLLECTIONS, CalendarData, empty_calendar_data

logger = logging.getLogger(__name__)

ENDPOINTS: dict[str, str] = {
    "events": "/api/events",
    "tasks": "/api/tasks",
    "projects": "/api/projects",
    "clients": "/api/clients",
    "users": "/api/users",
}


def _records(name: str, payload: Any) -> list[dict[str, Any]]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning("Expected a list of %s, got %s", name, type(payload).__name__)
        return []
    return [record for record in payload if isinstance(record, dict)]


class CalendarDataRepository:
    """
    Read-only access to the collections behind the calendar.

    Collections come either from the remote API, fetched concurrently, or
    from a local snapshot file. A collection that cannot be read is empty.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.api_token = api_token
        self.timeout = timeout
        self.transport = transport
        self._data: Optional[CalendarData] = None
        self._generation = 0

    @property
    def data(self) -> CalendarData:
        if self._data is None:
            self.__load_data()
        if self._data is None:
            raise ValueError("Calendar data was superseded before it arrived")
        return self._data

    def __load_data(self) -> None:
        if self.base_url is None:
            raise ValueError("No API base URL configured")
        asyncio.run(self.fetch_all())

    def invalidate(self) -> None:
        """Forget loaded data; fetches already in flight are discarded on arrival."""
        self._generation += 1
        self._data = None

    async def fetch_all(self) -> Optional[CalendarData]:
        if self.base_url is None:
            raise ValueError("No API base URL configured")

        generation = self._generation
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            results = await asyncio.gather(
                *(
                    self._fetch_collection(client, name, path)
                    for name, path in ENDPOINTS.items()
                )
            )

        if generation != self._generation:
            logger.info("Discarding calendar data from a superseded fetch")
            return None

        data = empty_calendar_data()
        for name, records in zip(ENDPOINTS, results):
            data[name] = records  # type: ignore[literal-required]
        self._data = data
        return data

    async def _fetch_collection(
        self, client: httpx.AsyncClient, name: str, path: str
    ) -> list[dict[str, Any]]:
        try:
            response = await client.get(path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.warning("Could not fetch %s from %s: %s", name, path, e)
            return []
        except ValueError as e:
            logger.warning("Malformed %s payload from %s: %s", name, path, e)
            return []
        records = _records(name, payload)
        logger.debug("Fetched %d %s", len(records), name)
        return records

    def load_snapshot(self, path: Path) -> CalendarData:
        """Load all collections from a YAML or JSON snapshot file."""
        raw = load(path.read_text(), Loader=Loader)
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f"Snapshot {path} must hold a mapping of collections")

        data = empty_calendar_data()
        for name in COLLECTIONS:
            data[name] = _records(name, raw.get(name))  # type: ignore[literal-required]
        self._generation += 1
        self._data = data
        return data

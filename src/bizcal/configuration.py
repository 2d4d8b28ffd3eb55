# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "bizcal"

CONFIG_PATH: Path = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"


class Configuration(TypedDict):
    api_base_url: Optional[str]
    api_token: Optional[str]
    request_timeout: float
    timezone: str
    hour_start: int
    hour_end: int
    month_cell_limit: int
    agenda_window_days: int
    default_view: str
    show_header: bool
    log_level: str


DEFAULT_CONFIGURATION: Configuration = {
    "api_base_url": None,
    "api_token": None,
    "request_timeout": 10.0,
    "timezone": "local",
    "hour_start": 8,
    "hour_end": 18,
    "month_cell_limit": 3,
    "agenda_window_days": 14,
    "default_view": "week",
    "show_header": True,
    "log_level": "WARNING",
}

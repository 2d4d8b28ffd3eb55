# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from bizcal import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not configuration.APP_CONFIG_PATH.is_file():
            self._config = deepcopy(configuration.DEFAULT_CONFIGURATION)
            return

        loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(
                f"Configuration file {configuration.APP_CONFIG_PATH} must hold a mapping"
            )

        # Back-fill keys added after the file was written
        config = deepcopy(configuration.DEFAULT_CONFIGURATION)
        for key in config:
            if key in loaded:
                config[key] = loaded[key]  # type: ignore[literal-required]
        self._config = config

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        api_base_url: Optional[str] = None,
        remove_api_base_url: bool = False,
        api_token: Optional[str] = None,
        remove_api_token: bool = False,
        request_timeout: Optional[float] = None,
        timezone: Optional[str] = None,
        hour_start: Optional[int] = None,
        hour_end: Optional[int] = None,
        month_cell_limit: Optional[int] = None,
        agenda_window_days: Optional[int] = None,
        default_view: Optional[str] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        new_hour_start = hour_start if hour_start is not None else self.config["hour_start"]
        new_hour_end = hour_end if hour_end is not None else self.config["hour_end"]
        if not 0 <= new_hour_start <= new_hour_end <= 23:
            raise ValueError(
                f"Hour range must satisfy 0 <= start <= end <= 23, got {new_hour_start}-{new_hour_end}"
            )

        self.is_dirty = True

        if api_base_url is not None:
            self.config["api_base_url"] = api_base_url
        if remove_api_base_url:
            self.config["api_base_url"] = None
        if api_token is not None:
            self.config["api_token"] = api_token
        if remove_api_token:
            self.config["api_token"] = None
        if request_timeout is not None:
            self.config["request_timeout"] = request_timeout
        if timezone is not None:
            self.config["timezone"] = timezone
        if hour_start is not None:
            self.config["hour_start"] = hour_start
        if hour_end is not None:
            self.config["hour_end"] = hour_end
        if month_cell_limit is not None:
            self.config["month_cell_limit"] = month_cell_limit
        if agenda_window_days is not None:
            self.config["agenda_window_days"] = agenda_window_days
        if default_view is not None:
            self.config["default_view"] = default_view
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level


CONFIGURATION_REPO = ConfigurationRepository()

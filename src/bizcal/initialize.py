# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from bizcal import configuration
from bizcal.logs import configure_logging
from bizcal.repository.configuration import CONFIGURATION_REPO
from bizcal.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = dict(configuration.DEFAULT_CONFIGURATION)
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

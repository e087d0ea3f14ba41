from atom_token.settings.app import (
    AppSettings,
    CONFIG_ENV_VAR,
    default_app_settings,
    get_app_settings,
)
from atom_token.settings.db import DBSettings
from atom_token.settings.log import LogSettings
from atom_token.settings.utils import prepare_settings, write_default_config

__all__ = (
    "AppSettings",
    "CONFIG_ENV_VAR",
    "default_app_settings",
    "get_app_settings",
    "DBSettings",
    "LogSettings",
    "prepare_settings",
    "write_default_config",
)

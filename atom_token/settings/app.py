import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from atom_token.constants import DEFAULT_APP_PORT, DEFAULT_PAGE_SIZE, DEFAULT_TOKEN_LENGTH
from atom_token.exceptions import AppSettingsError
from atom_token.settings.db import DBSettings
from atom_token.settings.log import LogSettings
from atom_token.settings.utils import prepare_settings, write_default_config

__all__ = (
    "get_app_settings",
    "default_app_settings",
    "AppSettings",
    "CONFIG_ENV_VAR",
)

CONFIG_ENV_VAR = "CONFIG"


class JsonConfigFallbackSource(JsonConfigSettingsSource):
    """
    JSON config which is a fallback for env variables on every level:
    nested sections (`db`, `log`) are merged with values of their own env variables.
    """

    def __call__(self) -> dict[str, Any]:
        data = dict(super().__call__())
        for field_name, field in self.settings_cls.model_fields.items():
            nested_class = field.annotation
            section = data.get(field_name)
            if not isinstance(section, dict) or not _is_settings_class(nested_class):
                continue

            from_env = nested_class()
            data[field_name] = section | from_env.model_dump(include=from_env.model_fields_set)

        return data


def _is_settings_class(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseSettings)


class AppSettings(BaseSettings):
    """
    Application settings which are loaded from environment variables.
    If env `CONFIG` points to a JSON file, its values are used as fallback for env ones.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_docs_enabled: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = Field(
        default=DEFAULT_APP_PORT,
        validation_alias=AliasChoices("app_port", "port"),
        serialization_alias="port",
    )
    token_length: int = Field(
        default=DEFAULT_TOKEN_LENGTH,
        ge=1,
        validation_alias=AliasChoices("token_length", "tokenLength"),
        serialization_alias="tokenLength",
        description="Length of generated tokens",
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        validation_alias=AliasChoices("page_size", "pageSize"),
        serialization_alias="pageSize",
        description="Tokens per page for listing",
    )
    token_create_max_attempts: int | None = Field(
        default_factory=lambda: None,
        ge=1,
        description="Cap for ID collisions on create (unbounded by default)",
    )
    db: DBSettings = Field(default_factory=DBSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings, dotenv_settings]
        if config_path := os.getenv(CONFIG_ENV_VAR):
            sources.append(JsonConfigFallbackSource(settings_cls, json_file=config_path))

        sources.append(file_secret_settings)
        return tuple(sources)


def default_app_settings() -> AppSettings:
    """Settings filled by field defaults only (env variables and config files are not read)"""
    return AppSettings.model_construct(
        db=DBSettings.model_construct(),
        log=LogSettings.model_construct(),
    )


@lru_cache
def get_app_settings() -> AppSettings:
    """
    Prepares application settings from environment variables.
    Missing config file (env `CONFIG`) is created with default values first.
    """
    if config_path := os.getenv(CONFIG_ENV_VAR):
        path = Path(config_path)
        if not path.exists():
            try:
                write_default_config(path, default_app_settings())
            except OSError as exc:
                raise AppSettingsError(f"Unable to create config {path}: {exc}") from exc

    return prepare_settings(AppSettings)

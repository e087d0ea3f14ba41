import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic_core import ValidationError
from pydantic_settings import BaseSettings

from atom_token.exceptions import AppSettingsError

__all__ = ("prepare_settings", "write_default_config")
TypeSettings = TypeVar("TypeSettings", bound=BaseSettings)
logger = logging.getLogger(__name__)


def prepare_settings(settings_class: type[TypeSettings]) -> TypeSettings:
    """Prepares settings from environment variables (and the CONFIG file if any)"""
    try:
        settings: TypeSettings = settings_class()
    except ValidationError as exc:
        message = str(exc.errors(include_url=False, include_input=False))
        logger.debug("Unable to validate settings (caught Validation Error): \n %s", message)
        error_message = "Unable to validate settings: "
        for error in exc.errors():
            error_message += f"\n\t[{'|'.join(map(str, error['loc']))}] {error['msg']}"
        raise AppSettingsError(error_message) from exc

    except Exception as exc:
        logger.error("Unable to prepare settings (caught unexpected): \n %r", exc)
        raise AppSettingsError(f"Unable to prepare settings: {exc}") from exc

    return settings


def write_default_config(path: Path, settings: BaseSettings) -> Path:
    """
    Dumps settings into JSON config file (creates parent directories if needed).

    :param path: target file (will be overwritten)
    :param settings: settings instance which values should be stored
    :return: path to written config
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(settings.model_dump(mode="json", by_alias=True), indent=2)
    path.write_text(content, encoding="utf-8")
    logger.info("Config file written: %s", path)
    return path

from typing import Annotated, Any

from pydantic import StringConstraints
from pydantic_settings import BaseSettings, SettingsConfigDict

from atom_token.constants import LOG_LEVELS

LogLevelString = Annotated[str, StringConstraints(to_upper=True, pattern=rf"^(?i:{LOG_LEVELS})$")]


class LogSettings(BaseSettings):
    """Implements settings which are loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_prefix="LOG_")

    level: LogLevelString = "INFO"
    format: str = "[%(asctime)s] %(levelname)s [%(filename)s:%(lineno)s] %(message)s"
    datefmt: str = "%d.%m.%Y %H:%M:%S"

    @property
    def log_config(self) -> dict[str, Any]:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": self.format,
                    "datefmt": self.datefmt,
                },
            },
            "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "standard"}},
            "loggers": {
                "atom_token": {"handlers": ["console"], "level": self.level, "propagate": False},
                "fastapi": {"handlers": ["console"], "level": self.level, "propagate": False},
                "uvicorn.access": {
                    "handlers": ["console"],
                    "level": self.level,
                    "propagate": False,
                },
                "uvicorn.error": {"handlers": ["console"], "level": self.level, "propagate": False},
            },
        }


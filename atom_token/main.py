import logging.config
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

import uvicorn
from fastapi import FastAPI

from atom_token.constants import API_PREFIX
from atom_token.db.session import Database
from atom_token.exceptions import AppSettingsError
from atom_token.routers import system_router, tokens_router
from atom_token.services.tokens import TokenManager
from atom_token.settings import AppSettings, get_app_settings

logger = logging.getLogger("atom_token.main")


@asynccontextmanager
async def lifespan(app: "AtomTokenAPP") -> AsyncIterator[None]:
    """Application lifespan context manager for startup and shutdown events."""
    logger.info("Starting up application...")
    database = Database(app.settings.db)
    try:
        await database.initialize()
    except Exception as e:
        logger.error("Failed to initialize application: %s", str(e))
        raise

    app.state.database = database
    app.state.token_manager = TokenManager(database, settings=app.settings)
    logger.info("Application startup completed successfully")

    yield

    logger.info("Shutting down application...")
    try:
        await database.close()
        logger.info("Application shutdown completed successfully")
    except Exception as e:
        logger.error("Error during application shutdown: %s", str(e))


class AtomTokenAPP(FastAPI):
    """Some extra fields above FastAPI Application"""

    _settings: AppSettings
    dependency_overrides: dict[Any, Callable[[], Any]]

    def set_settings(self, settings: AppSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> AppSettings:
        return self._settings


def make_app(settings: AppSettings | None = None) -> AtomTokenAPP:
    """Forming Application instance with required settings and dependencies"""

    if settings is None:
        try:
            settings = get_app_settings()
        except AppSettingsError as exc:
            logger.error("Unable to get settings from environment: %r", exc)
            sys.exit(1)

    logging.config.dictConfig(settings.log.log_config)
    logging.captureWarnings(capture=True)

    logger.info("Setting up application...")
    app = AtomTokenAPP(
        title="Atom Token API",
        description="API for issuing and managing user tokens",
        docs_url="/api/docs/" if settings.api_docs_enabled else None,
        redoc_url="/api/redoc/" if settings.api_docs_enabled else None,
        lifespan=lifespan,
    )
    app.set_settings(settings)

    logger.info("Setting up routes...")
    app.include_router(tokens_router, prefix=API_PREFIX)
    app.include_router(system_router, prefix="/api")

    logger.info("Application configured!")
    return app


def run() -> None:
    """Prepares App and run uvicorn instance"""
    app: AtomTokenAPP = make_app()
    uvicorn.run(
        app,
        host=app.settings.app_host,
        port=app.settings.app_port,
        log_config=app.settings.log.log_config,
        proxy_headers=True,
    )


if __name__ == "__main__":
    run()

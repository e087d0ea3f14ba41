import os
from pathlib import Path
from typing import Any, AsyncGenerator, Generator
from unittest.mock import MagicMock, patch

import pytest
from starlette.testclient import TestClient

from atom_token.db import Database
from atom_token.dependencies import get_token_manager
from atom_token.main import make_app, AtomTokenAPP
from atom_token.services.tokens import TokenManager
from atom_token.settings import AppSettings, DBSettings, LogSettings, get_app_settings
from atom_token.tests.mocks import MockDatabase, MockTokenStore

TEST_TOKEN_LENGTH = 16
TEST_PAGE_SIZE = 2


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, Any, None]:
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop("CONFIG", None)
        get_app_settings.cache_clear()
        yield
        get_app_settings.cache_clear()


@pytest.fixture
def sqlite_dsn(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'tokens.db'}"


@pytest.fixture
def app_settings_test(sqlite_dsn: str) -> AppSettings:
    return AppSettings(
        _env_file=None,  # type: ignore[call-arg]
        token_length=TEST_TOKEN_LENGTH,
        page_size=TEST_PAGE_SIZE,
        db=DBSettings(_env_file=None, dsn=sqlite_dsn),  # type: ignore[call-arg]
        log=LogSettings(_env_file=None, level="DEBUG"),  # type: ignore[call-arg]
    )


@pytest.fixture
async def database(app_settings_test: AppSettings) -> AsyncGenerator[Database, Any]:
    database = Database(app_settings_test.db)
    await database.initialize()
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
def memory_store() -> MockTokenStore:
    return MockTokenStore()


@pytest.fixture
def mock_token_repository(memory_store: MockTokenStore) -> Generator[MagicMock, Any, None]:
    with patch("atom_token.services.tokens.TokenRepository", return_value=memory_store) as _mock:
        yield _mock


@pytest.fixture
def token_manager(
    app_settings_test: AppSettings,
    mock_token_repository: MagicMock,
) -> TokenManager:
    """Manager above in-memory storage"""
    return TokenManager(MockDatabase(), settings=app_settings_test)  # type: ignore[arg-type]


@pytest.fixture
def sqlite_token_manager(app_settings_test: AppSettings, database: Database) -> TokenManager:
    """Manager above real (SQLite) storage"""
    return TokenManager(database, settings=app_settings_test)


@pytest.fixture
def test_app(app_settings_test: AppSettings) -> Generator[AtomTokenAPP, Any, None]:
    test_app = make_app(settings=app_settings_test)
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(test_app: AtomTokenAPP, token_manager: TokenManager) -> Generator[TestClient, Any, None]:
    test_app.dependency_overrides[get_token_manager] = lambda: token_manager
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def mock_db_session_factory() -> MagicMock:
    return MockDatabase().session_factory

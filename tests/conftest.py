"""Shared fixtures: an app on in-memory SQLite with a fake recipe provider."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from savebite.core.config import Settings
from savebite.core.dependencies import get_recipe_provider
from savebite.db.base import Base
from savebite.db.session import create_db_engine, create_session_factory
from savebite.main import create_app
from savebite.services.ai import RecipeProvider

TEST_USERNAME = "user"
TEST_PASSWORD = "userpass"
TEST_SECRET = "test-secret-key"


class FakeRecipeProvider(RecipeProvider):
    """Recipe provider returning canned text and recording requested foods."""

    def __init__(self, recipe: str = "Boil it.\nby Chef SaveBite\n"):
        self.recipe = recipe
        self.error: Exception | None = None
        self.delay: float = 0.0
        self.calls: list[str] = []
        self.cancelled = False

    async def generate_recipe(self, food_name: str) -> str:
        self.calls.append(food_name)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        return self.recipe


def make_settings(**overrides) -> Settings:
    values = dict(
        DATABASE_URL="sqlite://",
        SECRET_KEY=TEST_SECRET,
        AUTH_USERNAME=TEST_USERNAME,
        AUTH_PASSWORD=TEST_PASSWORD,
        OPENAI_API_KEY=None,
        RECIPE_PROVIDER_TIMEOUT_SECONDS=5.0,
        ENVIRONMENT="dev",
        CORS_ORIGINS="",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_provider() -> FakeRecipeProvider:
    return FakeRecipeProvider()


@pytest.fixture
def app(settings: Settings, fake_provider: FakeRecipeProvider) -> FastAPI:
    application = create_app(settings)
    application.dependency_overrides[get_recipe_provider] = lambda: fake_provider
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_client(fake_provider: FakeRecipeProvider) -> Iterator[Callable[..., TestClient]]:
    """Build clients for apps with custom settings."""
    clients: list[TestClient] = []

    def _make(*, override_provider: bool = True, **setting_overrides) -> TestClient:
        application = create_app(make_settings(**setting_overrides))
        if override_provider:
            application.dependency_overrides[get_recipe_provider] = lambda: fake_provider
        test_client = TestClient(application)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def auth_headers(app: FastAPI) -> dict[str, str]:
    token = app.state.token_service.issue(TEST_USERNAME)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app_db(app: FastAPI, client: TestClient) -> Iterator[Session]:
    """Session on the same database the client talks to."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db() -> Iterator[Session]:
    """Standalone session on a fresh in-memory database."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def auth_headers_for() -> Callable[[TestClient], dict[str, str]]:
    """Bearer headers valid for the app behind ``client``."""

    def _headers(test_client: TestClient) -> dict[str, str]:
        token = test_client.app.state.token_service.issue(TEST_USERNAME)
        return {"Authorization": f"Bearer {token}"}

    return _headers

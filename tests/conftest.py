"""Shared fixtures: a fake host register, a mock logger and a base context."""

from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from extension_hooks import ExtensionContext


class FakeRegister:
    """Records the raw callbacks a registrar hands to the host."""

    def __init__(self) -> None:
        self.filters: Dict[str, Callable[..., Any]] = {}
        self.actions: Dict[str, Callable[..., Any]] = {}
        self.schedules: Dict[str, Callable[..., Any]] = {}

    def filter(self, event: str, handler: Callable[..., Any]) -> None:
        self.filters[event] = handler

    def action(self, event: str, handler: Callable[..., Any]) -> None:
        self.actions[event] = handler

    def schedule(self, cron: str, handler: Callable[..., Any]) -> None:
        self.schedules[cron] = handler


class FakeService:
    """Stands in for a host service class and keeps its constructor arguments."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.args = args
        self.kwargs = kwargs


SCHEMA_OVERVIEW = {"collections": {"articles": {"primary": "id"}}}


async def get_schema() -> Dict[str, Any]:
    return SCHEMA_OVERVIEW


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def register() -> FakeRegister:
    return FakeRegister()


@pytest_asyncio.fixture
async def engine() -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield engine
    await engine.dispose()


@pytest.fixture
def services() -> Dict[str, Any]:
    return {
        "ItemsService": FakeService,
        "FilesService": FakeService,
        "FoldersService": FakeService,
        "NotificationsService": FakeService,
        "TranslationsService": FakeService,
    }


@pytest.fixture
def base_context(logger: MagicMock, services: Dict[str, Any]) -> ExtensionContext:
    return ExtensionContext(
        logger=logger,
        services=services,
        get_schema=get_schema,
        env={"PUBLIC_URL": "http://localhost:8055"},
    )

"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest

from shortlink.codegen import CodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink.service import LinkRegistry
from shortlink.storage import LinkStore, MemoryStore, FileStore, PostgresStore
from shortlink.storage.models import Link

TEST_DATABASE_URL = os.getenv("SHORTLINK_TEST_DATABASE_URL")


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def make_link(code: str, long_url: str = "https://example.com/", at: datetime = None) -> Link:
    at = at or datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Link(code=code, long_url=long_url, created_at=at, updated_at=at)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def code_generator():
    """Create code generator."""
    return CodeGenerator(default_length=7)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture(params=["memory", "file", "postgres"])
async def store(request, tmp_path, logger) -> AsyncGenerator[LinkStore, None]:
    """Every storage backend; postgres runs only when SHORTLINK_TEST_DATABASE_URL is set."""
    if request.param == "memory":
        backend = MemoryStore(logger=logger)
    elif request.param == "file":
        backend = FileStore(path=str(tmp_path / "links.json"), logger=logger)
    else:
        if not TEST_DATABASE_URL:
            pytest.skip("SHORTLINK_TEST_DATABASE_URL not set")
        backend = PostgresStore(db_config=TEST_DATABASE_URL, logger=logger)
        async with backend._get_connection() as conn:
            await conn.execute("TRUNCATE links")

    yield backend

    await backend.close()


@pytest.fixture
def registry(store, code_generator) -> LinkRegistry:
    """Create registry over each backend."""
    return LinkRegistry(
        store=store,
        base_url="https://sho.rt",
        generator=code_generator,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def app():
    """Create test FastAPI app over an in-memory store."""
    from config import Config
    from web_app import create_app

    config = Config(storage_backend="memory", base_url="http://testserver")
    store = MemoryStore()
    registry = LinkRegistry(store=store, base_url=config.base_url)

    return create_app(store_instance=store, registry_instance=registry, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

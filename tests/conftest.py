"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone

from httpx import ASGITransport, AsyncClient

from shortlinks.config import Config
from shortlinks.lib.database.memory import InMemoryShortLinkStore
from shortlinks.lib.registry import LinkRegistry
from shortlinks.lib.shortcode import ShortCodeGenerator
from shortlinks.lib.common.logging_config import setup_logging
from shortlinks.web_app import create_app


class FakeClock:
    """Controllable clock returning timezone-aware UTC instants."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class DictCache:
    """In-process stand-in for RedisCache."""

    def __init__(self):
        self.entries = {}
        self.closed = False

    async def get_link(self, short_code):
        return self.entries.get(short_code)

    async def set_link(self, link, ttl=None):
        self.entries[link.short_code] = link
        return True

    async def delete(self, short_code):
        return self.entries.pop(short_code, None) is not None

    async def ping(self):
        return True

    async def close(self):
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock, logger):
    """Create in-memory store sharing the test clock."""
    return InMemoryShortLinkStore(clock=clock, logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def hash_generator():
    """Deterministic generator for reproducible collisions."""
    return ShortCodeGenerator(default_length=6, strategy="hash")


@pytest.fixture
def registry(store, short_code_generator, logger, clock):
    """Create registry instance."""
    return LinkRegistry(
        store=store,
        generator=short_code_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def config():
    return Config(
        store_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
def app(registry, config):
    """Create test FastAPI app."""
    return create_app(registry=registry, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def cache():
    """Dictionary-backed cache double."""
    return DictCache()

from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from slugshortener.constants import ENV


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    for group in (ENV.App, ENV.AppConfig, ENV.Redis, ENV.Shortener):
        for name in group:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0, 'decode_responses': True},
    )
    client.exists.return_value = False
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.get.return_value = None
    return client

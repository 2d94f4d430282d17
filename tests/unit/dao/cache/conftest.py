from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from shortlink.constants import ENV


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv(ENV.ElastiCache.HOST_PARAM, '/test/elasticache/host')
    monkeypatch.setenv(ENV.ElastiCache.PORT_PARAM, '/test/elasticache/port')
    monkeypatch.setenv(ENV.ElastiCache.DB_PARAM, '/test/elasticache/db')
    monkeypatch.setenv(ENV.ElastiCache.USER_PARAM, '/test/elasticache/user')
    monkeypatch.setenv(ENV.ElastiCache.SECRET, 'test/elasticache/credentials')


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'cache.test', 'port': 6379, 'db': 0},
    )
    client.get.return_value = None
    return client

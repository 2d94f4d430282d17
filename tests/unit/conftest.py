"""Shared fixtures: in-memory DAOs and API Gateway event builders."""

import base64
from collections.abc import Callable
from typing import cast
from urllib.parse import urlencode

import pytest

from shortlink.types import LambdaEvent
from shortlink.models import ShortURLModel
from shortlink.dao.base import ShortURLBaseDAO, DedupBaseDAO, RateLimitBaseDAO
from shortlink.dao.exceptions import ShortURLNotFoundError
from shortlink.utils.config import Settings


class InMemoryShortURLDAO(ShortURLBaseDAO):
    """Dict-backed link store that records every call."""

    def __init__(self):
        self.links: dict[str, str] = {}
        self.calls: list[tuple] = []

    def insert(self, short_url: ShortURLModel, **kwargs) -> 'InMemoryShortURLDAO':
        self.calls.append(('insert', short_url.shortcode))
        self.links[short_url.shortcode] = short_url.target
        return self

    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        self.calls.append(('get', shortcode))
        if shortcode not in self.links:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return ShortURLModel(target=self.links[shortcode], shortcode=shortcode)

    def exists(self, shortcode: str, **kwargs) -> bool:
        self.calls.append(('exists', shortcode))
        return shortcode in self.links

    @property
    def inserts(self) -> int:
        return sum(1 for call in self.calls if call[0] == 'insert')


class InMemoryDedupDAO(DedupBaseDAO):
    def __init__(self):
        self.entries: dict[str, tuple[str, int]] = {}

    def get(self, digest: str, **kwargs) -> str | None:
        entry = self.entries.get(digest)
        return entry[0] if entry else None

    def put(self, digest: str, shortcode: str, ttl: int, **kwargs) -> 'InMemoryDedupDAO':
        self.entries[digest] = (shortcode, ttl)
        return self


class InMemoryRateLimitDAO(RateLimitBaseDAO):
    def __init__(self):
        self.counters: dict[tuple[str, int], tuple[int, int]] = {}

    def count(self, client: str, window: int, **kwargs) -> int:
        entry = self.counters.get((client, window))
        return entry[0] if entry else 0

    def put(self, client: str, window: int, count: int, ttl: int, **kwargs) -> 'InMemoryRateLimitDAO':
        self.counters[(client, window)] = (count, ttl)
        return self


@pytest.fixture
def links_dao() -> InMemoryShortURLDAO:
    return InMemoryShortURLDAO()


@pytest.fixture
def dedup_dao() -> InMemoryDedupDAO:
    return InMemoryDedupDAO()


@pytest.fixture
def rate_limit_dao() -> InMemoryRateLimitDAO:
    return InMemoryRateLimitDAO()


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url='https://s.example.com')


@pytest.fixture
def dedup_settings() -> Settings:
    return Settings(base_url='https://s.example.com', dedup_ttl_sec=3600)


@pytest.fixture
def b64() -> Callable[[str], str]:
    """Standard base64 encoder for `longUrl` values."""
    return lambda url: base64.b64encode(url.encode('utf-8')).decode('ascii')


@pytest.fixture
def form_event() -> Callable[..., LambdaEvent]:
    """Build a url-encoded `POST /short` API Gateway event."""

    def _build(fields: dict[str, str] | None = None, headers: dict[str, str] | None = None, method: str = 'POST') -> LambdaEvent:
        return cast(
            LambdaEvent,
            {
                'resource': '/short',
                'path': '/short',
                'httpMethod': method,
                'headers': {
                    'Content-Type': 'application/x-www-form-urlencoded',
                    'User-Agent': 'pytest',
                    **(headers or {}),
                },
                'body': urlencode(fields or {}),
                'isBase64Encoded': False,
                'requestContext': {
                    'resourcePath': '/short',
                    'httpMethod': method,
                    'domainName': 's.example.com',
                    'stage': 'test',
                    'identity': {'sourceIp': '198.51.100.20'},
                },
            },
        )

    return _build

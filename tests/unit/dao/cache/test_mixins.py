"""Unit tests for ElastiCacheClientMixin.

Test coverage includes:

1. Injected client
   - No AWS lookups, cache key schema wired with the 'cache:' namespace.

2. Client resolution from SSM + Secrets Manager
   - TLS in AWS, plain TCP locally, credentials precedence.

3. Configuration errors
   - Missing env vars, malformed SSM values, invalid secret JSON.
"""

import json
from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from shortlink.constants import ENV
from shortlink.dao.cache import CacheKeySchema, ElastiCacheClientMixin
from shortlink.dao.exceptions import DataStoreError
from shortlink.exceptions import MissingEnvironmentVariableError, BadConfigurationError


SSM_VALUES = {
    '/test/elasticache/host': 'cache.internal',
    '/test/elasticache/port': '6380',
    '/test/elasticache/db': '1',
    '/test/elasticache/user': 'ssm-user',
}


def ssm_client(values: dict[str, str]) -> MagicMock:
    client = MagicMock()
    client.get_parameter.side_effect = lambda Name: {'Parameter': {'Value': values[Name]}}
    return client


def secrets_client(payload: str | None) -> MagicMock:
    client = MagicMock()
    client.get_secret_value.return_value = {'SecretString': payload}
    return client


# -------------------------------
# 1. Injected client
# -------------------------------


def test_injected_client_skips_aws(monkeypatch: MonkeyPatch, redis_client: redis.Redis, app_prefix: str):
    import boto3 as _boto3

    monkeypatch.setattr(_boto3, 'client', MagicMock(side_effect=AssertionError('boto3 must not be used')))

    mixin = ElastiCacheClientMixin(prefix=app_prefix, redis_client=redis_client)

    assert mixin.redis is redis_client
    assert isinstance(mixin.keys, CacheKeySchema)
    assert mixin.keys.prefix == 'cache:testapp:test'
    redis_client.ping.assert_called_once()


def test_unhealthy_cache_raises(redis_client: redis.Redis):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')
    with pytest.raises(DataStoreError, match="Can't connect to Redis at cache.test:6379/0"):
        ElastiCacheClientMixin(redis_client=redis_client)


# -------------------------------
# 2. Client resolution
# -------------------------------


class TestClientResolution:
    @pytest.fixture
    def redis_factory(self, monkeypatch: MonkeyPatch, redis_client: redis.Redis) -> MagicMock:
        factory = MagicMock(return_value=redis_client)
        monkeypatch.setattr(redis, 'Redis', factory)
        return factory

    def test_tls_client_in_aws(self, monkeypatch: MonkeyPatch, redis_factory: MagicMock):
        monkeypatch.setattr('shortlink.dao.cache.mixins.running_locally', lambda: False)

        ElastiCacheClientMixin(
            prefix='testapp:test',
            ssm_client=ssm_client(SSM_VALUES),
            secrets_client=secrets_client(json.dumps({'password': 'auth-token'})),
        )

        redis_factory.assert_called_once_with(
            host='cache.internal',
            port=6380,
            db=1,
            username='ssm-user',
            password='auth-token',
            decode_responses=True,
            ssl=True,
            ssl_cert_reqs=None,
        )

    def test_tls_verification_with_ca_bundle(self, monkeypatch: MonkeyPatch, redis_factory: MagicMock):
        monkeypatch.setattr('shortlink.dao.cache.mixins.running_locally', lambda: False)

        ElastiCacheClientMixin(
            ssm_client=ssm_client(SSM_VALUES),
            secrets_client=secrets_client('{}'),
            tls_verify=True,
            ca_bundle_path='/opt/ca.pem',
        )

        kwargs = redis_factory.call_args.kwargs
        assert kwargs['ssl_cert_reqs'] == 'required'
        assert kwargs['ssl_ca_certs'] == '/opt/ca.pem'

    def test_plain_client_locally(self, monkeypatch: MonkeyPatch, redis_factory: MagicMock):
        monkeypatch.setattr('shortlink.dao.cache.mixins.running_locally', lambda: True)
        monkeypatch.delenv(ENV.ElastiCache.USER_PARAM)

        ElastiCacheClientMixin(
            ssm_client=ssm_client(SSM_VALUES),
            secrets_client=secrets_client(json.dumps({'username': 'secret-user', 'password': 'pw'})),
        )

        redis_factory.assert_called_once_with(
            host='cache.internal',
            port=6380,
            db=1,
            username='secret-user',
            password='pw',
            decode_responses=True,
            ssl=False,
        )

    def test_secret_username_wins_over_ssm(self, monkeypatch: MonkeyPatch, redis_factory: MagicMock):
        monkeypatch.setattr('shortlink.dao.cache.mixins.running_locally', lambda: True)

        ElastiCacheClientMixin(
            ssm_client=ssm_client(SSM_VALUES),
            secrets_client=secrets_client(json.dumps({'username': 'secret-user'})),
        )

        assert redis_factory.call_args.kwargs['username'] == 'secret-user'
        assert redis_factory.call_args.kwargs['password'] is None


# -------------------------------
# 3. Configuration errors
# -------------------------------


def test_missing_environment(monkeypatch: MonkeyPatch):
    monkeypatch.delenv(ENV.ElastiCache.HOST_PARAM)

    with pytest.raises(MissingEnvironmentVariableError, match='ELASTICACHE_HOST_PARAM'):
        ElastiCacheClientMixin(ssm_client=ssm_client(SSM_VALUES), secrets_client=secrets_client('{}'))


def test_non_integer_port():
    values = {**SSM_VALUES, '/test/elasticache/port': 'sixty-three-eighty'}

    with pytest.raises(BadConfigurationError, match='Invalid ElastiCache port/db values'):
        ElastiCacheClientMixin(ssm_client=ssm_client(values), secrets_client=secrets_client('{}'))


def test_malformed_ssm_response():
    client = MagicMock()
    client.get_parameter.return_value = {'Parameter': {}}

    with pytest.raises(BadConfigurationError, match='Malformed SSM get_parameter response'):
        ElastiCacheClientMixin(ssm_client=client, secrets_client=secrets_client('{}'))


def test_invalid_secret_json():
    with pytest.raises(BadConfigurationError, match='Invalid JSON in ElastiCache secret payload'):
        ElastiCacheClientMixin(ssm_client=ssm_client(SSM_VALUES), secrets_client=secrets_client('{not json'))

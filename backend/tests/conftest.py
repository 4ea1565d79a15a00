"""Pytest configuration and fixtures."""
import fakeredis
import pytest

from common_utils.cache import KeyspaceClient
from common_utils.config import get_logging_settings, get_redis_settings

TEST_PREFIX = "TEST|"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep settings and prefix lookups independent of the host environment."""
    for name in (
        "COMMON_REDIS_HOST",
        "COMMON_REDIS_PORT",
        "COMMON_REDIS_USERNAME",
        "COMMON_REDIS_PASSWORD",
        "COMMON_REDIS_ENABLE_TLS",
        "COMMON_REDIS_REPLICA_HOST",
        "COMMON_REDIS_KEYS_PREFIX",
        "COMMON_REDIS_FALLBACK_ON_EMPTY",
        "LOG_LEVEL",
        "LOG_TO_CONSOLE",
        "LOG_TO_FILE",
        "LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_redis_settings.cache_clear()
    get_logging_settings.cache_clear()
    yield
    get_redis_settings.cache_clear()
    get_logging_settings.cache_clear()


@pytest.fixture
def server():
    """A single in-process Redis server shared by primary and replica."""
    return fakeredis.FakeServer()


@pytest.fixture
def primary(server):
    return fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture
def replica(server):
    return fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture
def down_replica():
    """A replica whose server refuses every command."""
    unreachable = fakeredis.FakeServer()
    unreachable.connected = False
    return fakeredis.FakeRedis(server=unreachable, decode_responses=True)


@pytest.fixture
def lagging_replica():
    """A reachable replica that has not received any writes."""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def client(primary, replica):
    return KeyspaceClient(primary=primary, replica=replica, key_prefix=TEST_PREFIX)

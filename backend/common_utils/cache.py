"""Prefixed Redis access with primary writes and replica-first reads."""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator, List, Optional

from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .config import RedisSettings, get_redis_settings
from .env import get_string_env_or_default
from .models import ConnectionConfig, ConnectionRole, build_connection_configs

logger = logging.getLogger(__name__)

KEYS_PREFIX_ENV = "COMMON_REDIS_KEYS_PREFIX"
DEFAULT_KEYS_PREFIX = "DEV|SE|"
WILDCARD = "*"

# Replica failures that route a read to the primary instead of failing it.
REPLICA_UNAVAILABLE_ERRORS = (RedisConnectionError, RedisTimeoutError)


def _create_connection(config: ConnectionConfig) -> Redis:
    return Redis.from_url(
        config.url,
        username=config.username,
        password=config.password,
        decode_responses=True,
    )


@contextmanager
def _logged_failure(operation: str, **fields: Any) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        logger.error(
            "Redis operation failed",
            exc_info=True,
            extra={"extra_fields": {"operation": operation, "error": str(exc), **fields}},
        )
        raise


class KeyspaceClient:
    """Key-value access over a primary connection and a read replica.

    Writes always go to the primary. Reads try the replica first and fall back
    to the primary when the replica cannot be reached. With
    ``fallback_on_empty`` an empty replica answer also triggers a primary read,
    which covers replication lag at the cost of a second lookup on every miss.

    Without an explicit ``key_prefix`` the prefix is read from
    ``COMMON_REDIS_KEYS_PREFIX`` on every call, so changing the variable at
    runtime takes effect immediately.
    """

    def __init__(
        self,
        primary: Redis,
        replica: Optional[Redis] = None,
        key_prefix: Optional[str] = None,
        fallback_on_empty: bool = False,
    ) -> None:
        self.primary = primary
        self.replica = replica if replica is not None else primary
        self._key_prefix = key_prefix
        self.fallback_on_empty = fallback_on_empty

    @classmethod
    def from_settings(cls, settings: Optional[RedisSettings] = None) -> "KeyspaceClient":
        settings = settings or get_redis_settings()
        configs = build_connection_configs(settings)
        return cls(
            primary=_create_connection(configs[ConnectionRole.PRIMARY]),
            replica=_create_connection(configs[ConnectionRole.REPLICA]),
            fallback_on_empty=settings.fallback_on_empty,
        )

    @property
    def key_prefix(self) -> str:
        if self._key_prefix is not None:
            return self._key_prefix
        return get_string_env_or_default(KEYS_PREFIX_ENV, DEFAULT_KEYS_PREFIX)

    def prefixed(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _connections(self) -> Dict[ConnectionRole, Redis]:
        return {ConnectionRole.PRIMARY: self.primary, ConnectionRole.REPLICA: self.replica}

    def connect(self) -> Dict[str, bool]:
        """Ping both connections; failures are logged, never raised."""
        status: Dict[str, bool] = {}
        for role, connection in self._connections().items():
            try:
                connection.ping()
            except Exception as exc:
                logger.error(
                    "Error connecting to %s Redis server",
                    role.value,
                    extra={"extra_fields": {"role": role.value, "error": str(exc)}},
                )
                status[role.value] = False
            else:
                logger.info(
                    "Connected to %s Redis server",
                    role.value,
                    extra={"extra_fields": {"role": role.value}},
                )
                status[role.value] = True
        return status

    def close(self) -> None:
        self.primary.close()
        if self.replica is not self.primary:
            self.replica.close()
        logger.info("Redis connections closed")

    def _read(self, command: str, *args: Any) -> Any:
        try:
            result = getattr(self.replica, command)(*args)
        except REPLICA_UNAVAILABLE_ERRORS as exc:
            if self.replica is self.primary:
                raise
            logger.warning(
                "Replica unavailable, reading from primary",
                extra={"extra_fields": {"command": command, "error": str(exc)}},
            )
            return getattr(self.primary, command)(*args)

        if not result and self.fallback_on_empty and self.replica is not self.primary:
            return getattr(self.primary, command)(*args)
        return result

    def set_key(self, key: str, value: str, ttl_seconds: int = 0) -> None:
        with _logged_failure("set_key", key=key):
            if ttl_seconds < 0:
                raise ValueError("ttl_seconds must be zero or positive")
            if ttl_seconds:
                self.primary.setex(self.prefixed(key), ttl_seconds, value)
            else:
                self.primary.set(self.prefixed(key), value)

    def get_key(self, key: str) -> Optional[str]:
        with _logged_failure("get_key", key=key):
            return self._read("get", self.prefixed(key))

    def keys(self, pattern: str) -> List[str]:
        with _logged_failure("keys", pattern=pattern):
            return self._read("keys", self.prefixed(pattern))

    def del_key(self, pattern: str) -> int:
        """Delete a key, or every key matching a glob pattern.

        Matches are resolved first and deleted one by one, so keys created
        between the scan and the deletes survive.
        """
        with _logged_failure("del_key", pattern=pattern):
            prefixed_pattern = self.prefixed(pattern)
            removed = 0
            if WILDCARD in pattern:
                for matched in self._read("keys", prefixed_pattern):
                    removed += self.primary.delete(matched)
            removed += self.primary.delete(prefixed_pattern)
            return removed

    def lpush_key(self, key: str, value: str) -> int:
        with _logged_failure("lpush_key", key=key):
            return self.primary.lpush(self.prefixed(key), value)

    def lrem_key(self, key: str, count: int, value: str) -> int:
        with _logged_failure("lrem_key", key=key):
            return self.primary.lrem(self.prefixed(key), count, value)

    def lrange_key(self, key: str, start: int, stop: int) -> List[str]:
        with _logged_failure("lrange_key", key=key):
            return self._read("lrange", self.prefixed(key), start, stop)

    def increment_key(self, key: str, amount: int = 0) -> int:
        with _logged_failure("increment_key", key=key):
            if amount:
                return self.primary.incrby(self.prefixed(key), amount)
            return self.primary.incr(self.prefixed(key))

    def decrement_key(self, key: str, amount: int = 0) -> int:
        with _logged_failure("decrement_key", key=key):
            if amount:
                return self.primary.decrby(self.prefixed(key), amount)
            return self.primary.decr(self.prefixed(key))

    def hset_key(self, key: str, field: str, value: Any) -> int:
        with _logged_failure("hset_key", key=key, field=field):
            return self.primary.hset(self.prefixed(key), field, value)

    def hincrby_key(self, key: str, field: str, increment: int) -> int:
        with _logged_failure("hincrby_key", key=key, field=field):
            return self.primary.hincrby(self.prefixed(key), field, increment)

    def hdel_key(self, key: str, field: str) -> int:
        with _logged_failure("hdel_key", key=key, field=field):
            return self.primary.hdel(self.prefixed(key), field)

    def hgetall_key(self, key: str) -> Dict[str, str]:
        with _logged_failure("hgetall_key", key=key):
            return self._read("hgetall", self.prefixed(key))

    def ttl_key(self, key: str) -> int:
        with _logged_failure("ttl_key", key=key):
            return self._read("ttl", self.prefixed(key))


@contextmanager
def open_keyspace(settings: Optional[RedisSettings] = None) -> Generator[KeyspaceClient, None, None]:
    client = KeyspaceClient.from_settings(settings)
    client.connect()
    try:
        yield client
    finally:
        client.close()


__all__ = [
    "DEFAULT_KEYS_PREFIX",
    "KEYS_PREFIX_ENV",
    "KeyspaceClient",
    "open_keyspace",
]

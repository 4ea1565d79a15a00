"""Pydantic models describing keyspace connections."""
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel

from .config import RedisSettings


class ConnectionRole(str, Enum):
    PRIMARY = "primary"
    REPLICA = "replica"


class ConnectionConfig(BaseModel):
    role: ConnectionRole
    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None
    tls: bool = False

    @property
    def url(self) -> str:
        scheme = "rediss" if self.tls else "redis"
        return f"{scheme}://{self.host}:{self.port}"


def build_connection_configs(settings: RedisSettings) -> Dict[ConnectionRole, ConnectionConfig]:
    """Describe the primary and replica connections for ``settings``.

    The replica shares port, credentials and TLS mode with the primary; only
    its host can differ, and it defaults to the primary host.
    """
    shared = {
        "port": settings.port,
        "username": settings.username,
        "password": settings.password,
        "tls": settings.enable_tls,
    }
    return {
        ConnectionRole.PRIMARY: ConnectionConfig(
            role=ConnectionRole.PRIMARY, host=settings.host, **shared
        ),
        ConnectionRole.REPLICA: ConnectionConfig(
            role=ConnectionRole.REPLICA, host=settings.effective_replica_host, **shared
        ),
    }


__all__ = ["ConnectionRole", "ConnectionConfig", "build_connection_configs"]

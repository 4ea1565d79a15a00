"""FastAPI wiring that hands services an explicitly managed keyspace client."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from fastapi import FastAPI, Request
from starlette.concurrency import run_in_threadpool

from .cache import KeyspaceClient

logger = logging.getLogger(__name__)

KeyspaceFactory = Callable[[], KeyspaceClient]


def create_keyspace_lifespan(
    factory: Optional[KeyspaceFactory] = None,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    build = factory or KeyspaceClient.from_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = build()
        await run_in_threadpool(client.connect)
        app.state.keyspace = client
        logger.info("Keyspace client ready")
        try:
            yield
        finally:
            await run_in_threadpool(client.close)
            app.state.keyspace = None
            logger.info("Keyspace client shut down")

    return lifespan


def get_keyspace(request: Request) -> KeyspaceClient:
    client = getattr(request.app.state, "keyspace", None)
    if client is None:
        raise RuntimeError("Keyspace client is not initialised; install create_keyspace_lifespan()")
    return client


__all__ = ["create_keyspace_lifespan", "get_keyspace"]

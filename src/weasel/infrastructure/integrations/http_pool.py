"""Shared HTTP client pool for connection reuse across detectors.

Hey future me - this is the default transport for every detector! Instead of each detector
creating its own httpx.AsyncClient (which wastes TCP connections and ignores keep-alive),
detectors built without an explicit client borrow this shared one.

Usage:
    from weasel.infrastructure.integrations.http_pool import HttpClientPool

    client = await HttpClientPool.get_client()
    detector = await create_imgur_detector(client_id, client)

Don't forget to call HttpClientPool.close() at shutdown!
"""

import asyncio
import logging
from typing import ClassVar

import httpx

from weasel.config.settings import HttpSettings

logger = logging.getLogger(__name__)

USER_AGENT = "weasel/0.1"


class HttpClientPool:
    """Singleton HTTP client pool.

    Features:
    - Created lazily by the first detector that needs a transport
    - Safe first use from concurrent tasks via asyncio.Lock
    - Limits and timeout come from HttpSettings (WEASEL_HTTP__* via Settings)
    - Single cleanup point at shutdown
    """

    # Hey future me, these are CLASS VARIABLES (shared across all calls)!
    _client: ClassVar[httpx.AsyncClient | None] = None
    _lock: ClassVar[asyncio.Lock | None] = None

    @classmethod
    def _ensure_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def get_client(cls, settings: HttpSettings | None = None) -> httpx.AsyncClient:
        """Get the shared HTTP client instance.

        Settings only apply on the FIRST call; later calls return the existing client.
        """
        async with cls._ensure_lock():
            if cls._client is None:
                settings = settings or HttpSettings()
                cls._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=settings.max_keepalive,
                        max_connections=settings.max_connections,
                    ),
                    headers={"User-Agent": USER_AGENT},
                    http2=True,
                )
                logger.info(
                    "Shared detector HTTP client ready (timeout=%.1fs, keepalive=%d, max_conn=%d)",
                    settings.timeout,
                    settings.max_keepalive,
                    settings.max_connections,
                )
            return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the shared client. A later get_client() creates a fresh one."""
        async with cls._ensure_lock():
            if cls._client is not None:
                await cls._client.aclose()
                cls._client = None
                logger.info("Shared detector HTTP client closed")

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._client is not None


__all__ = ["HttpClientPool", "USER_AGENT"]

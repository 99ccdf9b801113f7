"""Client for the static site origin that hosts the front-end pages."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from radical_api.core.errors import UpstreamFetchError
from radical_api.core.settings import settings

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "radical-api"


@dataclass(frozen=True)
class StaticDocument:
    """A document fetched from the origin."""

    body: bytes
    content_type: str

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class StaticSiteClient:
    """Fetch pages from the static origin over a shared HTTP client."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.static_origin_url).rstrip("/")
        self.timeout_seconds = (
            settings.static_fetch_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout_seconds),
                    transport=self._transport,
                    follow_redirects=True,
                )
        return self._client

    async def fetch(self, path: str, *, user_agent: str | None = None) -> StaticDocument:
        """Fetch ``path`` from the origin.

        Raises:
            UpstreamFetchError: On transport failures and non-2xx responses.
        """
        client = await self._ensure_client()
        headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}
        try:
            response = await client.get(path, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Static origin request for %s failed: %s", path, exc)
            raise UpstreamFetchError("Failed to load page") from exc

        if not response.is_success:
            logger.warning(
                "Static origin returned %s for %s", response.status_code, path
            )
            raise UpstreamFetchError(
                "Failed to load page",
                details={"status": response.status_code},
            )

        content_type = response.headers.get("content-type", "text/html; charset=utf-8")
        return StaticDocument(body=response.content, content_type=content_type)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _StaticSiteClientSingleton:
    """Singleton wrapper for StaticSiteClient."""

    _instance: StaticSiteClient | None = None

    @classmethod
    def get_instance(cls) -> StaticSiteClient:
        if cls._instance is None:
            cls._instance = StaticSiteClient()
        return cls._instance


def get_static_site_client() -> StaticSiteClient:
    """Return a singleton static site client instance."""
    return _StaticSiteClientSingleton.get_instance()

"""
HTTP transport shared by the source adapters and the remote override store.

Wraps ``httpx.AsyncClient`` and translates every failure into the leadscope
error taxonomy: network errors and non-success statuses become
``TransportError``, undecodable bodies become ``MalformedPayloadError``.
Requests are never retried here; fallback across endpoints is the
orchestrator's job.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from leadscope.core.exceptions import MalformedPayloadError, TransportError
from leadscope.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    timeout: float = 30.0
    max_redirects: int = 5
    verify_ssl: bool = True
    user_agent: str = "leadscope/0.1.0"
    concurrent_requests: int = 8
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")
        if self.concurrent_requests < 1:
            raise ValueError("concurrent_requests must be at least 1")


class HttpClient:
    """
    Async HTTP client returning decoded JSON.

    One instance is shared by every adapter of a resolution run; the
    underlying connection pool is created lazily and released by ``close``.
    """

    def __init__(
        self,
        http_config: Optional[HttpConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http_config = http_config or HttpConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop: Optional[asyncio.AbstractEventLoop] = None

    async def __aenter__(self) -> "HttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "User-Agent": self.http_config.user_agent,
                "Accept": "application/json",
                **self.http_config.headers,
            }
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.http_config.timeout),
                follow_redirects=True,
                max_redirects=self.http_config.max_redirects,
                verify=self.http_config.verify_ssl,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _limiter(self) -> asyncio.Semaphore:
        # asyncio primitives bind to the first loop that waits on them
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.http_config.concurrent_requests)
            self._semaphore_loop = loop
        return self._semaphore

    async def request(self, method: str, url: str, *, provider: str, **kwargs: Any) -> httpx.Response:
        """Execute one request and fail on transport errors or non-2xx status."""
        client = await self._ensure_client()
        async with self._limiter():
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as e:
                raise TransportError(
                    f"{method} {url} failed: {type(e).__name__}: {e}",
                    provider_name=provider,
                    details={"url": url, "error_type": type(e).__name__},
                ) from e

        if not response.is_success:
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}",
                provider_name=provider,
                status_code=response.status_code,
                details={"url": url},
            )
        logger.bind(provider=provider).debug(f"{method} {url} -> {response.status_code}")
        return response

    async def get_json(
        self,
        url: str,
        *,
        provider: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """GET ``url`` and decode the JSON body."""
        response = await self.request("GET", url, provider=provider, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                f"Response from {url} is not valid JSON",
                provider_name=provider,
                details={"url": url},
            ) from e

    async def put_json(self, url: str, body: Any, *, provider: str) -> int:
        """PUT a JSON body and return the status code."""
        response = await self.request("PUT", url, provider=provider, json=body)
        return response.status_code


def create_http_client(timeout: float = 30.0, **kwargs: Any) -> HttpClient:
    """Factory function to create an HTTP client."""
    return HttpClient(HttpConfig(timeout=timeout, **kwargs))

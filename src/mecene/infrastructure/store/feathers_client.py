"""
Feathers store client implementation.

REST transport for find/patch/create and a websocket change stream per
live query.
"""

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

from mecene.domain.exceptions import StoreError
from mecene.domain.services.i_store import IStoreClient, IStoreService
from mecene.domain.services.i_subscription import ISubscription
from mecene.infrastructure.monitoring.metrics import (
    store_request_duration_seconds,
    store_requests_total,
)
from mecene.infrastructure.store.change_stream import ChangeStream
from mecene.infrastructure.store.live_query import LiveQuery
from mecene.infrastructure.store.query_encoding import build_query, encode_query

logger = logging.getLogger(__name__)


class FeathersClient(IStoreClient):
    """
    Client of a Feathers real-time store.

    Design:
    - HTTP client is lazily initialized on first use
    - One HTTP client shared by all collection services
    - Every live query opens its own websocket channel
    """

    def __init__(
        self,
        base_url: str,
        realtime_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Feathers client.

        Args:
            base_url: Store REST base URL
            realtime_url: Store websocket base URL (derived from base_url
                when omitted)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.realtime_url = (realtime_url or _to_ws_url(self.base_url)).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()
        self._services: dict[str, "FeathersService"] = {}

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        transport=self._transport,
                        limits=httpx.Limits(
                            max_connections=10,
                            max_keepalive_connections=5,
                        ),
                    )
        return self._client

    def service(self, name: str) -> "FeathersService":
        """Get collection service by name."""
        path = name.strip("/")
        if path not in self._services:
            self._services[path] = FeathersService(self, path)
        return self._services[path]

    async def open_change_stream(self, path: str) -> ChangeStream:
        """Open the realtime channel of a collection."""
        return await ChangeStream(self.realtime_url, path).open()

    async def request(
        self,
        service: str,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> Any:
        """
        Send a store request.

        Args:
            service: Collection path (for metrics)
            operation: Operation name (for metrics)
            method: HTTP method
            url: Path relative to base URL
            **kwargs: httpx request arguments

        Returns:
            Decoded JSON body

        Raises:
            StoreError: If request fails or body is not JSON
        """
        client = await self._ensure_client()
        start = time.time()
        status = "error"

        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            body = response.json()
            status = "success"
            return body

        except httpx.HTTPStatusError as e:
            raise StoreError(
                f"Store {operation} on {service} failed: {e.response.text}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise StoreError(f"Network error on store {operation} {service}: {e}")
        except ValueError as e:
            raise StoreError(f"Invalid store response for {operation}: {e}")

        finally:
            duration = time.time() - start
            store_requests_total.labels(
                service=service, operation=operation, status=status
            ).inc()
            store_request_duration_seconds.labels(
                service=service, operation=operation
            ).observe(duration)
            logger.debug(
                f"Store {operation} {service}: {status} in {duration * 1000:.1f}ms"
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class FeathersService(IStoreService):
    """One collection of the Feathers store."""

    def __init__(self, client: FeathersClient, path: str):
        """
        Initialize collection service.

        Args:
            client: Owning store client
            path: Collection path
        """
        self.client = client
        self.path = path

    async def find(self, query: dict, params: Optional[dict] = None) -> Any:
        """Find records matching query."""
        return await self.client.request(
            self.path,
            "find",
            "GET",
            f"/{self.path}",
            params=encode_query(build_query(query, params)),
        )

    async def patch(self, record_id: str, data: dict) -> dict:
        """Merge data into an existing record."""
        return await self.client.request(
            self.path,
            "patch",
            "PATCH",
            f"/{self.path}/{record_id}",
            json=data,
        )

    async def create(self, data: dict) -> dict:
        """Create a new record."""
        return await self.client.request(
            self.path,
            "create",
            "POST",
            f"/{self.path}",
            json=data,
        )

    def watch(
        self,
        query: dict,
        params: Optional[dict] = None,
        list_strategy: str = "always",
    ) -> ISubscription[Any]:
        """Open a live query on this collection."""
        return LiveQuery(
            path=self.path,
            find=lambda: self.find(query, params),
            open_stream=lambda: self.client.open_change_stream(self.path),
            list_strategy=list_strategy,
        )


def _to_ws_url(url: str) -> str:
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url

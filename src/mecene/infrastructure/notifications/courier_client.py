"""
Courier HTTP client.

Courier fans published events out to the websocket clients of a
channel; the UI listens on the error channel to show popups.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

# Seconds before the first retry, doubled on every further attempt
RETRY_BASE_DELAY = 0.1


class CourierClient:
    """
    Publisher of events to Courier channels.

    Publishing never raises: the outcome is returned as a bool.
    Unknown channels (404) are not retried; other failures are retried
    with exponential backoff.

    Examples:
        async with CourierClient("http://localhost:8765") as courier:
            await courier.publish("errors", {"type": "error_popup"})
    """

    def __init__(
        self,
        courier_url: str,
        timeout: float = 5.0,
        max_retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Courier client.

        Args:
            courier_url: Courier base URL
            timeout: Request timeout in seconds
            max_retries: Attempts per publish
            transport: Optional httpx transport (tests)
        """
        self.courier_url = courier_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.courier_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _post(self, channel: str, event: Dict[str, Any]) -> Optional[bool]:
        """
        Make one publish attempt.

        Returns:
            True when published, False when the channel does not exist,
            None when the attempt should be retried
        """
        try:
            response = await self._http().post(f"/publish/{channel}", json=event)
        except httpx.TimeoutException:
            logger.warning(f"Courier publish to {channel} timed out")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Courier unreachable at {self.courier_url}: {e}")
            return None

        if response.status_code == 404:
            logger.error(f"Courier channel not found: {channel}")
            return False
        if response.is_success:
            return True

        logger.warning(
            f"Courier rejected event for {channel}: "
            f"HTTP {response.status_code} {response.text[:200]}"
        )
        return None

    async def publish(self, channel: str, event: Dict[str, Any]) -> bool:
        """
        Publish an event to a channel.

        Args:
            channel: Target channel
            event: JSON-serializable event dict

        Returns:
            True if Courier accepted the event
        """
        if not isinstance(event, dict):
            logger.error(f"Refusing non-dict event for {channel}")
            return False

        for attempt in range(1, self.max_retries + 1):
            outcome = await self._post(channel, event)
            if outcome is not None:
                if outcome:
                    logger.debug(f"Published {event.get('type')} to {channel}")
                return outcome

            if attempt < self.max_retries:
                await asyncio.sleep(RETRY_BASE_DELAY * 2 ** (attempt - 1))

        logger.error(f"Giving up on {channel} after {self.max_retries} attempts")
        return False

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "CourierClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

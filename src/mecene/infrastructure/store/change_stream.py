"""
Realtime change stream.

One websocket connection per watched collection. The store pushes a
JSON frame for every mutation:
    {"path": "donations", "event": "created", "data": {...}}
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from mecene.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

CHANGE_EVENTS = frozenset({"created", "updated", "patched", "removed"})


@dataclass(frozen=True)
class ChangeEvent:
    """Mutation pushed by the store."""

    path: str
    event: str
    data: Any = field(default=None)

    @property
    def is_change(self) -> bool:
        """Check if event reports a record mutation."""
        return self.event in CHANGE_EVENTS


class ChangeStream:
    """
    Websocket channel of store mutations for one collection.

    Lazily connected by open(); closed by close().
    """

    def __init__(self, realtime_url: str, path: str, open_timeout: float = 10.0):
        """
        Initialize change stream.

        Args:
            realtime_url: Store realtime base URL (ws:// or wss://)
            path: Collection path to follow
            open_timeout: Connection timeout in seconds
        """
        self.url = f"{realtime_url.rstrip('/')}/{path}"
        self.path = path
        self.open_timeout = open_timeout
        self._ws: Optional[Any] = None

    async def open(self) -> "ChangeStream":
        """
        Connect to the realtime channel.

        Raises:
            StoreError: If connection fails
        """
        try:
            self._ws = await websockets.connect(
                self.url, open_timeout=self.open_timeout
            )
        except (OSError, websockets.InvalidHandshake) as e:
            raise StoreError(f"Cannot open realtime channel {self.url}: {e}")

        logger.debug(f"Realtime channel opened: {self.url}")
        return self

    async def next_event(self) -> ChangeEvent:
        """
        Wait for the next pushed event.

        Raises:
            StoreError: If channel is closed or frame is malformed
        """
        if self._ws is None:
            raise StoreError(f"Realtime channel {self.path} is not open")

        try:
            frame = await self._ws.recv()
        except ConnectionClosed as e:
            raise StoreError(f"Realtime channel {self.path} closed: {e}")

        try:
            payload = json.loads(frame)
            return ChangeEvent(
                path=payload["path"],
                event=payload["event"],
                data=payload.get("data"),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Malformed realtime frame on {self.path}: {e}")

    async def close(self) -> None:
        """Close the websocket connection."""
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
            logger.debug(f"Realtime channel closed: {self.url}")

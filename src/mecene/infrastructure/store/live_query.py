"""
Live query subscription.

Emits the find result once, then re-runs the find after every change
the store pushes for the watched collection.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from mecene.domain.exceptions import StoreError
from mecene.domain.services.i_subscription import ISubscription
from mecene.infrastructure.monitoring.metrics import live_queries_active
from mecene.infrastructure.store.change_stream import ChangeStream

logger = logging.getLogger(__name__)

SUPPORTED_LIST_STRATEGIES = ("always",)


class LiveQuery(ISubscription[Any]):
    """
    Subscription backed by a change stream and a find call.

    The change stream is opened on first iteration. Delivery failures
    close the subscription and are raised to the consumer.
    """

    def __init__(
        self,
        path: str,
        find: Callable[[], Awaitable[Any]],
        open_stream: Callable[[], Awaitable[ChangeStream]],
        list_strategy: str = "always",
    ):
        """
        Initialize live query.

        Args:
            path: Watched collection path
            find: Runs the query and returns the raw find result
            open_stream: Opens the collection change stream
            list_strategy: Re-listing policy

        Raises:
            ValueError: If list strategy is unsupported
        """
        if list_strategy not in SUPPORTED_LIST_STRATEGIES:
            raise ValueError(
                f"Unsupported list strategy: {list_strategy}. "
                f"Must be one of: {SUPPORTED_LIST_STRATEGIES}"
            )

        self.path = path
        self.list_strategy = list_strategy
        self._find = find
        self._open_stream = open_stream
        self._stream: Optional[ChangeStream] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __anext__(self) -> Any:
        if self._closed:
            raise StopAsyncIteration

        try:
            if self._stream is None:
                stream = await self._open_stream()
                if self._closed:
                    # Cancelled while the stream was opening
                    await stream.close()
                    raise StopAsyncIteration
                self._stream = stream
                live_queries_active.labels(service=self.path).inc()
                return await self._find()

            while True:
                event = await self._stream.next_event()
                if event.path == self.path and event.is_change:
                    logger.debug(f"Re-listing {self.path} after {event.event}")
                    return await self._find()

        except StoreError:
            if self._closed:
                raise StopAsyncIteration
            await self.cancel()
            raise

    async def cancel(self) -> None:
        """Stop emitting and close the change stream."""
        if self._closed:
            return
        self._closed = True

        if self._stream is not None:
            stream, self._stream = self._stream, None
            live_queries_active.labels(service=self.path).dec()
            await stream.close()

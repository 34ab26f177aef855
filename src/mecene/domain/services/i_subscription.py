"""
Subscription interface.

A subscription is an async stream of emissions with an explicit
cancel handle owned by the caller.
"""

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from mecene.domain.exceptions import SubscriptionClosedError

T = TypeVar("T")
U = TypeVar("U")

Callback = Callable[[Any], Union[None, Awaitable[None]]]


class ISubscription(ABC, Generic[T]):
    """
    Abstract push subscription.

    Iterate with ``async for``; iteration ends after ``cancel()`` and
    raises when delivery fails.
    """

    @abstractmethod
    async def __anext__(self) -> T:
        """Wait for the next emission."""

    @abstractmethod
    async def cancel(self) -> None:
        """Stop emitting and release the underlying channel."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Check if subscription was cancelled."""

    def __aiter__(self) -> "ISubscription[T]":
        return self

    def map(self, fn: Callable[[T], U]) -> "ISubscription[U]":
        """Return a subscription emitting fn(emission)."""
        return MappedSubscription(self, fn)

    def listen(
        self,
        on_next: Callback,
        on_error: Optional[Callback] = None,
    ) -> asyncio.Task:
        """
        Drive the subscription in a task, delivering to callbacks.

        Args:
            on_next: Called with every emission
            on_error: Called once with the delivery failure

        Returns:
            Task running the delivery loop

        Raises:
            SubscriptionClosedError: If the subscription was cancelled
        """
        if self.closed:
            raise SubscriptionClosedError(type(self).__name__)

        async def deliver() -> None:
            try:
                async for item in self:
                    await _maybe_await(on_next(item))
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if on_error is None:
                    raise
                await _maybe_await(on_error(e))

        return asyncio.ensure_future(deliver())


class MappedSubscription(ISubscription[U]):
    """Subscription transforming every emission of a source."""

    def __init__(self, source: ISubscription[T], fn: Callable[[T], U]):
        self.source = source
        self.fn = fn

    async def __anext__(self) -> U:
        return self.fn(await self.source.__anext__())

    async def cancel(self) -> None:
        await self.source.cancel()

    @property
    def closed(self) -> bool:
        return self.source.closed


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result

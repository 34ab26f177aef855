"""
In-memory fakes of the store and of sent chain transactions.

The store evaluates the query subset used by the campaign service and
pushes change events to open live queries.
"""

import asyncio
import itertools
from typing import Any, Optional

from mecene.domain.exceptions import StoreError
from mecene.domain.services.i_campaign_contracts import ISentTransaction
from mecene.domain.services.i_store import IStoreClient, IStoreService
from mecene.domain.services.i_subscription import ISubscription
from mecene.infrastructure.store.change_stream import ChangeEvent
from mecene.infrastructure.store.live_query import LiveQuery


# ================================================================
# In-memory store
# ================================================================


def matches(record: dict, query: dict) -> bool:
    """Evaluate equality, $gt, $nin and $or filters against a record."""
    for key, condition in query.items():
        if key == "$or":
            if not any(matches(record, sub) for sub in condition):
                return False
            continue
        if key.startswith("$"):
            continue

        value = record.get(key)
        if isinstance(condition, dict):
            for op, arg in condition.items():
                if op == "$gt" and not (value is not None and value > arg):
                    return False
                if op == "$nin" and value in arg:
                    return False
        elif value != condition:
            return False

    return True


class FakeChangeStream:
    """Change stream fed by the in-memory store."""

    def __init__(self):
        self.queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def push(self, event: ChangeEvent) -> None:
        self.queue.put_nowait(event)

    async def next_event(self) -> ChangeEvent:
        event = await self.queue.get()
        if event is None:
            raise StoreError("Realtime channel closed")
        return event

    async def close(self) -> None:
        self.closed = True
        self.queue.put_nowait(None)


class InMemoryStoreService(IStoreService):
    """Store collection kept in a list."""

    _ids = itertools.count(1)

    def __init__(self, path: str):
        self.path = path
        self.records: list[dict] = []
        self.find_calls: list[tuple[dict, Optional[dict]]] = []
        self.patch_calls: list[tuple[str, dict]] = []
        self.create_calls: list[dict] = []
        self.streams: list[FakeChangeStream] = []
        self.fail_with: Optional[Exception] = None

    def seed(self, *records: dict) -> None:
        self.records.extend(dict(record) for record in records)

    async def find(self, query: dict, params: Optional[dict] = None) -> Any:
        self.find_calls.append((query, params))
        if self.fail_with:
            raise self.fail_with

        found = [r for r in self.records if matches(r, query)]
        for key, direction in reversed(list(query.get("$sort", {}).items())):
            found.sort(key=lambda r: r.get(key), reverse=direction < 0)

        skip = query.get("$skip", 0)
        limit = query.get("$limit", 10)
        return {
            "total": len(found),
            "limit": limit,
            "skip": skip,
            "data": found[skip : skip + limit],
        }

    async def patch(self, record_id: str, data: dict) -> dict:
        self.patch_calls.append((record_id, data))
        if self.fail_with:
            raise self.fail_with

        for record in self.records:
            if record.get("_id") == record_id:
                record.update(data)
                self._notify("patched", record)
                return dict(record)
        raise StoreError(f"No record {record_id}", status_code=404)

    async def create(self, data: dict) -> dict:
        self.create_calls.append(data)
        if self.fail_with:
            raise self.fail_with

        record = {"_id": f"{self.path}-{next(self._ids)}", **data}
        self.records.append(record)
        self._notify("created", record)
        return dict(record)

    def watch(
        self,
        query: dict,
        params: Optional[dict] = None,
        list_strategy: str = "always",
    ) -> ISubscription[Any]:
        return LiveQuery(
            path=self.path,
            find=lambda: self.find(query, params),
            open_stream=self._open_stream,
            list_strategy=list_strategy,
        )

    async def _open_stream(self) -> FakeChangeStream:
        stream = FakeChangeStream()
        self.streams.append(stream)
        return stream

    def _notify(self, event: str, record: dict) -> None:
        for stream in self.streams:
            if not stream.closed:
                stream.push(ChangeEvent(self.path, event, dict(record)))


class InMemoryStoreClient(IStoreClient):
    """Store client holding one in-memory service per collection."""

    def __init__(self):
        self.services: dict[str, InMemoryStoreService] = {}

    def service(self, name: str) -> InMemoryStoreService:
        if name not in self.services:
            self.services[name] = InMemoryStoreService(name)
        return self.services[name]

    async def close(self) -> None:
        pass


# ================================================================
# Chain fakes
# ================================================================


class FakeSentTransaction(ISentTransaction):
    """Sent transaction mined (or failing) on demand."""

    def __init__(self, tx_hash: str, receipt: Any = None, error: Exception = None):
        self._tx_hash = tx_hash
        self.receipt = receipt if receipt is not None else {"status": 1}
        self.error = error
        self.waited = False

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    async def wait_mined(self) -> Any:
        self.waited = True
        if self.error:
            raise self.error
        return self.receipt


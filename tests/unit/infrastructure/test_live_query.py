"""
Unit tests for LiveQuery and ChangeStream frame handling.

Usage:
    pytest tests/unit/infrastructure/test_live_query.py
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from helpers.fakes import FakeChangeStream

from mecene.domain.exceptions import StoreError
from mecene.infrastructure.store.change_stream import ChangeEvent, ChangeStream
from mecene.infrastructure.store.live_query import LiveQuery


class TestLiveQuery:
    """Unit tests for LiveQuery."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _create_query(self, find: AsyncMock, stream: FakeChangeStream) -> LiveQuery:
        """Create live query on donations."""
        return LiveQuery(
            path="donations",
            find=find,
            open_stream=AsyncMock(return_value=stream),
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_first_emission_opens_stream(self):
        """Test first iteration opens the stream and runs find."""
        find = AsyncMock(return_value=["first"])
        query = self._create_query(find, FakeChangeStream())

        assert await query.__anext__() == ["first"]
        find.assert_awaited_once()

    async def test_ignores_other_paths_and_events(self):
        """Test only mutations of the watched path re-run find."""
        find = AsyncMock(side_effect=[["first"], ["second"]])
        stream = FakeChangeStream()
        query = self._create_query(find, stream)
        await query.__anext__()

        stream.push(ChangeEvent("campaigns", "created"))
        stream.push(ChangeEvent("donations", "ping"))
        stream.push(ChangeEvent("donations", "removed", {"_id": "d1"}))

        assert await query.__anext__() == ["second"]
        assert find.await_count == 2

    async def test_stream_failure_raised_and_closes(self):
        """Test dropped channel is raised once, then iteration stops."""
        find = AsyncMock(return_value=[])
        stream = AsyncMock()
        stream.next_event.side_effect = StoreError("Realtime channel closed")
        query = self._create_query(find, stream)
        await query.__anext__()

        with pytest.raises(StoreError):
            await query.__anext__()

        assert query.closed
        stream.close.assert_awaited_once()
        with pytest.raises(StopAsyncIteration):
            await query.__anext__()

    async def test_cancel_is_idempotent(self):
        """Test cancel closes stream once."""
        stream = AsyncMock()
        query = self._create_query(AsyncMock(return_value=[]), stream)
        await query.__anext__()

        await query.cancel()
        await query.cancel()

        stream.close.assert_awaited_once()

    async def test_cancel_before_iteration(self):
        """Test cancelled query never opens a stream."""
        open_stream = AsyncMock()
        query = LiveQuery("donations", AsyncMock(), open_stream)

        await query.cancel()
        collected = [item async for item in query]

        assert collected == []
        open_stream.assert_not_awaited()

    async def test_cancel_while_opening_closes_stream(self):
        """Test cancel during the first open closes the late stream."""
        gate = asyncio.Event()
        stream = FakeChangeStream()
        find = AsyncMock(return_value={"data": [], "total": 0})

        async def open_stream():
            await gate.wait()
            return stream

        query = LiveQuery("donations", find, open_stream)
        first = asyncio.create_task(query.__anext__())
        await asyncio.sleep(0)

        await query.cancel()
        gate.set()

        with pytest.raises(StopAsyncIteration):
            await first
        assert stream.closed
        find.assert_not_awaited()

    async def test_map_transforms_emissions(self):
        """Test mapped subscription shares the cancel handle."""
        stream = FakeChangeStream()
        query = self._create_query(AsyncMock(return_value=[1, 2]), stream)
        mapped = query.map(len)

        assert await mapped.__anext__() == 2
        await mapped.cancel()

        assert query.closed and mapped.closed
        assert stream.closed


class TestChangeStream:
    """Unit tests for ChangeStream frame parsing."""

    def _create_stream(self, frame) -> ChangeStream:
        """Create stream whose socket yields one frame."""
        stream = ChangeStream("ws://store.test/", "donations")
        stream._ws = AsyncMock()
        stream._ws.recv.return_value = frame
        return stream

    def test_url(self):
        """Test channel URL joins base and path."""
        assert ChangeStream("ws://store.test/", "donations").url == (
            "ws://store.test/donations"
        )

    async def test_parses_frame(self):
        """Test JSON frame becomes a change event."""
        stream = self._create_stream(
            json.dumps({"path": "donations", "event": "created", "data": {"_id": "d1"}})
        )

        event = await stream.next_event()

        assert event == ChangeEvent("donations", "created", {"_id": "d1"})
        assert event.is_change

    async def test_malformed_frame(self):
        """Test frame without event is rejected."""
        stream = self._create_stream(json.dumps({"path": "donations"}))

        with pytest.raises(StoreError, match="Malformed"):
            await stream.next_event()

    async def test_not_open(self):
        """Test reading before open fails."""
        with pytest.raises(StoreError, match="not open"):
            await ChangeStream("ws://store.test", "donations").next_event()

    async def test_close(self):
        """Test close releases the socket."""
        stream = self._create_stream("{}")
        ws = stream._ws

        await stream.close()

        ws.close.assert_awaited_once()
        assert stream._ws is None

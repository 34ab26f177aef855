"""
Unit tests for TransactionMonitor.

Tests hash/mined/failure handling and error serialization.

Usage:
    pytest tests/unit/application/test_transaction_monitor.py
"""

import json
from unittest.mock import AsyncMock

from helpers.fakes import FakeSentTransaction

from mecene.application.transaction_monitor import (
    TransactionMonitor,
    failure_detail,
    serialize_error,
)
from mecene.domain.entities.chain_transaction import (
    ChainTransaction,
    TransactionStatus,
)
from mecene.domain.exceptions import StoreError, TransactionFailedError


class TestTransactionMonitor:
    """Unit tests for TransactionMonitor."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _create_send(self, sent: FakeSentTransaction):
        """Create send step returning a sent transaction."""

        async def send(tx: ChainTransaction):
            tx.explorer_url = "https://etherscan.io/"
            return sent

        return send

    # ================================================================
    # Run Tests
    # ================================================================

    async def test_confirms_mined_transaction(self, error_reporter):
        """Test mined transaction ends confirmed without reports."""
        monitor = TransactionMonitor(error_reporter)
        sent = FakeSentTransaction("0xH", receipt={"status": 1, "blockNumber": 9})
        on_hash = AsyncMock()

        tx = await monitor.run(
            ChainTransaction(operation="save"),
            self._create_send(sent),
            on_hash,
            "failed",
        )

        assert tx.status == TransactionStatus.CONFIRMED
        assert tx.receipt["blockNumber"] == 9
        on_hash.assert_awaited_once_with(tx)
        error_reporter.report.assert_not_awaited()

    async def test_hash_handled_before_mining(self, error_reporter):
        """Test on_hash completes before the receipt is awaited."""
        monitor = TransactionMonitor(error_reporter)
        sent = FakeSentTransaction("0xH")
        seen = []

        async def on_hash(tx):
            seen.append((tx.link, sent.waited))

        await monitor.run(
            ChainTransaction(operation="save"),
            self._create_send(sent),
            on_hash,
            "failed",
        )

        assert seen == [("https://etherscan.io/tx/0xH", False)]
        assert sent.waited

    async def test_send_failure_reported_without_hash(self, error_reporter):
        """Test failure before hash reports fallback link."""
        monitor = TransactionMonitor(error_reporter)

        async def send(tx):
            raise RuntimeError("User denied transaction signature")

        tx = await monitor.run(
            ChainTransaction(operation="save"), send, AsyncMock(), "Wallet locked?"
        )

        assert tx.status == TransactionStatus.FAILED
        error_reporter.report.assert_awaited_once()
        message, detail = error_reporter.report.await_args.args
        assert message == "Wallet locked?"
        assert detail.startswith("no transaction hash => ")
        assert "User denied" in detail

    async def test_mining_failure_reported_with_link(self, error_reporter):
        """Test reverted transaction reports its explorer link."""
        monitor = TransactionMonitor(error_reporter)
        sent = FakeSentTransaction(
            "0xH", error=TransactionFailedError("reverted", tx_hash="0xH")
        )

        tx = await monitor.run(
            ChainTransaction(operation="cancel"),
            self._create_send(sent),
            AsyncMock(),
            "cancel failed",
        )

        assert tx.status == TransactionStatus.FAILED
        _, detail = error_reporter.report.await_args.args
        assert detail.startswith("https://etherscan.io/tx/0xH => ")

    async def test_lost_transaction_ignored(self, error_reporter):
        """Test unknown-transaction error after hash is silent."""
        monitor = TransactionMonitor(error_reporter)
        sent = FakeSentTransaction(
            "0xH", error=RuntimeError("unknown transaction 0xH")
        )

        tx = await monitor.run(
            ChainTransaction(operation="save"),
            self._create_send(sent),
            AsyncMock(),
            "failed",
        )

        assert tx.status == TransactionStatus.SUBMITTED
        error_reporter.report.assert_not_awaited()


class TestErrorSerialization:
    """Unit tests for diagnostic error payloads."""

    def test_serialize_domain_error(self):
        """Test known attributes are serialized."""
        payload = json.loads(serialize_error(StoreError("down", status_code=503)))

        assert payload == {
            "type": "StoreError",
            "message": "down",
            "code": "STORE_ERROR",
            "status_code": 503,
        }

    def test_serialize_plain_error(self):
        """Test plain exception keeps type and message only."""
        payload = json.loads(serialize_error(KeyError("x")))

        assert payload["type"] == "KeyError"
        assert set(payload) == {"type", "message"}

    def test_failure_detail(self):
        """Test detail text joins link and error."""
        tx = ChainTransaction(operation="save", explorer_url="https://e.io/")
        tx.observe_hash("0xH")

        detail = failure_detail(tx, RuntimeError("boom"))

        link, error = detail.split(" => ", 1)
        assert link == "https://e.io/tx/0xH"
        assert json.loads(error)["message"] == "boom"

"""
Transaction monitor.

Drives a ChainTransaction through the chain client events:
hash observed, then mined, or failed.
"""

import json
import logging
from typing import Any, Awaitable, Callable

from mecene.domain.entities.chain_transaction import ChainTransaction
from mecene.domain.services.i_campaign_contracts import ISentTransaction
from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.infrastructure.monitoring.metrics import chain_transactions_total

logger = logging.getLogger(__name__)

Send = Callable[[ChainTransaction], Awaitable[ISentTransaction]]
OnHash = Callable[[ChainTransaction], Awaitable[None]]


def serialize_error(error: BaseException) -> str:
    """
    Serialize an error for diagnostic payloads.

    Args:
        error: Any exception

    Returns:
        Indented JSON with type, message and known attributes
    """
    payload: dict[str, Any] = {
        "type": type(error).__name__,
        "message": str(error),
    }
    for attr in ("code", "status_code", "tx_hash"):
        value = getattr(error, attr, None)
        if value is not None:
            payload[attr] = value

    return json.dumps(payload, indent=2, default=str)


def failure_detail(tx: ChainTransaction, error: BaseException) -> str:
    """Build "<explorer link> => <serialized error>" detail text."""
    return f"{tx.link} => {serialize_error(error)}"


class TransactionMonitor:
    """
    Runs campaign transactions and surfaces their failures.

    Failures are reported to the user and swallowed; the returned
    ChainTransaction tells the caller how the transaction ended.
    """

    def __init__(self, error_reporter: IErrorReporter):
        """
        Initialize monitor.

        Args:
            error_reporter: Side channel for fatal errors
        """
        self.error_reporter = error_reporter

    async def run(
        self,
        tx: ChainTransaction,
        send: Send,
        on_hash: OnHash,
        failure_message: str,
    ) -> ChainTransaction:
        """
        Send a transaction and wait for it to be mined.

        Args:
            tx: Transaction in SUBMITTED state
            send: Resolves collaborators and sends, returning the handle
            on_hash: Called once the hash is observed, before mining
            failure_message: User-facing message for fatal failures

        Returns:
            The transaction, CONFIRMED, FAILED, or still SUBMITTED when
            the chain client lost track of a valid transaction
        """
        try:
            sent = await send(tx)
            tx.observe_hash(sent.tx_hash)
            logger.info(f"{tx.operation} transaction sent: {tx.tx_hash}")

            await on_hash(tx)
            receipt = await sent.wait_mined()

        except Exception as e:
            if not tx.fail(e):
                logger.warning(
                    f"Ignoring lost {tx.operation} transaction {tx.tx_hash}: {e}"
                )
                chain_transactions_total.labels(
                    operation=tx.operation, outcome="ignored"
                ).inc()
                return tx

            logger.error(
                f"{tx.operation} transaction failed: {e}",
                exc_info=True,
            )
            chain_transactions_total.labels(
                operation=tx.operation, outcome="failed"
            ).inc()
            await self.error_reporter.report(failure_message, failure_detail(tx, e))
            return tx

        tx.confirm(receipt)
        logger.info(f"{tx.operation} transaction mined: {tx.tx_hash}")
        chain_transactions_total.labels(
            operation=tx.operation, outcome="confirmed"
        ).inc()
        return tx

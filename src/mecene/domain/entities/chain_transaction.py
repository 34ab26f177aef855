"""
ChainTransaction entity - state of one campaign mutation on chain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from mecene.domain.exceptions.blockchain import InvalidStateTransitionError
from mecene.domain.value_objects.network import explorer_link

# Chain clients report this for valid transactions they lost track of
UNKNOWN_TRANSACTION_MARKER = "unknown transaction"


class TransactionStatus(str, Enum):
    """Chain transaction states."""

    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class ChainTransaction:
    """
    ChainTransaction entity tracking a sent campaign transaction.

    Business rules:
    - Starts SUBMITTED when handed to the chain client
    - The hash can be observed once, only while SUBMITTED
    - Status transitions: SUBMITTED -> CONFIRMED or FAILED
    - Cannot leave CONFIRMED or FAILED
    - An "unknown transaction" failure after the hash was observed is
      not a failure: the transaction stays SUBMITTED
    """

    operation: str
    explorer_url: Optional[str] = field(default=None)
    tx_hash: Optional[str] = field(default=None)
    status: TransactionStatus = field(default=TransactionStatus.SUBMITTED)
    receipt: Optional[Any] = field(default=None)
    error: Optional[BaseException] = field(default=None)
    submitted_at: datetime = field(default_factory=datetime.now)
    confirmed_at: Optional[datetime] = field(default=None)

    @property
    def link(self) -> str:
        """Explorer link for this transaction."""
        return explorer_link(self.explorer_url, self.tx_hash)

    @property
    def is_settled(self) -> bool:
        """Check if transaction reached a final state."""
        return self.status != TransactionStatus.SUBMITTED

    def observe_hash(self, tx_hash: str) -> None:
        """
        Record the transaction hash reported by the chain client.

        Raises:
            ValueError: If hash is empty or was already observed
            InvalidStateTransitionError: If not in SUBMITTED status
        """
        self._require_submitted(TransactionStatus.SUBMITTED)

        if not tx_hash:
            raise ValueError("Transaction hash is required")
        if self.tx_hash:
            raise ValueError(f"Transaction hash already observed: {self.tx_hash}")

        self.tx_hash = tx_hash

    def confirm(self, receipt: Any = None) -> None:
        """
        Mark transaction as mined.

        Raises:
            InvalidStateTransitionError: If not in SUBMITTED status
        """
        self._require_submitted(TransactionStatus.CONFIRMED)

        self.status = TransactionStatus.CONFIRMED
        self.receipt = receipt
        self.confirmed_at = datetime.now()

    def is_false_failure(self, error: BaseException) -> bool:
        """Check if error is the chain client's spurious lost-transaction."""
        return bool(self.tx_hash) and UNKNOWN_TRANSACTION_MARKER in _message_of(
            error
        )

    def fail(self, error: BaseException) -> bool:
        """
        Mark transaction as failed unless the failure is spurious.

        Args:
            error: Failure raised by the chain client

        Returns:
            True if the transaction moved to FAILED, False if ignored

        Raises:
            InvalidStateTransitionError: If not in SUBMITTED status
        """
        self._require_submitted(TransactionStatus.FAILED)

        if self.is_false_failure(error):
            return False

        self.status = TransactionStatus.FAILED
        self.error = error
        return True

    def _require_submitted(self, target: TransactionStatus) -> None:
        if self.status != TransactionStatus.SUBMITTED:
            raise InvalidStateTransitionError(self.status.value, target.value)

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "operation": self.operation,
            "tx_hash": self.tx_hash,
            "status": self.status.value,
            "link": self.link,
            "error": str(self.error) if self.error else None,
            "submitted_at": self.submitted_at.isoformat(),
            "confirmed_at": (
                self.confirmed_at.isoformat() if self.confirmed_at else None
            ),
        }


def _message_of(error: BaseException) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)

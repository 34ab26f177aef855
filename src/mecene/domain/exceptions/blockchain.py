"""
Blockchain-related exceptions.

Defines exceptions for network resolution and campaign transactions.
"""

from mecene.domain.exceptions.base import MeceneException


class BlockchainError(MeceneException):
    """Base exception for blockchain operations."""


class NetworkResolutionError(BlockchainError):
    """Raised when the active network or chain client cannot be resolved."""

    def __init__(self, network: str, reason: str):
        """
        Initialize network resolution error.

        Args:
            network: Network name that was being resolved
            reason: Underlying failure description
        """
        super().__init__(f"Cannot resolve network {network}: {reason}")
        self.network = network


class TransactionFailedError(BlockchainError):
    """Raised when a transaction is rejected or reverted."""

    def __init__(self, message: str, tx_hash: str | None = None):
        """
        Initialize transaction failure.

        Args:
            message: Error description
            tx_hash: Transaction hash, when one was observed
        """
        super().__init__(message)
        self.tx_hash = tx_hash


class InvalidStateTransitionError(BlockchainError):
    """Raised when a chain transaction is moved to an illegal state."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot move transaction from {current} to {target}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current = current
        self.target = target

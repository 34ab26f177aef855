"""
Campaign contract service interfaces.

Wrappers around the campaign factory and deployed campaign contracts.
Sending returns as soon as the chain client reports the transaction
hash; mining is awaited separately on the returned handle.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ISentTransaction(ABC):
    """Handle of a transaction accepted by the chain client."""

    @property
    @abstractmethod
    def tx_hash(self) -> str:
        """Transaction hash."""

    @abstractmethod
    async def wait_mined(self) -> Any:
        """
        Wait until the transaction is included in a block.

        Returns:
            Transaction receipt

        Raises:
            TransactionFailedError: If transaction reverted
            Exception: Chain client errors (may be spurious, see
                ChainTransaction.fail)
        """


class ICampaignFactory(ABC):
    """Abstract wrapper of the campaign factory contract."""

    @abstractmethod
    async def new_campaign(
        self,
        name: str,
        url: str,
        parent_project: int,
        reviewer: str,
        from_address: str,
    ) -> ISentTransaction:
        """
        Deploy a new campaign contract.

        Args:
            name: Campaign title
            url: Campaign URL (unused, empty)
            parent_project: Parent project id (0 for none)
            reviewer: Reviewer address
            from_address: Sender address

        Returns:
            Sent transaction handle
        """


class ICampaignContract(ABC):
    """Abstract wrapper of a deployed campaign contract."""

    @abstractmethod
    async def cancel_campaign(self, from_address: str) -> ISentTransaction:
        """
        Cancel the campaign on chain.

        Args:
            from_address: Sender address

        Returns:
            Sent transaction handle
        """


# Binds a contract wrapper to (chain client, deployed address)
CampaignContractFactory = Callable[[Any, str], ICampaignContract]

"""
Campaign contract wrappers.

Thin web3 bindings of the LPP campaign factory and LPP campaign
contracts. Sending returns once the node accepts the transaction.
"""

import logging
from typing import Any

from web3 import AsyncWeb3

from mecene.domain.exceptions import TransactionFailedError
from mecene.domain.services.i_campaign_contracts import (
    ICampaignContract,
    ICampaignFactory,
    ISentTransaction,
)

logger = logging.getLogger(__name__)

CAMPAIGN_FACTORY_ABI = [
    {
        "type": "function",
        "name": "newCampaign",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "url", "type": "string"},
            {"name": "parentProject", "type": "uint64"},
            {"name": "reviewer", "type": "address"},
        ],
        "outputs": [],
    },
]

CAMPAIGN_ABI = [
    {
        "type": "function",
        "name": "cancelCampaign",
        "stateMutability": "nonpayable",
        "inputs": [],
        "outputs": [],
    },
]


class Web3SentTransaction(ISentTransaction):
    """Transaction accepted by a web3 node."""

    def __init__(
        self,
        w3: AsyncWeb3,
        tx_hash: str,
        receipt_timeout: float = 600.0,
        poll_latency: float = 2.0,
    ):
        """
        Initialize sent transaction handle.

        Args:
            w3: Connected web3 client
            tx_hash: 0x-prefixed transaction hash
            receipt_timeout: Max seconds to wait for mining
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self._tx_hash = tx_hash
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    @property
    def tx_hash(self) -> str:
        return self._tx_hash

    async def wait_mined(self) -> Any:
        """
        Wait for the receipt.

        Raises:
            TransactionFailedError: If the transaction reverted
            web3.exceptions.TimeExhausted: If not mined in time
        """
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            self._tx_hash,
            timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )

        if receipt.get("status") == 0:
            raise TransactionFailedError(
                f"Transaction reverted in block {receipt.get('blockNumber')}",
                tx_hash=self._tx_hash,
            )

        return receipt


class CampaignFactoryContract(ICampaignFactory):
    """LPP campaign factory bound to a web3 client."""

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        receipt_timeout: float = 600.0,
        poll_latency: float = 2.0,
    ):
        self.w3 = w3
        self.address = AsyncWeb3.to_checksum_address(address)
        self.contract = w3.eth.contract(address=self.address, abi=CAMPAIGN_FACTORY_ABI)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    async def new_campaign(
        self,
        name: str,
        url: str,
        parent_project: int,
        reviewer: str,
        from_address: str,
    ) -> ISentTransaction:
        """Send newCampaign(name, url, parentProject, reviewer)."""
        tx_hash = await self.contract.functions.newCampaign(
            name,
            url,
            parent_project,
            AsyncWeb3.to_checksum_address(reviewer),
        ).transact({"from": AsyncWeb3.to_checksum_address(from_address)})

        logger.debug(f"newCampaign sent by {from_address}")
        return Web3SentTransaction(
            self.w3,
            AsyncWeb3.to_hex(tx_hash),
            receipt_timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )


class CampaignContract(ICampaignContract):
    """Deployed LPP campaign bound to a web3 client."""

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        receipt_timeout: float = 600.0,
        poll_latency: float = 2.0,
    ):
        """
        Bind campaign contract.

        Args:
            w3: Connected web3 client
            address: Deployed campaign (plugin) address

        Raises:
            ValueError: If address is missing or invalid
        """
        if not address:
            raise ValueError("Campaign contract address is required")

        self.w3 = w3
        self.address = AsyncWeb3.to_checksum_address(address)
        self.contract = w3.eth.contract(address=self.address, abi=CAMPAIGN_ABI)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    async def cancel_campaign(self, from_address: str) -> ISentTransaction:
        """Send cancelCampaign()."""
        tx_hash = await self.contract.functions.cancelCampaign().transact(
            {"from": AsyncWeb3.to_checksum_address(from_address)}
        )

        logger.debug(f"cancelCampaign sent for {self.address}")
        return Web3SentTransaction(
            self.w3,
            AsyncWeb3.to_hex(tx_hash),
            receipt_timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )

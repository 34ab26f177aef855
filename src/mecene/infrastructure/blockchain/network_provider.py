"""
Web3 network provider.

Resolves the configured EVM network: a connected web3 client, the
campaign factory and the block explorer base URL.
"""

import asyncio
import logging
from typing import Optional

from web3 import AsyncWeb3

from mecene.domain.exceptions import NetworkResolutionError
from mecene.domain.services.i_network_provider import (
    IChainClientProvider,
    INetworkProvider,
)
from mecene.domain.value_objects.network import Network
from mecene.infrastructure.blockchain.contracts import CampaignFactoryContract

logger = logging.getLogger(__name__)

EXPLORER_URLS = {
    "mainnet": "https://etherscan.io/",
    "ropsten": "https://ropsten.etherscan.io/",
    "rinkeby": "https://rinkeby.etherscan.io/",
    "goerli": "https://goerli.etherscan.io/",
    "sepolia": "https://sepolia.etherscan.io/",
    "holesky": "https://holesky.etherscan.io/",
}


class Web3NetworkProvider(INetworkProvider, IChainClientProvider):
    """
    Network and chain client accessor backed by web3.

    The web3 client is created lazily and reused; connectivity is
    checked on every resolution.
    """

    def __init__(
        self,
        rpc_url: str,
        network: str,
        campaign_factory_address: Optional[str],
        explorer_url: Optional[str] = None,
        receipt_timeout: float = 600.0,
        poll_latency: float = 2.0,
        request_timeout: float = 30.0,
    ):
        """
        Initialize provider.

        Args:
            rpc_url: JSON-RPC endpoint
            network: Network name (mainnet, sepolia, ...)
            campaign_factory_address: Deployed campaign factory address
            explorer_url: Explorer base URL (defaults per network)
            receipt_timeout: Max seconds to wait for mining
            poll_latency: Seconds between receipt polls
            request_timeout: JSON-RPC request timeout
        """
        self.rpc_url = rpc_url
        self.network = network
        self.campaign_factory_address = campaign_factory_address
        self.explorer_url = explorer_url or EXPLORER_URLS.get(network)
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self.request_timeout = request_timeout
        self._w3: Optional[AsyncWeb3] = None
        self._lock = asyncio.Lock()

    async def get_chain_client(self) -> AsyncWeb3:
        """Resolve the connected web3 client."""
        if self._w3 is None:
            async with self._lock:
                if self._w3 is None:
                    self._w3 = AsyncWeb3(
                        AsyncWeb3.AsyncHTTPProvider(
                            self.rpc_url,
                            request_kwargs={"timeout": self.request_timeout},
                        )
                    )

        if not await self._w3.is_connected():
            raise NetworkResolutionError(
                self.network, f"RPC endpoint {self.rpc_url} unreachable"
            )

        return self._w3

    async def get_network(self) -> Network:
        """Resolve network metadata and the campaign factory."""
        if not self.campaign_factory_address:
            raise NetworkResolutionError(
                self.network, "campaign factory address not configured"
            )
        if not self.explorer_url:
            raise NetworkResolutionError(
                self.network, "no explorer URL known for this network"
            )

        w3 = await self.get_chain_client()
        factory = CampaignFactoryContract(
            w3,
            self.campaign_factory_address,
            receipt_timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )

        return Network(
            name=self.network,
            campaign_factory=factory,
            explorer_url=self.explorer_url,
        )

    async def close(self) -> None:
        """Close the RPC provider session."""
        if self._w3 is not None:
            await self._w3.provider.disconnect()
            self._w3 = None

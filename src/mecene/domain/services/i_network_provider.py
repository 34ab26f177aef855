"""
Network provider service interfaces.

Resolve the active blockchain network and the raw chain client.
"""

from abc import ABC, abstractmethod
from typing import Any

from mecene.domain.value_objects.network import Network


class INetworkProvider(ABC):
    """Abstract accessor for the active blockchain network."""

    @abstractmethod
    async def get_network(self) -> Network:
        """
        Resolve the active network.

        Returns:
            Network with campaign factory handle and explorer URL

        Raises:
            NetworkResolutionError: If network cannot be reached
        """


class IChainClientProvider(ABC):
    """Abstract accessor for the raw chain client."""

    @abstractmethod
    async def get_chain_client(self) -> Any:
        """
        Resolve a connected chain client.

        Returns:
            Client usable to bind campaign contract wrappers

        Raises:
            NetworkResolutionError: If client cannot connect
        """

"""
Blockchain infrastructure (web3).
"""

from mecene.infrastructure.blockchain.contracts import (
    CampaignContract,
    CampaignFactoryContract,
    Web3SentTransaction,
)
from mecene.infrastructure.blockchain.network_provider import (
    EXPLORER_URLS,
    Web3NetworkProvider,
)

__all__ = [
    "CampaignContract",
    "CampaignFactoryContract",
    "Web3SentTransaction",
    "Web3NetworkProvider",
    "EXPLORER_URLS",
]

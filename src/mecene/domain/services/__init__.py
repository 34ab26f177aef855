"""
Domain service interfaces.
"""

from mecene.domain.services.i_campaign_contracts import (
    CampaignContractFactory,
    ICampaignContract,
    ICampaignFactory,
    ISentTransaction,
)
from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.domain.services.i_network_provider import (
    IChainClientProvider,
    INetworkProvider,
)
from mecene.domain.services.i_store import IStoreClient, IStoreService
from mecene.domain.services.i_subscription import (
    ISubscription,
    MappedSubscription,
)

__all__ = [
    "CampaignContractFactory",
    "ICampaignContract",
    "ICampaignFactory",
    "ISentTransaction",
    "IErrorReporter",
    "IChainClientProvider",
    "INetworkProvider",
    "IStoreClient",
    "IStoreService",
    "ISubscription",
    "MappedSubscription",
]

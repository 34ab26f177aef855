"""
Domain exceptions package.
"""

# Base exceptions
from mecene.domain.exceptions.base import (
    EntityNotFoundError,
    MeceneException,
)

# Blockchain exceptions
from mecene.domain.exceptions.blockchain import (
    BlockchainError,
    InvalidStateTransitionError,
    NetworkResolutionError,
    TransactionFailedError,
)

# Store exceptions
from mecene.domain.exceptions.store import (
    CampaignNotFoundError,
    StoreError,
    SubscriptionClosedError,
)

__all__ = [
    # Base
    "MeceneException",
    "EntityNotFoundError",
    # Store
    "StoreError",
    "CampaignNotFoundError",
    "SubscriptionClosedError",
    # Blockchain
    "BlockchainError",
    "NetworkResolutionError",
    "TransactionFailedError",
    "InvalidStateTransitionError",
]

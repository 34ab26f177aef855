"""
Domain entities.
"""

from mecene.domain.entities.campaign import Campaign, CampaignStatus
from mecene.domain.entities.chain_transaction import (
    UNKNOWN_TRANSACTION_MARKER,
    ChainTransaction,
    TransactionStatus,
)
from mecene.domain.entities.donation import Donation
from mecene.domain.entities.milestone import (
    HIDDEN_MILESTONE_STATUSES,
    MilestoneStatus,
)

__all__ = [
    "Campaign",
    "CampaignStatus",
    "ChainTransaction",
    "TransactionStatus",
    "UNKNOWN_TRANSACTION_MARKER",
    "Donation",
    "MilestoneStatus",
    "HIDDEN_MILESTONE_STATUSES",
]

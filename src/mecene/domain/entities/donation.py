"""
Donation entity - Domain model for campaign donations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from mecene.domain.entities.timestamps import parse_timestamp


@dataclass
class Donation:
    """
    Donation entity representing funds given to a campaign.

    Business rules:
    - A donation always belongs to a campaign
    - Returned (refunded) donations are flagged with is_return
    - Giver details are only present when the store expands them
    """

    id: Optional[str] = field(default=None)
    campaign_id: Optional[str] = field(default=None)
    amount: str = field(default="0")
    giver_address: Optional[str] = field(default=None)
    giver: dict = field(default_factory=dict)
    owner_type: Optional[str] = field(default=None)
    owner_type_id: Optional[str] = field(default=None)
    intended_project_type: Optional[str] = field(default=None)
    status: Optional[str] = field(default=None)
    is_return: bool = field(default=False)
    tx_hash: Optional[str] = field(default=None)
    home_tx_hash: Optional[str] = field(default=None)
    mined: bool = field(default=False)
    created_at: Optional[datetime] = field(default=None)

    @classmethod
    def from_record(cls, record: dict) -> "Donation":
        """
        Build donation from a raw store record.

        Args:
            record: Store record (camelCase keys)

        Returns:
            Donation entity
        """
        return cls(
            id=record.get("_id") or record.get("id"),
            campaign_id=record.get("campaignId"),
            amount=str(record.get("amount") or "0"),
            giver_address=record.get("giverAddress"),
            giver=record.get("giver") or {},
            owner_type=record.get("ownerType"),
            owner_type_id=record.get("ownerTypeId"),
            intended_project_type=record.get("intendedProjectType"),
            status=record.get("status"),
            is_return=bool(record.get("isReturn", False)),
            tx_hash=record.get("txHash"),
            home_tx_hash=record.get("homeTxHash"),
            mined=bool(record.get("mined", False)),
            created_at=parse_timestamp(record.get("createdAt")),
        )

    @property
    def giver_name(self) -> str:
        """Display name of the giver."""
        return self.giver.get("name") or "Anonymous"

"""
Campaign entity - Domain model for crowdfunding campaigns.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from mecene.domain.entities.timestamps import parse_timestamp


class CampaignStatus(str, Enum):
    """Campaign lifecycle states."""

    PENDING = "Pending"
    ACTIVE = "Active"
    CANCELED = "Canceled"


@dataclass
class Campaign:
    """
    Campaign entity representing a crowdfunding campaign.

    Business rules:
    - A campaign without id is a client-side draft
    - Drafts are persisted as PENDING once the creation hash is observed
    - pluginAddress (on-chain identity) exists only after deployment
    - ACTIVE campaigns are listed only with a positive project id
    - Status transitions: PENDING -> ACTIVE -> CANCELED
    """

    id: Optional[str] = field(default=None)
    title: str = field(default="")
    description: str = field(default="")
    summary: str = field(default="")
    image: str = field(default="")
    community_url: str = field(default="")
    owner_address: Optional[str] = field(default=None)
    reviewer_address: Optional[str] = field(default=None)
    plugin_address: Optional[str] = field(default=None)
    project_id: int = field(default=0)
    status: CampaignStatus = field(default=CampaignStatus.PENDING)
    tx_hash: Optional[str] = field(default=None)
    mined: bool = field(default=False)
    created_at: Optional[datetime] = field(default=None)
    total_donated: str = field(default="0")
    donation_count: int = field(default=0)
    people_count: int = field(default=0)

    def __post_init__(self):
        """Normalize raw values coming from the store."""
        if not isinstance(self.status, CampaignStatus):
            self.status = CampaignStatus(self.status)

        self.project_id = int(self.project_id or 0)
        if self.project_id < 0:
            raise ValueError("Campaign project id cannot be negative")

    @classmethod
    def from_record(cls, record: Optional[dict]) -> "Campaign":
        """
        Build campaign from a raw store record.

        Args:
            record: Store record (camelCase keys); None yields a draft

        Returns:
            Campaign entity
        """
        record = record or {}
        return cls(
            id=record.get("_id") or record.get("id"),
            title=record.get("title") or "",
            description=record.get("description") or "",
            summary=record.get("summary") or "",
            image=record.get("image") or "",
            community_url=record.get("communityUrl") or "",
            owner_address=record.get("ownerAddress"),
            reviewer_address=record.get("reviewerAddress"),
            plugin_address=record.get("pluginAddress"),
            project_id=record.get("projectId") or 0,
            status=record.get("status") or CampaignStatus.PENDING,
            tx_hash=record.get("txHash"),
            mined=bool(record.get("mined", False)),
            created_at=parse_timestamp(record.get("createdAt")),
            total_donated=str(record.get("totalDonated") or "0"),
            donation_count=int(record.get("donationCount") or 0),
            people_count=int(record.get("peopleCount") or 0),
        )

    @property
    def is_draft(self) -> bool:
        """Check if campaign has not been persisted yet."""
        return not self.id

    @property
    def is_active(self) -> bool:
        """Check if campaign is listed as active."""
        return self.status == CampaignStatus.ACTIVE and self.project_id > 0

    @property
    def is_pending(self) -> bool:
        """Check if campaign awaits chain confirmation."""
        return self.status == CampaignStatus.PENDING

    @property
    def is_canceled(self) -> bool:
        """Check if campaign was canceled."""
        return self.status == CampaignStatus.CANCELED

    def is_managed_by(self, address: str) -> bool:
        """Check if address is the campaign owner or reviewer."""
        return address in (self.owner_address, self.reviewer_address)

    def to_store_record(self, tx_hash: Optional[str] = None) -> dict[str, Any]:
        """
        Serialize campaign for the store.

        Drafts also carry the owner and the creation transaction hash.

        Args:
            tx_hash: Creation transaction hash (drafts only)

        Returns:
            Dictionary with camelCase store fields
        """
        record: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "communityUrl": self.community_url,
            "summary": self.summary,
            "image": self.image,
            "reviewerAddress": self.reviewer_address,
            "status": self.status.value,
        }

        if self.is_draft:
            record["ownerAddress"] = self.owner_address
            if tx_hash:
                record["txHash"] = tx_hash

        return record

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "owner_address": self.owner_address,
            "reviewer_address": self.reviewer_address,
            "plugin_address": self.plugin_address,
            "project_id": self.project_id,
            "status": self.status.value,
            "tx_hash": self.tx_hash,
            "mined": self.mined,
            "created_at": (
                self.created_at.isoformat() if self.created_at else None
            ),
            "total_donated": self.total_donated,
            "donation_count": self.donation_count,
        }

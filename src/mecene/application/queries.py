"""
Store queries for campaign pages.

Each builder returns the query dictionary sent to a store collection.
"""

from mecene.domain.entities.campaign import CampaignStatus
from mecene.domain.entities.milestone import HIDDEN_MILESTONE_STATUSES

CAMPAIGNS = "campaigns"
MILESTONES = "milestones"
DONATIONS = "donations"

DEFAULT_LIMIT = 100
NEWEST_FIRST = {"createdAt": -1}

# Server-side schema expanding donation owner type and giver details
DONATION_DETAILS_SCHEMA = "includeTypeAndGiverDetails"


def campaign_by_id(campaign_id: str) -> dict:
    """Query matching one campaign by store id."""
    return {"_id": campaign_id}


def active_campaigns(limit: int = DEFAULT_LIMIT, skip: int = 0) -> dict:
    """Query listing active campaigns, newest first."""
    return {
        "projectId": {"$gt": 0},  # 0 is a pending campaign
        "status": CampaignStatus.ACTIVE.value,
        "$limit": limit,
        "$skip": skip,
        "$sort": dict(NEWEST_FIRST),
    }


def visible_milestones(
    campaign_id: str, limit: int = DEFAULT_LIMIT, skip: int = 0
) -> dict:
    """Query listing a campaign's milestones worth showing, newest first."""
    return {
        "campaignId": campaign_id,
        "status": {"$nin": [status.value for status in HIDDEN_MILESTONE_STATUSES]},
        "$sort": dict(NEWEST_FIRST),
        "$limit": limit,
        "$skip": skip,
    }


def campaign_donations(campaign_id: str) -> dict:
    """Query listing a campaign's donations, returned ones excluded."""
    return {
        "campaignId": campaign_id,
        "isReturn": False,
        "$sort": dict(NEWEST_FIRST),
    }


def user_campaigns(user_address: str, skip_pages: int, items_per_page: int) -> dict:
    """Query listing campaigns owned or reviewed by a user."""
    return {
        "$or": [
            {"ownerAddress": user_address},
            {"reviewerAddress": user_address},
        ],
        "$sort": dict(NEWEST_FIRST),
        "$limit": items_per_page,
        "$skip": skip_pages * items_per_page,
    }

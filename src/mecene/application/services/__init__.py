"""
Application services.
"""

from mecene.application.services.campaign_service import CampaignService

__all__ = ["CampaignService"]

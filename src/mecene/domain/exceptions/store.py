"""
Store-related exceptions.

Raised by the real-time query service adapters.
"""

from mecene.domain.exceptions.base import EntityNotFoundError, MeceneException


class StoreError(MeceneException):
    """Raised when a store request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        """
        Initialize store error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the store
        """
        super().__init__(message, code="STORE_ERROR")
        self.status_code = status_code


class CampaignNotFoundError(EntityNotFoundError):
    """Raised when no campaign matches the requested id."""

    def __init__(self, campaign_id: str):
        super().__init__("Campaign", campaign_id)
        self.campaign_id = campaign_id


class SubscriptionClosedError(MeceneException):
    """Raised when iterating a subscription that was cancelled."""

    def __init__(self, description: str):
        super().__init__(
            f"Subscription {description} is closed",
            code="SUBSCRIPTION_CLOSED",
        )

"""
Milestone statuses.

Milestone records are passed through unwrapped; only the status
vocabulary is modeled here.
"""

from enum import Enum


class MilestoneStatus(str, Enum):
    """Milestone lifecycle states."""

    PROPOSED = "Proposed"
    REJECTED = "Rejected"
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    NEEDS_REVIEW = "NeedsReview"
    COMPLETED = "Completed"
    CANCELED = "Canceled"
    PAYING = "Paying"
    PAID = "Paid"
    FAILED = "Failed"


# Statuses never shown on a campaign page
HIDDEN_MILESTONE_STATUSES = (
    MilestoneStatus.CANCELED,
    MilestoneStatus.PROPOSED,
    MilestoneStatus.REJECTED,
    MilestoneStatus.PENDING,
)

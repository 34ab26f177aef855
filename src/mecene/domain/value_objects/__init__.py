"""
Domain value objects.
"""

from mecene.domain.value_objects.network import (
    NO_TRANSACTION_HASH,
    Network,
    explorer_link,
)
from mecene.domain.value_objects.page import Page

__all__ = [
    "Network",
    "NO_TRANSACTION_HASH",
    "Page",
    "explorer_link",
]

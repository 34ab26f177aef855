"""
Store infrastructure (Feathers REST + realtime).
"""

from mecene.infrastructure.store.feathers_client import (
    FeathersClient,
    FeathersService,
)
from mecene.infrastructure.store.live_query import LiveQuery

__all__ = ["FeathersClient", "FeathersService", "LiveQuery"]

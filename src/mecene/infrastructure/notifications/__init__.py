"""
User notification infrastructure (Courier).
"""

from mecene.infrastructure.notifications.courier_client import CourierClient
from mecene.infrastructure.notifications.error_reporter import (
    CourierErrorReporter,
    LoggingErrorReporter,
)

__all__ = ["CourierClient", "CourierErrorReporter", "LoggingErrorReporter"]

"""
Error reporter adapters.

Surface campaign errors to users through Courier, or only to the logs.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.infrastructure.monitoring.metrics import errors_reported_total
from mecene.infrastructure.notifications.courier_client import CourierClient

logger = logging.getLogger(__name__)


def _severity(fatal: bool) -> str:
    return "fatal" if fatal else "error"


class LoggingErrorReporter(IErrorReporter):
    """Reporter writing errors to the application log only."""

    async def report(self, message: str, detail: Any, fatal: bool = True) -> None:
        errors_reported_total.labels(severity=_severity(fatal)).inc()
        logger.error(
            f"{message}: {detail}",
            extra={"context": {"severity": _severity(fatal)}},
        )


class CourierErrorReporter(IErrorReporter):
    """
    Reporter publishing error popups to a Courier channel.

    UI clients subscribed to the channel render the popup. Publishing
    failures are logged, never raised.
    """

    def __init__(self, courier_client: CourierClient, channel: str = "errors"):
        """
        Initialize reporter.

        Args:
            courier_client: Shared Courier client instance
            channel: Channel UI clients listen on for popups
        """
        self.courier = courier_client
        self.channel = channel

    async def report(self, message: str, detail: Any, fatal: bool = True) -> None:
        """Publish an error_popup event."""
        severity = _severity(fatal)
        errors_reported_total.labels(severity=severity).inc()
        logger.error(f"{message}: {detail}", extra={"context": {"severity": severity}})

        event = {
            "type": "error_popup",
            "severity": severity,
            "message": message,
            "detail": detail if isinstance(detail, (str, dict, list)) else str(detail),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if not await self.courier.publish(self.channel, event):
            logger.warning(f"Error popup not delivered to Courier: {message}")

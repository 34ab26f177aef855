"""
Timestamp parsing for store records.
"""

from datetime import datetime
from typing import Any, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a store timestamp.

    The store serializes dates as ISO-8601 strings with a trailing "Z".

    Args:
        value: ISO string, datetime or None

    Returns:
        Timezone-aware datetime or None
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))

"""
Network value object - resolved blockchain network metadata.
"""

from dataclasses import dataclass
from typing import Any

NO_TRANSACTION_HASH = "no transaction hash"


@dataclass(frozen=True)
class Network:
    """
    Value object describing the active blockchain network.

    Attributes:
        name: Network name (mainnet, sepolia, ...)
        campaign_factory: Handle to the campaign factory contract
        explorer_url: Block explorer base URL, ending with "/"
    """

    name: str
    campaign_factory: Any
    explorer_url: str

    def __post_init__(self):
        """Normalize explorer URL so links can be appended directly."""
        if not self.explorer_url:
            raise ValueError("Explorer URL is required")
        if not self.explorer_url.endswith("/"):
            object.__setattr__(self, "explorer_url", self.explorer_url + "/")


def explorer_link(explorer_url: str | None, tx_hash: str | None) -> str:
    """Build "<explorer>tx/<hash>" with explicit text for missing parts."""
    if not tx_hash:
        return NO_TRANSACTION_HASH
    if not explorer_url:
        return tx_hash
    return f"{explorer_url}tx/{tx_hash}"

"""
Error reporter service interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class IErrorReporter(ABC):
    """
    Abstract side channel surfacing errors to the user.

    Reporting is fire-and-forget: implementations must not raise.
    """

    @abstractmethod
    async def report(self, message: str, detail: Any, fatal: bool = True) -> None:
        """
        Report an error.

        Args:
            message: Short user-facing message
            detail: Diagnostic string or object
            fatal: True for failures that abort the operation
        """

"""
Page value object - one paginated slice of a store collection.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, List, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    Paginated find result.

    Mirrors the store's response envelope: the records of the current
    slice plus the total count of matching records and the pagination
    parameters the store applied.
    """

    data: List[T] = field(default_factory=list)
    total: int = 0
    limit: int | None = None
    skip: int = 0

    @classmethod
    def from_response(cls, response: Any) -> "Page[dict]":
        """
        Build page from a raw find response.

        Accepts both the paginated envelope ({total, limit, skip, data})
        and a bare list, which the store returns when pagination is off.

        Args:
            response: Raw find response

        Returns:
            Page of raw records
        """
        if isinstance(response, list):
            return cls(data=list(response), total=len(response))

        data = list(response.get("data") or [])
        return cls(
            data=data,
            total=int(response.get("total", len(data))),
            limit=response.get("limit"),
            skip=int(response.get("skip") or 0),
        )

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Return a page with every record mapped, metadata preserved."""
        return replace(self, data=[fn(item) for item in self.data])

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

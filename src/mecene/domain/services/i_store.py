"""
Store service interface.

Defines the operations of the real-time query service holding
campaigns, milestones and donations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from mecene.domain.services.i_subscription import ISubscription


class IStoreService(ABC):
    """
    Abstract interface for one store collection.

    Queries are dictionaries supporting equality filters, the $gt, $nin
    and $or operators, and the $sort, $limit and $skip modifiers.
    Server params (e.g. schema) travel separately from the query.
    """

    @abstractmethod
    async def find(self, query: dict, params: Optional[dict] = None) -> Any:
        """
        Find records matching query.

        Args:
            query: Filter and pagination query
            params: Optional server-side params

        Returns:
            Paginated envelope {total, limit, skip, data} or a list

        Raises:
            StoreError: If request fails
        """

    @abstractmethod
    async def patch(self, record_id: str, data: dict) -> dict:
        """
        Merge data into an existing record.

        Args:
            record_id: Store id of the record
            data: Partial record

        Returns:
            Updated record

        Raises:
            StoreError: If request fails
        """

    @abstractmethod
    async def create(self, data: dict) -> dict:
        """
        Create a new record.

        Args:
            data: Record fields

        Returns:
            Created record, including its store id

        Raises:
            StoreError: If request fails
        """

    @abstractmethod
    def watch(
        self,
        query: dict,
        params: Optional[dict] = None,
        list_strategy: str = "always",
    ) -> ISubscription[Any]:
        """
        Open a live query.

        Emits the find result once, then again after every change the
        store pushes for this collection.

        Args:
            query: Filter and pagination query
            params: Optional server-side params
            list_strategy: Re-listing policy ("always" re-runs the find)

        Returns:
            Subscription of raw find results, owned by the caller
        """


class IStoreClient(ABC):
    """Abstract entry point to the store collections."""

    @abstractmethod
    def service(self, name: str) -> IStoreService:
        """
        Get collection service by name.

        Args:
            name: Collection path (campaigns, milestones, donations)
        """

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""

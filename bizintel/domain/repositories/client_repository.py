"""
Domain Repository Interface - Client

Read access to clients and, in bulk, to the histories attached to them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from bizintel.domain.entities.client import Client, ClientHistory, ClientStatus


class IClientRepository(ABC):
    """Interface for client repository."""

    @abstractmethod
    async def get_by_id(self, client_id: str) -> Optional[Client]:
        """Get a client by ID."""
        pass

    @abstractmethod
    async def get_by_ids(self, client_ids: Sequence[str]) -> List[Client]:
        """Get every existing client among ``client_ids`` in one query."""
        pass

    @abstractmethod
    async def count_by_status(self, status: ClientStatus) -> int:
        """Count clients in a lifecycle state."""
        pass

    @abstractmethod
    async def find_histories(
        self,
        status: ClientStatus,
        client_ids: Optional[Sequence[str]] = None,
    ) -> List[ClientHistory]:
        """
        Load clients in ``status`` together with their orders, visits/calls
        and feedback.

        The number of store round-trips is fixed and does not grow with
        the number of clients.

        Args:
            status: Lifecycle state to filter on
            client_ids: Optional subset of client IDs; None or empty means all
        """
        pass

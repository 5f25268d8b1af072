"""Domain Repository Interface - Product"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from bizintel.domain.entities.operations import Product


class IProductRepository(ABC):
    """Interface for product repository."""

    @abstractmethod
    async def get_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        """Get every existing product among ``product_ids`` in one query."""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count products currently offered."""
        pass

"""Domain Repository Interface - Delivery"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from bizintel.domain.entities.operations import Delivery


class IDeliveryRepository(ABC):
    """Interface for delivery repository."""

    @abstractmethod
    async def find_failed_since(
        self, since: datetime, limit: Optional[int] = None
    ) -> List[Delivery]:
        """Deliveries marked FAILED and scheduled at or after ``since``."""
        pass

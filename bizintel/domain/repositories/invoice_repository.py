"""Domain Repository Interface - Invoice"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from bizintel.domain.entities.operations import Invoice


class IInvoiceRepository(ABC):
    """Interface for invoice repository."""

    @abstractmethod
    async def find_overdue(
        self, reference_time: datetime, limit: Optional[int] = None
    ) -> List[Invoice]:
        """Invoices still in SENT status whose due date is before ``reference_time``."""
        pass

"""
Domain Repository Interface - Order

Read access to orders for analytics and forecasting. Grouped totals are
computed by the store; callers only receive one row per group.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from bizintel.domain.entities.analytics import (
    AggregationBucket,
    ClientRanking,
    ProductSalesTotals,
    SalesTotals,
)
from bizintel.domain.entities.client import Order
from bizintel.domain.entities.query import DateRange, OrderQuery


class IOrderRepository(ABC):
    """Interface for order repository."""

    @abstractmethod
    async def find(
        self,
        query: OrderQuery,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> List[Order]:
        """
        Orders matching ``query``, ordered by order date.

        Args:
            query: Date range and optional client filter
            newest_first: Sort descending instead of ascending
            limit: Optional maximum number of orders
        """
        pass

    @abstractmethod
    async def daily_sales(self, date_range: DateRange) -> List[AggregationBucket]:
        """One bucket per UTC day holding orders, ascending by day."""
        pass

    @abstractmethod
    async def status_totals(self, date_range: DateRange) -> List[SalesTotals]:
        """Order count and revenue per order status."""
        pass

    @abstractmethod
    async def revenue_by_client(
        self, date_range: DateRange, limit: int
    ) -> List[ClientRanking]:
        """
        Clients ranked by total revenue, descending.

        Equal totals go to the client whose first order in the range is
        earlier, then to the lower client id.
        """
        pass

    @abstractmethod
    async def sales_by_product(
        self, date_range: DateRange, limit: int
    ) -> List[ProductSalesTotals]:
        """Order lines summed per product, ranked like ``revenue_by_client``."""
        pass

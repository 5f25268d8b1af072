"""
Infrastructure Repository - Order MongoDB Implementation
"""

from datetime import date
from typing import Any, Dict, List, Optional

import structlog
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from bizintel.domain.entities.analytics import (
    AggregationBucket,
    ClientRanking,
    ProductSalesTotals,
    SalesTotals,
)
from bizintel.domain.entities.client import Order
from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.query import DateRange, OrderQuery
from bizintel.domain.repositories.order_repository import IOrderRepository
from bizintel.infrastructure.database.mongo_database import ORDERS, MongoDatabase
from bizintel.infrastructure.repositories.mappers import order_from_document

logger = structlog.get_logger(__name__)

DAY_FORMAT = "%Y-%m-%d"

# Highest revenue first; ties go to the earliest first order, then the key
RANKING_SORT = {"total_revenue": -1, "first_order": 1, "_id": 1}


def build_order_filter(query: OrderQuery) -> Dict[str, Any]:
    """Translate an order query into a MongoDB filter document."""
    mongo_filter: Dict[str, Any] = {}
    date_filter: Dict[str, Any] = {}
    if query.date_range.start is not None:
        date_filter["$gte"] = query.date_range.start
    if query.date_range.end is not None:
        date_filter["$lt"] = query.date_range.end
    if date_filter:
        mongo_filter["order_date"] = date_filter
    if query.client_id is not None:
        mongo_filter["client_id"] = query.client_id
    return mongo_filter


def _float(value: Any) -> float:
    return float(value) if value is not None else 0.0


class OrderRepository(IOrderRepository):
    """MongoDB implementation of order repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def find(
        self,
        query: OrderQuery,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> List[Order]:
        mongo_filter = build_order_filter(query)
        try:
            cursor = (
                self.database.get_collection(ORDERS)
                .find(mongo_filter)
                .sort("order_date", DESCENDING if newest_first else ASCENDING)
            )
            if limit:
                cursor = cursor.limit(limit)
            orders = [order_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to query orders", filter=str(mongo_filter), error=str(e))
            raise PersistenceError("Failed to query orders") from e

        logger.debug("Orders loaded", count=len(orders), client_id=query.client_id)
        return orders

    def _aggregate(
        self, date_range: DateRange, stages: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        pipeline = [
            {"$match": build_order_filter(OrderQuery(date_range=date_range))},
            *stages,
        ]
        try:
            rows = list(self.database.get_collection(ORDERS).aggregate(pipeline))
        except PyMongoError as e:
            logger.error("Failed to aggregate orders", pipeline=str(pipeline), error=str(e))
            raise PersistenceError("Failed to aggregate orders") from e

        logger.debug("Orders aggregated", groups=len(rows))
        return rows

    async def daily_sales(self, date_range: DateRange) -> List[AggregationBucket]:
        rows = self._aggregate(
            date_range,
            [
                {
                    "$group": {
                        "_id": {
                            "$dateToString": {"format": DAY_FORMAT, "date": "$order_date"}
                        },
                        "order_count": {"$sum": 1},
                        "total_revenue": {"$sum": "$total_amount"},
                    }
                },
                {"$sort": {"_id": 1}},
            ],
        )
        buckets = []
        for row in rows:
            total = _float(row.get("total_revenue"))
            count = int(row["order_count"])
            buckets.append(
                AggregationBucket(
                    period=date.fromisoformat(row["_id"]),
                    order_count=count,
                    total_revenue=total,
                    avg_order_value=total / count,
                )
            )
        return buckets

    async def status_totals(self, date_range: DateRange) -> List[SalesTotals]:
        rows = self._aggregate(
            date_range,
            [
                {
                    "$group": {
                        "_id": "$status",
                        "order_count": {"$sum": 1},
                        "total_revenue": {"$sum": "$total_amount"},
                    }
                },
                {"$sort": {"_id": 1}},
            ],
        )
        return [
            SalesTotals(
                key=str(row["_id"]),
                order_count=int(row["order_count"]),
                total_revenue=_float(row.get("total_revenue")),
            )
            for row in rows
        ]

    async def revenue_by_client(
        self, date_range: DateRange, limit: int
    ) -> List[ClientRanking]:
        rows = self._aggregate(
            date_range,
            [
                {
                    "$group": {
                        "_id": "$client_id",
                        "total_revenue": {"$sum": "$total_amount"},
                        "order_count": {"$sum": 1},
                        "first_order": {"$min": "$order_date"},
                    }
                },
                {"$sort": RANKING_SORT},
                {"$limit": max(1, limit)},
            ],
        )
        return [
            ClientRanking(
                client_id=str(row["_id"]),
                total_revenue=_float(row.get("total_revenue")),
                order_count=int(row["order_count"]),
            )
            for row in rows
        ]

    async def sales_by_product(
        self, date_range: DateRange, limit: int
    ) -> List[ProductSalesTotals]:
        rows = self._aggregate(
            date_range,
            [
                {"$unwind": "$items"},
                {
                    "$group": {
                        "_id": "$items.product_id",
                        "total_revenue": {"$sum": "$items.total_price"},
                        "total_quantity": {"$sum": "$items.quantity"},
                        "line_count": {"$sum": 1},
                        "first_order": {"$min": "$order_date"},
                    }
                },
                {"$sort": RANKING_SORT},
                {"$limit": max(1, limit)},
            ],
        )
        return [
            ProductSalesTotals(
                product_id=str(row["_id"]),
                total_revenue=_float(row.get("total_revenue")),
                total_quantity=int(row.get("total_quantity") or 0),
                line_count=int(row["line_count"]),
            )
            for row in rows
        ]

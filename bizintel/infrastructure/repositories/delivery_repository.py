"""
Infrastructure Repository - Delivery MongoDB Implementation
"""

from datetime import datetime
from typing import List, Optional

import structlog
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.operations import Delivery, DeliveryStatus
from bizintel.domain.repositories.delivery_repository import IDeliveryRepository
from bizintel.infrastructure.database.mongo_database import DELIVERIES, MongoDatabase
from bizintel.infrastructure.repositories.mappers import delivery_from_document

logger = structlog.get_logger(__name__)


class DeliveryRepository(IDeliveryRepository):
    """MongoDB implementation of delivery repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def find_failed_since(
        self, since: datetime, limit: Optional[int] = None
    ) -> List[Delivery]:
        query = {
            "status": DeliveryStatus.FAILED.value,
            "scheduled_date": {"$gte": since},
        }
        try:
            cursor = (
                self.database.get_collection(DELIVERIES)
                .find(query)
                .sort("scheduled_date", DESCENDING)
            )
            if limit:
                cursor = cursor.limit(limit)
            return [delivery_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to query failed deliveries", error=str(e))
            raise PersistenceError("Failed to query failed deliveries") from e

"""
Infrastructure Repository - Product MongoDB Implementation
"""

from typing import List, Sequence

import structlog
from pymongo.errors import PyMongoError

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.operations import Product
from bizintel.domain.repositories.product_repository import IProductRepository
from bizintel.infrastructure.database.mongo_database import PRODUCTS, MongoDatabase
from bizintel.infrastructure.repositories.mappers import product_from_document

logger = structlog.get_logger(__name__)


class ProductRepository(IProductRepository):
    """MongoDB implementation of product repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def get_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        if not product_ids:
            return []
        try:
            cursor = self.database.get_collection(PRODUCTS).find(
                {"id": {"$in": list(dict.fromkeys(product_ids))}}
            )
            return [product_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to get products", count=len(product_ids), error=str(e))
            raise PersistenceError("Failed to load products") from e

    async def count_active(self) -> int:
        try:
            return self.database.get_collection(PRODUCTS).count_documents(
                {"is_active": True}
            )
        except PyMongoError as e:
            logger.error("Failed to count products", error=str(e))
            raise PersistenceError("Failed to count products") from e

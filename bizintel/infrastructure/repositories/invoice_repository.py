"""
Infrastructure Repository - Invoice MongoDB Implementation
"""

from datetime import datetime
from typing import List, Optional

import structlog
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.operations import Invoice, InvoiceStatus
from bizintel.domain.repositories.invoice_repository import IInvoiceRepository
from bizintel.infrastructure.database.mongo_database import INVOICES, MongoDatabase
from bizintel.infrastructure.repositories.mappers import invoice_from_document

logger = structlog.get_logger(__name__)


class InvoiceRepository(IInvoiceRepository):
    """MongoDB implementation of invoice repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def find_overdue(
        self, reference_time: datetime, limit: Optional[int] = None
    ) -> List[Invoice]:
        query = {"status": InvoiceStatus.SENT.value, "due_date": {"$lt": reference_time}}
        try:
            cursor = (
                self.database.get_collection(INVOICES)
                .find(query)
                .sort("due_date", ASCENDING)
            )
            if limit:
                cursor = cursor.limit(limit)
            return [invoice_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to query overdue invoices", error=str(e))
            raise PersistenceError("Failed to query overdue invoices") from e

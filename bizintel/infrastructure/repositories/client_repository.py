"""
Infrastructure Repository - Client MongoDB Implementation

Histories are loaded with one query per collection and grouped in memory,
so the cost of a churn batch does not grow in round-trips with its size.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

import structlog
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from bizintel.domain.entities.client import Client, ClientHistory, ClientStatus
from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.repositories.client_repository import IClientRepository
from bizintel.infrastructure.database.mongo_database import (
    CLIENTS,
    FEEDBACK,
    ORDERS,
    VISITS_CALLS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories.mappers import (
    client_from_document,
    feedback_from_document,
    interaction_from_document,
    order_from_document,
)

logger = structlog.get_logger(__name__)


class ClientRepository(IClientRepository):
    """MongoDB implementation of client repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def get_by_id(self, client_id: str) -> Optional[Client]:
        try:
            document = self.database.get_collection(CLIENTS).find_one({"id": client_id})
        except PyMongoError as e:
            logger.error("Failed to get client", client_id=client_id, error=str(e))
            raise PersistenceError(f"Failed to load client {client_id}") from e
        return client_from_document(document) if document else None

    async def get_by_ids(self, client_ids: Sequence[str]) -> List[Client]:
        if not client_ids:
            return []
        try:
            cursor = self.database.get_collection(CLIENTS).find(
                {"id": {"$in": list(client_ids)}}
            )
            return [client_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to get clients", count=len(client_ids), error=str(e))
            raise PersistenceError("Failed to load clients") from e

    async def count_by_status(self, status: ClientStatus) -> int:
        try:
            return self.database.get_collection(CLIENTS).count_documents(
                {"status": status.value}
            )
        except PyMongoError as e:
            logger.error("Failed to count clients", status=status.value, error=str(e))
            raise PersistenceError("Failed to count clients") from e

    async def find_histories(
        self,
        status: ClientStatus,
        client_ids: Optional[Sequence[str]] = None,
    ) -> List[ClientHistory]:
        query: Dict[str, Any] = {"status": status.value}
        if client_ids:
            query["id"] = {"$in": list(client_ids)}

        try:
            clients = [
                client_from_document(doc)
                for doc in self.database.get_collection(CLIENTS).find(query)
            ]
            if not clients:
                return []

            ids = [client.id for client in clients]
            orders = self._group(ORDERS, ids, "order_date", order_from_document)
            interactions = self._group(
                VISITS_CALLS, ids, "visit_date", interaction_from_document
            )
            feedback = self._group(FEEDBACK, ids, "created_at", feedback_from_document)
        except PyMongoError as e:
            logger.error(
                "Failed to load client histories", status=status.value, error=str(e)
            )
            raise PersistenceError("Failed to load client histories") from e

        logger.debug("Client histories loaded", count=len(clients))
        return [
            ClientHistory(
                client=client,
                orders=orders.get(client.id, []),
                interactions=interactions.get(client.id, []),
                feedback=feedback.get(client.id, []),
            )
            for client in clients
        ]

    def _group(self, collection_name: str, client_ids: List[str], date_field: str, mapper):
        grouped: Dict[str, List[Any]] = defaultdict(list)
        cursor = (
            self.database.get_collection(collection_name)
            .find({"client_id": {"$in": client_ids}})
            .sort(date_field, DESCENDING)
        )
        for document in cursor:
            grouped[str(document["client_id"])].append(mapper(document))
        return grouped

"""
MongoDB Database - Infrastructure Layer

Thin wrapper around a pymongo client: collection access, multi-document
transactions and index management.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Sequence, Tuple

import pymongo.errors
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo.database import Database

from bizintel.domain.entities.errors import PersistenceError
from bizintel.shared import get_logger

logger = get_logger(__name__)

CLIENTS = "clients"
ORDERS = "orders"
PRODUCTS = "products"
VISITS_CALLS = "visits_calls"
FEEDBACK = "feedback"
INVOICES = "invoices"
DELIVERIES = "delivery_schedules"
CHURN_PREDICTIONS = "churn_predictions"
SALES_FORECASTS = "sales_forecasts"

IndexSpec = Tuple[Any, str, Dict[str, Any]]

INDEXES: Dict[str, Sequence[IndexSpec]] = {
    CLIENTS: (
        ("id", "id_idx", {"unique": True}),
        ("status", "status_idx", {}),
    ),
    ORDERS: (
        ("id", "id_idx", {"unique": True}),
        ("order_date", "order_date_idx", {}),
        ([("client_id", ASCENDING), ("order_date", ASCENDING)], "client_date_idx", {}),
    ),
    PRODUCTS: (("id", "id_idx", {"unique": True}),),
    VISITS_CALLS: (("client_id", "client_idx", {}),),
    FEEDBACK: (
        ("id", "id_idx", {"unique": True}),
        ("client_id", "client_idx", {}),
    ),
    INVOICES: (
        ([("status", ASCENDING), ("due_date", ASCENDING)], "status_due_idx", {}),
    ),
    DELIVERIES: (
        (
            [("status", ASCENDING), ("scheduled_date", DESCENDING)],
            "status_scheduled_idx",
            {},
        ),
    ),
    CHURN_PREDICTIONS: (
        ("id", "id_idx", {"unique": True}),
        (
            "client_id",
            "one_active_per_client_idx",
            {"unique": True, "partialFilterExpression": {"is_active": True}},
        ),
        ([("is_active", ASCENDING), ("risk_level", ASCENDING)], "active_risk_idx", {}),
    ),
    SALES_FORECASTS: (
        ("request_id", "request_idx", {}),
        ([("client_id", ASCENDING), ("forecast_date", ASCENDING)], "client_date_idx", {}),
    ),
}

# Indexes that back data invariants rather than query speed
REQUIRED_INDEXES = frozenset({(CHURN_PREDICTIONS, "one_active_per_client_idx")})


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    @contextmanager
    def transaction(self) -> Iterator[ClientSession]:
        """
        Run the enclosed writes as one multi-document transaction.

        Commits when the block exits normally and aborts when it raises.
        Requires a replica set or sharded cluster.
        """
        with self.client.start_session() as session:
            with session.start_transaction():
                yield session

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create all indexes the pipeline relies on.

        Called during application startup. ``create_index`` is a no-op for
        an identical existing index, so nothing is dropped first. A
        failure on an index listed in ``REQUIRED_INDEXES`` aborts startup;
        any other failure is logged and startup continues.
        """
        for collection_name, specs in INDEXES.items():
            for keys, name, options in specs:
                try:
                    self.db[collection_name].create_index(keys, name=name, **options)
                except pymongo.errors.OperationFailure as e:
                    if (collection_name, name) in REQUIRED_INDEXES:
                        logger.error(
                            "mongo.index.required_failed",
                            collection=collection_name,
                            index=name,
                            error=str(e),
                        )
                        raise PersistenceError(
                            f"Required index {collection_name}.{name} could not be built",
                            {"collection": collection_name, "index": name},
                        ) from e
                    logger.warning(
                        "mongo.index.create_failed",
                        collection=collection_name,
                        index=name,
                        error=str(e),
                    )

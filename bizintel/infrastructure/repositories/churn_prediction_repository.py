"""
Infrastructure Repository - Churn Prediction MongoDB Implementation

A batch replacement retires the previous active record of every client in
the batch and inserts the new records inside one transaction. The partial
unique index on ``client_id`` (active records only) backs the guarantee
that a client never has two active predictions.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import structlog
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier
from bizintel.domain.repositories.churn_prediction_repository import (
    IChurnPredictionRepository,
)
from bizintel.infrastructure.database.mongo_database import (
    CHURN_PREDICTIONS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories.mappers import (
    churn_prediction_from_document,
    churn_prediction_to_document,
)

logger = structlog.get_logger(__name__)


class ChurnPredictionRepository(IChurnPredictionRepository):
    """MongoDB implementation of churn prediction repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database
        self.collection_name = CHURN_PREDICTIONS

    async def replace_active(self, predictions: Sequence[ChurnPrediction]) -> None:
        if not predictions:
            return

        client_ids = list(dict.fromkeys(p.client_id for p in predictions))
        if len(client_ids) != len(predictions):
            raise PersistenceError(
                "A batch may hold at most one prediction per client",
                {"clients": len(client_ids), "predictions": len(predictions)},
            )

        retired_at = datetime.now(timezone.utc)
        documents = []
        for prediction in predictions:
            prediction.is_active = True
            prediction.retired_at = None
            documents.append(churn_prediction_to_document(prediction))

        collection = self.database.get_collection(self.collection_name)
        try:
            with self.database.transaction() as session:
                retired = collection.update_many(
                    {"client_id": {"$in": client_ids}, "is_active": True},
                    {"$set": {"is_active": False, "retired_at": retired_at}},
                    session=session,
                )
                collection.insert_many(documents, session=session)
        except PyMongoError as e:
            logger.error(
                "Failed to replace active churn predictions",
                clients=len(client_ids),
                error=str(e),
            )
            raise PersistenceError(
                "Failed to store churn predictions", {"clients": len(client_ids)}
            ) from e

        logger.info(
            "Churn predictions replaced",
            inserted=len(documents),
            retired=getattr(retired, "modified_count", None),
        )

    async def find_active_by_tiers(
        self, tiers: Sequence[RiskTier], limit: Optional[int] = None
    ) -> List[ChurnPrediction]:
        if not tiers:
            return []
        query = {
            "is_active": True,
            "risk_level": {"$in": [tier.value for tier in tiers]},
        }
        return self._find(query, sort_field="churn_score", limit=limit)

    def _find(
        self,
        query: Dict[str, Any],
        sort_field: str,
        limit: Optional[int] = None,
    ) -> List[ChurnPrediction]:
        try:
            cursor = (
                self.database.get_collection(self.collection_name)
                .find(query)
                .sort(sort_field, DESCENDING)
            )
            if limit:
                cursor = cursor.limit(limit)
            return [churn_prediction_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to query churn predictions", error=str(e))
            raise PersistenceError("Failed to query churn predictions") from e

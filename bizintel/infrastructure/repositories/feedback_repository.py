"""
Infrastructure Repository - Feedback MongoDB Implementation
"""

from typing import Optional

import structlog
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from bizintel.domain.entities.client import Feedback, SentimentLabel
from bizintel.domain.entities.errors import NotFoundError, PersistenceError
from bizintel.domain.repositories.feedback_repository import IFeedbackRepository
from bizintel.infrastructure.database.mongo_database import FEEDBACK, MongoDatabase
from bizintel.infrastructure.repositories.mappers import feedback_from_document

logger = structlog.get_logger(__name__)


class FeedbackRepository(IFeedbackRepository):
    """MongoDB implementation of feedback repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def get_by_id(self, feedback_id: str) -> Optional[Feedback]:
        try:
            document = self.database.get_collection(FEEDBACK).find_one(
                {"id": feedback_id}
            )
        except PyMongoError as e:
            logger.error("Failed to get feedback", feedback_id=feedback_id, error=str(e))
            raise PersistenceError(f"Failed to load feedback {feedback_id}") from e
        return feedback_from_document(document) if document else None

    async def apply_sentiment(
        self, feedback_id: str, sentiment: SentimentLabel, score: float
    ) -> Feedback:
        try:
            document = self.database.get_collection(FEEDBACK).find_one_and_update(
                {"id": feedback_id},
                {
                    "$set": {
                        "sentiment": sentiment.value,
                        "sentiment_score": score,
                        "is_processed": True,
                    }
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(
                "Failed to update feedback sentiment",
                feedback_id=feedback_id,
                error=str(e),
            )
            raise PersistenceError(f"Failed to update feedback {feedback_id}") from e

        if document is None:
            raise NotFoundError("Feedback", feedback_id)

        logger.info(
            "Feedback sentiment applied",
            feedback_id=feedback_id,
            sentiment=sentiment.value,
        )
        return feedback_from_document(document)

"""Domain Repository Interface - Feedback"""

from abc import ABC, abstractmethod
from typing import Optional

from bizintel.domain.entities.client import Feedback, SentimentLabel


class IFeedbackRepository(ABC):
    """Interface for feedback repository."""

    @abstractmethod
    async def get_by_id(self, feedback_id: str) -> Optional[Feedback]:
        """Get feedback by ID."""
        pass

    @abstractmethod
    async def apply_sentiment(
        self, feedback_id: str, sentiment: SentimentLabel, score: float
    ) -> Feedback:
        """
        Annotate a feedback record with its sentiment and mark it processed.

        Raises:
            NotFoundError: When the feedback does not exist
        """
        pass

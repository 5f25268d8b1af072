"""
Domain Repository Interface - Churn Prediction

Churn predictions form an append-only history per client in which at
most one record is active.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier


class IChurnPredictionRepository(ABC):
    """Interface for churn prediction repository."""

    @abstractmethod
    async def replace_active(self, predictions: Sequence[ChurnPrediction]) -> None:
        """
        Retire the active predictions of the clients in ``predictions`` and
        insert the new ones as active, all in one atomic unit.

        Raises:
            PersistenceError: When the unit could not commit. Nothing is
                written in that case.
        """
        pass

    @abstractmethod
    async def find_active_by_tiers(
        self, tiers: Sequence[RiskTier], limit: Optional[int] = None
    ) -> List[ChurnPrediction]:
        """Active predictions whose risk level is one of ``tiers``."""
        pass

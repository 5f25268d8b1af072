"""Domain Repository Interface - Sales Forecast"""

from abc import ABC, abstractmethod
from typing import Sequence

from bizintel.domain.entities.prediction import SalesForecast


class ISalesForecastRepository(ABC):
    """Interface for sales forecast repository. Forecasts are append-only."""

    @abstractmethod
    async def add_many(self, forecasts: Sequence[SalesForecast]) -> None:
        """Append a forecast batch."""
        pass

"""
Infrastructure Repository - Sales Forecast MongoDB Implementation
"""

from typing import Sequence

import structlog
from pymongo.errors import PyMongoError

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.prediction import SalesForecast
from bizintel.domain.repositories.sales_forecast_repository import (
    ISalesForecastRepository,
)
from bizintel.infrastructure.database.mongo_database import (
    SALES_FORECASTS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories.mappers import sales_forecast_to_document

logger = structlog.get_logger(__name__)


class SalesForecastRepository(ISalesForecastRepository):
    """MongoDB implementation of sales forecast repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database

    async def add_many(self, forecasts: Sequence[SalesForecast]) -> None:
        if not forecasts:
            return
        documents = [sales_forecast_to_document(f) for f in forecasts]
        try:
            self.database.get_collection(SALES_FORECASTS).insert_many(documents)
        except PyMongoError as e:
            logger.error(
                "Failed to store sales forecast",
                request_id=forecasts[0].request_id,
                error=str(e),
            )
            raise PersistenceError("Failed to store sales forecast") from e

        logger.info(
            "Sales forecast stored",
            request_id=forecasts[0].request_id,
            points=len(documents),
        )

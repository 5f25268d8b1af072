"""
Application Use Case - Sales Forecast

Sends the last two calendar years of orders to the forecaster and stores
every returned point as one append-only batch.
"""

from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Callable, Optional
from uuid import uuid4

import structlog

from bizintel.application.dtos.ai_dto import (
    ForecastPointDTO,
    ForecastRequestDTO,
    ForecastResponseDTO,
)
from bizintel.domain.entities.ai import HistoricalSale
from bizintel.domain.entities.errors import (
    InsufficientDataError,
    NotFoundError,
    ValidationError,
)
from bizintel.domain.entities.prediction import ForecastPeriod, SalesForecast
from bizintel.domain.entities.query import DateRange, OrderQuery
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.domain.repositories.client_repository import IClientRepository
from bizintel.domain.repositories.order_repository import IOrderRepository
from bizintel.domain.repositories.sales_forecast_repository import (
    ISalesForecastRepository,
)

logger = structlog.get_logger(__name__)

MIN_HISTORY_ORDERS = 10
MAX_FORECAST_DAYS = 365
LOOKBACK_YEARS = 2
DEFAULT_CONFIDENCE = 0.95
DEFAULT_MODEL_TYPE = "prophet"


def years_before(moment: datetime, years: int) -> datetime:
    """Same calendar instant ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)


class ForecastSalesUseCase:
    """Produces and stores a sales forecast."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        client_repository: IClientRepository,
        forecast_repository: ISalesForecastRepository,
        ai_gateway: IAIServiceGateway,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.order_repository = order_repository
        self.client_repository = client_repository
        self.forecast_repository = forecast_repository
        self.ai_gateway = ai_gateway
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self, request: ForecastRequestDTO) -> ForecastResponseDTO:
        period = self._validate(request)

        if request.client_id is not None:
            client = await self.client_repository.get_by_id(request.client_id)
            if client is None:
                raise NotFoundError("Client", request.client_id)

        now = self._clock()
        orders = await self.order_repository.find(
            OrderQuery(
                date_range=DateRange(start=years_before(now, LOOKBACK_YEARS)),
                client_id=request.client_id,
            )
        )
        if len(orders) < MIN_HISTORY_ORDERS:
            raise InsufficientDataError(
                "Insufficient historical data for forecasting "
                f"(minimum {MIN_HISTORY_ORDERS} orders required)",
                {"orders": len(orders), "client_id": request.client_id},
            )

        history = [
            HistoricalSale(date=order.order_date.date(), amount=order.total_amount)
            for order in orders
        ]
        logger.info(
            "forecast.start",
            period=period.value,
            horizon=request.forecast_days,
            history=len(history),
            client_id=request.client_id,
        )

        result = await self.ai_gateway.forecast_sales(
            history, period, request.forecast_days, request.client_id
        )

        request_id = str(uuid4())
        metadata = {
            "period": period.value,
            "model_type": result.model_type or DEFAULT_MODEL_TYPE,
            "accuracy_metrics": result.accuracy_metrics or {},
        }
        records = [
            SalesForecast(
                request_id=request_id,
                client_id=request.client_id,
                period=period,
                forecast_date=datetime.combine(point.date, time.min, tzinfo=timezone.utc),
                predicted_amount=point.amount,
                confidence=(
                    point.confidence
                    if point.confidence is not None
                    else DEFAULT_CONFIDENCE
                ),
                model_metadata=metadata,
                created_at=now,
            )
            for point in result.predictions
        ]
        await self.forecast_repository.add_many(records)

        logger.info("forecast.persisted", request_id=request_id, points=len(records))

        return ForecastResponseDTO(
            request_id=request_id,
            period=period.value,
            client_id=request.client_id,
            forecast=[
                ForecastPointDTO(
                    date=record.forecast_date.date(),
                    amount=record.predicted_amount,
                    confidence=record.confidence,
                )
                for record in records
            ],
            model_type=metadata["model_type"],
            accuracy_metrics=metadata["accuracy_metrics"],
            confidence_level=result.confidence_level,
        )

    def _validate(self, request: ForecastRequestDTO) -> ForecastPeriod:
        try:
            period = ForecastPeriod(request.period)
        except ValueError as e:
            raise ValidationError(
                "Period must be daily, weekly, or monthly", {"period": request.period}
            ) from e

        if not 1 <= request.forecast_days <= MAX_FORECAST_DAYS:
            raise ValidationError(
                f"Forecast days must be between 1 and {MAX_FORECAST_DAYS}",
                {"forecast_days": request.forecast_days},
            )
        return period

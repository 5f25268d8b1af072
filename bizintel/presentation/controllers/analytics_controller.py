"""
Analytics Router - Presentation Layer

Reporting endpoints computed on demand from orders, invoices, deliveries
and churn predictions.
"""

from datetime import datetime
from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError as PydanticValidationError

from bizintel.application.dtos.analytics_dto import (
    AlertsResponseDTO,
    AnalyticsQuery,
    DashboardResponseDTO,
    ProfitabilityResponseDTO,
    SalesTrendsResponseDTO,
    TopClientsResponseDTO,
)
from bizintel.application.use_cases.alert_use_cases import GetAlertsUseCase
from bizintel.application.use_cases.analytics_use_cases import (
    GetDashboardUseCase,
    GetProfitabilityUseCase,
    GetSalesTrendsUseCase,
    GetTopClientsUseCase,
)
from bizintel.domain.entities.errors import DomainError, ValidationError
from bizintel.main.container import AppContainer
from bizintel.presentation.errors import to_http_exception
from bizintel.presentation.security import get_caller_identity

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
    dependencies=[Depends(get_caller_identity)],
)


def get_analytics_query(
    start_date: Optional[datetime] = Query(
        default=None, description="Inclusive lower bound (ISO8601)"
    ),
    end_date: Optional[datetime] = Query(
        default=None, description="Exclusive upper bound (ISO8601)"
    ),
    period: str = Query(default="monthly", description="daily, weekly or monthly"),
    limit: int = Query(default=10, description="Number of ranked rows (1-100)"),
) -> AnalyticsQuery:
    """Validate reporting options once, at the HTTP boundary."""
    try:
        return AnalyticsQuery(
            start_date=start_date, end_date=end_date, period=period, limit=limit
        )
    except PydanticValidationError as exc:
        errors = exc.errors(
            include_url=False, include_context=False, include_input=False
        )
        raise to_http_exception(
            ValidationError("Invalid analytics query", {"errors": errors})
        ) from exc


def _failure(event: str, exc: Exception) -> HTTPException:
    if isinstance(exc, DomainError):
        logger.warning(event, error=exc.message, category=exc.category)
        return to_http_exception(exc)
    logger.error(event, error=str(exc), exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get("/dashboard", response_model=DashboardResponseDTO)
@inject
async def dashboard(
    query: AnalyticsQuery = Depends(get_analytics_query),
    dashboard_use_case: GetDashboardUseCase = Depends(
        Provide[AppContainer.get_dashboard_use_case]
    ),
) -> DashboardResponseDTO:
    """Headline KPIs for the requested range."""
    try:
        return await dashboard_use_case.execute(query)
    except Exception as exc:
        raise _failure("analytics.dashboard.failed", exc) from exc


@router.get("/sales-trends", response_model=SalesTrendsResponseDTO)
@inject
async def sales_trends(
    query: AnalyticsQuery = Depends(get_analytics_query),
    sales_trends_use_case: GetSalesTrendsUseCase = Depends(
        Provide[AppContainer.get_sales_trends_use_case]
    ),
) -> SalesTrendsResponseDTO:
    """Order count, revenue and average order value per day, week or month."""
    try:
        return await sales_trends_use_case.execute(query)
    except Exception as exc:
        raise _failure("analytics.sales_trends.failed", exc) from exc


@router.get("/profitability", response_model=ProfitabilityResponseDTO)
@inject
async def profitability(
    query: AnalyticsQuery = Depends(get_analytics_query),
    profitability_use_case: GetProfitabilityUseCase = Depends(
        Provide[AppContainer.get_profitability_use_case]
    ),
) -> ProfitabilityResponseDTO:
    """Top products by revenue with their margin, and top clients by revenue."""
    try:
        return await profitability_use_case.execute(query)
    except Exception as exc:
        raise _failure("analytics.profitability.failed", exc) from exc


@router.get("/top-clients", response_model=TopClientsResponseDTO)
@inject
async def top_clients(
    query: AnalyticsQuery = Depends(get_analytics_query),
    top_clients_use_case: GetTopClientsUseCase = Depends(
        Provide[AppContainer.get_top_clients_use_case]
    ),
) -> TopClientsResponseDTO:
    try:
        return await top_clients_use_case.execute(query)
    except Exception as exc:
        raise _failure("analytics.top_clients.failed", exc) from exc


@router.get("/alerts", response_model=AlertsResponseDTO)
@inject
async def alerts(
    alerts_use_case: GetAlertsUseCase = Depends(
        Provide[AppContainer.get_alerts_use_case]
    ),
) -> AlertsResponseDTO:
    """Overdue invoices, recent failed deliveries and high churn risk clients."""
    try:
        return await alerts_use_case.execute()
    except Exception as exc:
        raise _failure("analytics.alerts.failed", exc) from exc

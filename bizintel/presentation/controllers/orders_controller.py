"""
Orders Router - Presentation Layer
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from bizintel.application.dtos.order_dto import (
    OrderQuoteRequestDTO,
    OrderQuoteResponseDTO,
)
from bizintel.application.use_cases.order_quote_use_case import QuoteOrderUseCase
from bizintel.domain.entities.errors import DomainError
from bizintel.main.container import AppContainer
from bizintel.presentation.errors import to_http_exception
from bizintel.presentation.security import get_caller_identity

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/orders", tags=["Orders"], dependencies=[Depends(get_caller_identity)]
)


@router.post("/quote", response_model=OrderQuoteResponseDTO)
@inject
async def quote_order(
    payload: OrderQuoteRequestDTO,
    quote_use_case: QuoteOrderUseCase = Depends(
        Provide[AppContainer.quote_order_use_case]
    ),
) -> OrderQuoteResponseDTO:
    """Price an order, tax included, without creating it."""
    try:
        return await quote_use_case.execute(payload)
    except DomainError as exc:
        logger.warning("orders.quote.failed", error=exc.message, details=exc.details)
        raise to_http_exception(exc) from exc

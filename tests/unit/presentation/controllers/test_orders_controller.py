from __future__ import annotations

from typing import cast

import pytest
from fastapi import HTTPException

from bizintel.application.dtos.order_dto import (
    OrderQuoteLineDTO,
    OrderQuoteRequestDTO,
    OrderQuoteResponseDTO,
)
from bizintel.application.use_cases.order_quote_use_case import QuoteOrderUseCase
from bizintel.domain.entities.errors import NotFoundError
from bizintel.presentation.controllers.orders_controller import quote_order


def _payload() -> OrderQuoteRequestDTO:
    return OrderQuoteRequestDTO(
        client_id="c1", items=[OrderQuoteLineDTO(product_id="p1", quantity=2)]
    )


@pytest.mark.asyncio
async def test_quote_order_returns_use_case_result() -> None:
    expected = OrderQuoteResponseDTO(
        client_id="c1",
        items=[],
        subtotal=20.0,
        tax_rate=0.1,
        tax_amount=2.0,
        total_amount=22.0,
    )

    class _UseCase:
        async def execute(self, request: OrderQuoteRequestDTO) -> OrderQuoteResponseDTO:
            assert request.client_id == "c1"
            return expected

    response = await quote_order(
        payload=_payload(), quote_use_case=cast(QuoteOrderUseCase, _UseCase())
    )
    assert response is expected


@pytest.mark.asyncio
async def test_quote_order_unknown_product_maps_to_404() -> None:
    class _UseCase:
        async def execute(self, request: OrderQuoteRequestDTO) -> OrderQuoteResponseDTO:
            raise NotFoundError("Product", "p1", {"missing_product_ids": ["p1"]})

    with pytest.raises(HTTPException) as exc_info:
        await quote_order(
            payload=_payload(), quote_use_case=cast(QuoteOrderUseCase, _UseCase())
        )

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail["details"] == {"missing_product_ids": ["p1"]}

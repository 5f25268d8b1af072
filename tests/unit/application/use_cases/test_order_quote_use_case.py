from __future__ import annotations

from typing import cast

import pytest

from bizintel.application.dtos.order_dto import OrderQuoteLineDTO, OrderQuoteRequestDTO
from bizintel.application.use_cases.order_quote_use_case import QuoteOrderUseCase
from bizintel.domain.entities.errors import NotFoundError
from bizintel.infrastructure.database.mongo_database import (
    CLIENTS,
    PRODUCTS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories import ClientRepository, ProductRepository
from tests.conftest import FakeMongoDatabase, client_document


@pytest.fixture()
def use_case(fake_mongo_database: FakeMongoDatabase) -> QuoteOrderUseCase:
    fake_mongo_database.seed(CLIENTS, client_document("c1"))
    fake_mongo_database.seed(
        PRODUCTS,
        {"id": "p1", "name": "Water 20L", "price": 9.99, "is_active": True},
        {"id": "p2", "name": "Dispenser", "price": 45.0, "is_active": True},
    )
    mongo = cast(MongoDatabase, fake_mongo_database)
    return QuoteOrderUseCase(ClientRepository(mongo), ProductRepository(mongo))


@pytest.mark.asyncio
async def test_quote_uses_catalog_prices_and_tax(use_case, fake_mongo_database) -> None:
    quote = await use_case.execute(
        OrderQuoteRequestDTO(
            client_id="c1",
            items=[
                OrderQuoteLineDTO(product_id="p1", quantity=3),
                OrderQuoteLineDTO(product_id="p2", quantity=1, unit_price=40.0),
            ],
        )
    )

    assert [line.total_price for line in quote.items] == [29.97, 40.0]
    assert quote.items[0].product_name == "Water 20L"
    assert quote.subtotal == 69.97
    assert quote.tax_rate == 0.10
    assert quote.tax_amount == 7.0
    assert quote.total_amount == 76.97
    assert len(fake_mongo_database.get_collection(PRODUCTS).queries) == 1


@pytest.mark.asyncio
async def test_missing_products_are_reported_together(use_case) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await use_case.execute(
            OrderQuoteRequestDTO(
                client_id="c1",
                items=[
                    OrderQuoteLineDTO(product_id="x1", quantity=1),
                    OrderQuoteLineDTO(product_id="p1", quantity=1),
                    OrderQuoteLineDTO(product_id="x2", quantity=1),
                ],
            )
        )
    assert exc_info.value.details == {"missing_product_ids": ["x1", "x2"]}


@pytest.mark.asyncio
async def test_unknown_client(use_case) -> None:
    with pytest.raises(NotFoundError):
        await use_case.execute(
            OrderQuoteRequestDTO(
                client_id="ghost", items=[OrderQuoteLineDTO(product_id="p1", quantity=1)]
            )
        )

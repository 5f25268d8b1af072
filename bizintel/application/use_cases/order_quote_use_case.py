"""
Application Use Case - Order quote

Prices a prospective order without storing it. Every product of the order
is looked up in a single batched query.
"""

from typing import List

from bizintel.domain.entities.errors import NotFoundError
from bizintel.domain.repositories.client_repository import IClientRepository
from bizintel.domain.repositories.product_repository import IProductRepository

from ..dtos.order_dto import OrderQuoteRequestDTO, OrderQuoteResponseDTO, QuotedLineDTO

DEFAULT_TAX_RATE = 0.10


class QuoteOrderUseCase:
    def __init__(
        self,
        client_repository: IClientRepository,
        product_repository: IProductRepository,
        tax_rate: float = DEFAULT_TAX_RATE,
    ):
        self.client_repository = client_repository
        self.product_repository = product_repository
        self.tax_rate = tax_rate

    async def execute(self, request: OrderQuoteRequestDTO) -> OrderQuoteResponseDTO:
        client = await self.client_repository.get_by_id(request.client_id)
        if client is None:
            raise NotFoundError("Client", request.client_id)

        requested_ids = list(dict.fromkeys(item.product_id for item in request.items))
        products = {
            product.id: product
            for product in await self.product_repository.get_by_ids(requested_ids)
        }
        missing = [pid for pid in requested_ids if pid not in products]
        if missing:
            raise NotFoundError(
                "Product", ", ".join(missing), {"missing_product_ids": missing}
            )

        lines: List[QuotedLineDTO] = []
        for item in request.items:
            product = products[item.product_id]
            unit_price = item.unit_price if item.unit_price is not None else product.price
            lines.append(
                QuotedLineDTO(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    total_price=round(unit_price * item.quantity, 2),
                )
            )

        subtotal = round(sum(line.total_price for line in lines), 2)
        tax_amount = round(subtotal * self.tax_rate, 2)
        return OrderQuoteResponseDTO(
            client_id=client.id,
            items=lines,
            subtotal=subtotal,
            tax_rate=self.tax_rate,
            tax_amount=tax_amount,
            total_amount=round(subtotal + tax_amount, 2),
        )

"""Application DTOs - Order quote"""

from typing import List, Optional

from pydantic import BaseModel, Field


class OrderQuoteLineDTO(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: Optional[float] = Field(
        default=None, ge=0, description="Overrides the catalog price when given"
    )


class OrderQuoteRequestDTO(BaseModel):
    client_id: str
    items: List[OrderQuoteLineDTO] = Field(min_length=1)


class QuotedLineDTO(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


class OrderQuoteResponseDTO(BaseModel):
    client_id: str
    items: List[QuotedLineDTO]
    subtotal: float
    tax_rate: float
    tax_amount: float
    total_amount: float

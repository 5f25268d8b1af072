"""
Application DTOs - Analytics

Query options and responses of the reporting endpoints.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from bizintel.domain.entities.analytics import (
    AggregationBucket,
    Alert,
    AlertSeverity,
    AlertType,
    ClientRanking,
    ProductProfitability,
)
from bizintel.domain.entities.client import Client, Order, OrderStatus
from bizintel.domain.entities.operations import Product
from bizintel.domain.entities.prediction import ForecastPeriod
from bizintel.domain.entities.query import DateRange, ensure_utc

MAX_RANKING_LIMIT = 100


class AnalyticsQuery(BaseModel):
    """
    Every reporting option as a named, nullable field.

    Dates bound a half-open range: ``start_date`` is inclusive and
    ``end_date`` exclusive. Either may be omitted.
    """

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    period: ForecastPeriod = ForecastPeriod.MONTHLY
    limit: int = Field(default=10, ge=1, le=MAX_RANKING_LIMIT)

    @model_validator(mode="after")
    def _check_range(self) -> "AnalyticsQuery":
        if self.start_date is not None:
            self.start_date = ensure_utc(self.start_date)
        if self.end_date is not None:
            self.end_date = ensure_utc(self.end_date)
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValueError("start_date must be earlier than end_date")
        return self

    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)


class ClientSummaryDTO(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    monthly_consumption: Optional[float] = None
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, client: Client) -> "ClientSummaryDTO":
        return cls(
            id=client.id,
            name=client.name,
            phone=client.phone,
            email=client.email,
            monthly_consumption=client.monthly_consumption,
            status=client.status.value,
            created_at=client.created_at,
        )


class ProductSummaryDTO(BaseModel):
    id: str
    name: str
    price: float

    @classmethod
    def from_domain(cls, product: Product) -> "ProductSummaryDTO":
        return cls(id=product.id, name=product.name, price=product.price)


class OrderSummaryDTO(BaseModel):
    id: str
    client_id: str
    order_date: datetime
    total_amount: float
    status: OrderStatus

    @classmethod
    def from_domain(cls, order: Order) -> "OrderSummaryDTO":
        return cls(
            id=order.id,
            client_id=order.client_id,
            order_date=order.order_date,
            total_amount=order.total_amount,
            status=order.status,
        )


class SalesTrendBucketDTO(BaseModel):
    period: date = Field(description="First day of the bucket")
    order_count: int
    total_revenue: float
    avg_order_value: float

    @classmethod
    def from_domain(cls, bucket: AggregationBucket) -> "SalesTrendBucketDTO":
        return cls(
            period=bucket.period,
            order_count=bucket.order_count,
            total_revenue=bucket.total_revenue,
            avg_order_value=bucket.avg_order_value,
        )


class SalesTrendsResponseDTO(BaseModel):
    period: ForecastPeriod
    trends: List[SalesTrendBucketDTO]


class ProductProfitabilityDTO(BaseModel):
    product_id: str
    product: Optional[ProductSummaryDTO] = None
    total_revenue: float
    total_quantity: int
    order_count: int
    average_price: float
    profit_margin: float = Field(description="Margin over catalog price, in percent")

    @classmethod
    def from_domain(cls, row: ProductProfitability) -> "ProductProfitabilityDTO":
        return cls(
            product_id=row.product_id,
            product=ProductSummaryDTO.from_domain(row.product) if row.product else None,
            total_revenue=row.total_revenue,
            total_quantity=row.total_quantity,
            order_count=row.order_count,
            average_price=row.average_price,
            profit_margin=row.profit_margin,
        )


class ClientRevenueDTO(BaseModel):
    client_id: str
    client: Optional[ClientSummaryDTO] = None
    total_revenue: float
    order_count: int
    average_order_value: float

    @classmethod
    def from_domain(cls, row: ClientRanking) -> "ClientRevenueDTO":
        return cls(
            client_id=row.client_id,
            client=ClientSummaryDTO.from_domain(row.client) if row.client else None,
            total_revenue=row.total_revenue,
            order_count=row.order_count,
            average_order_value=row.average_order_value,
        )


class ProfitabilityResponseDTO(BaseModel):
    product_profitability: List[ProductProfitabilityDTO]
    client_profitability: List[ClientRevenueDTO]


class TopClientsResponseDTO(BaseModel):
    top_clients: List[ClientRevenueDTO]


class DashboardKPIsDTO(BaseModel):
    total_clients: int = Field(description="Active clients")
    total_products: int = Field(description="Active products")
    total_orders: int = Field(description="Orders in the requested range")
    total_revenue: float = Field(description="Revenue in the requested range")


class DashboardResponseDTO(BaseModel):
    kpis: DashboardKPIsDTO
    orders_by_status: Dict[str, int] = Field(default_factory=dict)
    top_clients: List[ClientRevenueDTO] = Field(default_factory=list)
    recent_orders: List[OrderSummaryDTO] = Field(default_factory=list)


class AlertDTO(BaseModel):
    type: AlertType
    severity: AlertSeverity
    count: int
    message: str
    data: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, alert: Alert) -> "AlertDTO":
        return cls(
            type=alert.alert_type,
            severity=alert.severity,
            count=alert.count,
            message=alert.message,
            data=alert.data,
        )


class AlertsResponseDTO(BaseModel):
    alerts: List[AlertDTO]
    total_alerts: int
    generated_at: datetime

    model_config = {
        "json_schema_extra": {
            "example": {
                "alerts": [
                    {
                        "type": "OVERDUE_INVOICES",
                        "severity": "HIGH",
                        "count": 1,
                        "message": "1 overdue invoices require attention",
                        "data": [{"id": "inv-1", "invoice_number": "F-0001"}],
                    }
                ],
                "total_alerts": 1,
                "generated_at": "2025-03-01T12:00:00Z",
            }
        }
    }

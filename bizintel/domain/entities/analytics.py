"""
Domain Entities - Analytics

Value objects computed on demand from transactional records. None of
them is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from .client import Client
from .operations import Product


class AlertType(str, Enum):
    OVERDUE_INVOICES = "OVERDUE_INVOICES"
    FAILED_DELIVERIES = "FAILED_DELIVERIES"
    HIGH_CHURN_RISK = "HIGH_CHURN_RISK"


class AlertSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(slots=True)
class AggregationBucket:
    """Order totals for one day, ISO week or month, keyed by its first day."""

    period: date
    order_count: int
    total_revenue: float
    avg_order_value: float


@dataclass(slots=True)
class SalesTotals:
    """Order count and revenue for one grouping key, such as an order status."""

    key: str
    order_count: int
    total_revenue: float


@dataclass(slots=True)
class ProductSalesTotals:
    """Summed order lines of one product, before catalog prices are applied."""

    product_id: str
    total_revenue: float
    total_quantity: int
    line_count: int


@dataclass(slots=True)
class ClientRanking:
    """Revenue accumulated by one client."""

    client_id: str
    total_revenue: float
    order_count: int
    client: Optional[Client] = None

    @property
    def average_order_value(self) -> float:
        if self.order_count == 0:
            return 0.0
        return self.total_revenue / self.order_count


@dataclass(slots=True)
class ProductProfitability:
    """Revenue, volume and margin of one product over the sold lines."""

    product_id: str
    total_revenue: float
    total_quantity: int
    order_count: int
    average_price: float
    profit_margin: float
    product: Optional[Product] = None


@dataclass(slots=True)
class Alert:
    """An operational signal raised from one source."""

    alert_type: AlertType
    severity: AlertSeverity
    count: int
    message: str
    data: List[Dict[str, Any]] = field(default_factory=list)

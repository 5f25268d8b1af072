"""
Domain Entities - Catalog, billing and fulfilment records

Products, invoices and delivery schedules. The pipeline only reads them:
products for profitability and order quotes, invoices and deliveries as
alert sources.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4


class InvoiceStatus(str, Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class DeliveryStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass
class Product:
    """A catalog product with its list price."""

    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    price: float = 0.0
    is_active: bool = True


@dataclass
class Invoice:
    """A billing record issued for an order."""

    id: str = field(default_factory=lambda: str(uuid4()))
    order_id: str = ""
    client_id: Optional[str] = None
    invoice_number: Optional[str] = None
    amount: float = 0.0
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Delivery:
    """A scheduled fulfilment attempt for an order."""

    id: str = field(default_factory=lambda: str(uuid4()))
    order_id: str = ""
    client_id: Optional[str] = None
    scheduled_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: DeliveryStatus = DeliveryStatus.SCHEDULED
    notes: Optional[str] = None

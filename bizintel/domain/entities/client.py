"""
Domain Entities - Clients and their histories

A client is the subject the pipeline scores and aggregates over. The
histories attached to it (orders, visits/calls and feedback) are owned by
the store and read-only here, except for sentiment annotation of feedback.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4


class ClientStatus(str, Enum):
    """Lifecycle state of a client."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class OrderStatus(str, Enum):
    """Fulfilment state of an order."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class InteractionType(str, Enum):
    """Kind of contact with a client."""

    VISIT = "VISIT"
    CALL = "CALL"


class SentimentLabel(str, Enum):
    """Sentiment label attached to a feedback record."""

    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


@dataclass
class Client:
    """A customer of the business."""

    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    status: ClientStatus = ClientStatus.ACTIVE
    phone: Optional[str] = None
    email: Optional[str] = None
    monthly_consumption: Optional[float] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class OrderLine:
    """A product line inside an order."""

    product_id: str
    quantity: int
    unit_price: float
    total_price: float


@dataclass
class Order:
    """A sales transaction."""

    id: str = field(default_factory=lambda: str(uuid4()))
    client_id: str = ""
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_amount: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    items: List[OrderLine] = field(default_factory=list)


@dataclass
class Interaction:
    """A visit or call made to a client."""

    id: str = field(default_factory=lambda: str(uuid4()))
    client_id: str = ""
    type: InteractionType = InteractionType.VISIT
    visit_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    outcome: Optional[str] = None


@dataclass
class Feedback:
    """A rating left by a client, optionally annotated with sentiment."""

    id: str = field(default_factory=lambda: str(uuid4()))
    client_id: str = ""
    rating: int = 3
    comment: Optional[str] = None
    sentiment: Optional[SentimentLabel] = None
    sentiment_score: Optional[float] = None
    is_processed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ClientHistory:
    """A client together with every history the feature extractor reads."""

    client: Client
    orders: List[Order] = field(default_factory=list)
    interactions: List[Interaction] = field(default_factory=list)
    feedback: List[Feedback] = field(default_factory=list)

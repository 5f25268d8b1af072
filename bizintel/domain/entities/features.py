"""Feature vector sent to the churn model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

NO_ORDER_RECENCY_DAYS = 999
NEUTRAL_FEEDBACK_RATING = 3.0


@dataclass(frozen=True, slots=True)
class FeatureVector:
    """
    Numeric summary of one client's history at a given instant.

    Every field always holds a number; empty histories fall back to the
    neutral defaults declared in this module.
    """

    client_id: str
    days_since_signup: int
    total_orders: int
    recent_orders_3m: int
    older_orders_3m: int
    avg_order_value: float
    days_since_last_order: int
    total_visits_calls: int
    avg_feedback_rating: float
    monthly_consumption: float

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)

"""
Domain Service - Feature Extraction

Turns a client's order, interaction and feedback histories into the flat
feature vector expected by the churn model. Windows are anchored to the
``now`` passed by the caller, so one batch shares a single instant.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from bizintel.domain.entities.client import ClientHistory
from bizintel.domain.entities.features import (
    NO_ORDER_RECENCY_DAYS,
    NEUTRAL_FEEDBACK_RATING,
    FeatureVector,
)
from bizintel.domain.entities.query import ensure_utc

WINDOW = timedelta(days=90)
SECONDS_PER_DAY = 24 * 60 * 60


def _whole_days(later: datetime, earlier: datetime) -> int:
    return int((later - earlier).total_seconds() // SECONDS_PER_DAY)


def _mean(values: Sequence[float], default: float) -> float:
    if not values:
        return default
    return sum(values) / len(values)


class FeatureExtractor:
    """Computes churn features for clients."""

    def extract(self, history: ClientHistory, now: datetime) -> FeatureVector:
        now = ensure_utc(now)
        client = history.client

        recent_start = now - WINDOW
        older_start = now - 2 * WINDOW

        order_dates = [ensure_utc(order.order_date) for order in history.orders]
        amounts = [float(order.total_amount) for order in history.orders]

        recent_orders = sum(1 for when in order_dates if when >= recent_start)
        older_orders = sum(
            1 for when in order_dates if older_start <= when < recent_start
        )

        if order_dates:
            days_since_last_order = _whole_days(now, max(order_dates))
        else:
            days_since_last_order = NO_ORDER_RECENCY_DAYS

        ratings = [float(item.rating) for item in history.feedback]

        return FeatureVector(
            client_id=client.id,
            days_since_signup=_whole_days(now, ensure_utc(client.created_at)),
            total_orders=len(history.orders),
            recent_orders_3m=recent_orders,
            older_orders_3m=older_orders,
            avg_order_value=_mean(amounts, 0.0),
            days_since_last_order=days_since_last_order,
            total_visits_calls=len(history.interactions),
            avg_feedback_rating=_mean(ratings, NEUTRAL_FEEDBACK_RATING),
            monthly_consumption=float(client.monthly_consumption or 0.0),
        )

    def extract_many(
        self, histories: Iterable[ClientHistory], now: datetime
    ) -> List[FeatureVector]:
        return [self.extract(history, now) for history in histories]

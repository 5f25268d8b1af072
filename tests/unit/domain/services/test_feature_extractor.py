from __future__ import annotations

from datetime import datetime, timedelta, timezone

from bizintel.domain.entities.client import (
    Client,
    ClientHistory,
    Feedback,
    Interaction,
    Order,
)
from bizintel.domain.services.feature_extractor import FeatureExtractor

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _order(days_ago: float, amount: float = 100.0) -> Order:
    return Order(client_id="c1", order_date=NOW - timedelta(days=days_ago), total_amount=amount)


def test_empty_history_uses_neutral_defaults(sample_client: Client) -> None:
    vector = FeatureExtractor().extract(ClientHistory(client=sample_client), NOW)

    assert vector.client_id == "c1"
    assert vector.total_orders == 0
    assert vector.recent_orders_3m == 0
    assert vector.older_orders_3m == 0
    assert vector.avg_order_value == 0.0
    assert vector.days_since_last_order == 999
    assert vector.total_visits_calls == 0
    assert vector.avg_feedback_rating == 3.0
    assert vector.monthly_consumption == 120.0


def test_window_boundaries_are_inclusive_at_the_start(sample_client: Client) -> None:
    history = ClientHistory(
        client=sample_client,
        orders=[
            _order(90),
            _order(90 + 1 / 86400),
            _order(180),
            _order(180 + 1 / 86400),
        ],
    )

    vector = FeatureExtractor().extract(history, NOW)

    assert vector.recent_orders_3m == 1
    assert vector.older_orders_3m == 2
    assert vector.total_orders == 4


def test_recency_average_and_counts(sample_client: Client) -> None:
    history = ClientHistory(
        client=sample_client,
        orders=[_order(10.5, 50.0), _order(40, 150.0)],
        interactions=[Interaction(client_id="c1"), Interaction(client_id="c1")],
        feedback=[Feedback(client_id="c1", rating=5), Feedback(client_id="c1", rating=2)],
    )

    vector = FeatureExtractor().extract(history, NOW)

    assert vector.days_since_last_order == 10
    assert vector.avg_order_value == 100.0
    assert vector.total_visits_calls == 2
    assert vector.avg_feedback_rating == 3.5
    assert vector.days_since_signup == 400


def test_missing_consumption_is_zero() -> None:
    client = Client(id="c2", created_at=NOW - timedelta(days=1))
    vector = FeatureExtractor().extract(ClientHistory(client=client), NOW)
    assert vector.monthly_consumption == 0.0
    assert vector.days_since_signup == 1


def test_naive_timestamps_are_read_as_utc(sample_client: Client) -> None:
    naive_order = Order(client_id="c1", order_date=datetime(2025, 2, 27, 12, 0))
    vector = FeatureExtractor().extract(
        ClientHistory(client=sample_client, orders=[naive_order]), NOW
    )
    assert vector.days_since_last_order == 2


def test_extract_many_shares_one_instant(sample_client: Client) -> None:
    other = Client(id="c2", created_at=NOW - timedelta(days=10))
    vectors = FeatureExtractor().extract_many(
        [ClientHistory(client=sample_client), ClientHistory(client=other)], NOW
    )
    assert [v.client_id for v in vectors] == ["c1", "c2"]
    assert vectors[1].to_payload()["days_since_signup"] == 10

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import cast

import pytest

from bizintel.domain.entities.client import ClientStatus, SentimentLabel
from bizintel.domain.entities.errors import NotFoundError, PersistenceError
from bizintel.domain.entities.query import DateRange, OrderQuery
from bizintel.infrastructure.database.mongo_database import (
    CLIENTS,
    FEEDBACK,
    ORDERS,
    VISITS_CALLS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories import (
    ClientRepository,
    FeedbackRepository,
    OrderRepository,
)
from bizintel.infrastructure.repositories.order_repository import build_order_filter
from tests.conftest import FakeMongoDatabase, client_document, order_document

NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


@pytest.fixture()
def mongo(fake_mongo_database: FakeMongoDatabase) -> FakeMongoDatabase:
    fake_mongo_database.seed(
        CLIENTS,
        client_document("c1", monthly_consumption=12.5),
        client_document("c2"),
        client_document("c3", status=ClientStatus.SUSPENDED),
    )
    fake_mongo_database.seed(
        ORDERS,
        order_document("o1", "c1", NOW - timedelta(days=10), 10.0),
        order_document("o2", "c1", NOW - timedelta(days=1), 20.0),
        order_document("o3", "c3", NOW - timedelta(days=2), 30.0),
    )
    fake_mongo_database.seed(
        VISITS_CALLS,
        {"id": "v1", "client_id": "c2", "type": "CALL", "visit_date": NOW},
    )
    fake_mongo_database.seed(
        FEEDBACK,
        {"id": "f1", "client_id": "c1", "rating": 2, "created_at": NOW},
    )
    return fake_mongo_database


@pytest.mark.asyncio
async def test_find_histories_batches_queries(mongo) -> None:
    repository = ClientRepository(cast(MongoDatabase, mongo))

    histories = await repository.find_histories(ClientStatus.ACTIVE)

    by_id = {h.client.id: h for h in histories}
    assert set(by_id) == {"c1", "c2"}
    assert [o.id for o in by_id["c1"].orders] == ["o2", "o1"]
    assert by_id["c1"].client.monthly_consumption == 12.5
    assert len(by_id["c2"].interactions) == 1
    assert by_id["c1"].feedback[0].rating == 2
    assert len(mongo.get_collection(ORDERS).queries) == 1
    assert len(mongo.get_collection(CLIENTS).queries) == 1


@pytest.mark.asyncio
async def test_find_histories_for_subset(mongo) -> None:
    repository = ClientRepository(cast(MongoDatabase, mongo))
    histories = await repository.find_histories(ClientStatus.ACTIVE, ["c2", "c3"])
    assert [h.client.id for h in histories] == ["c2"]


@pytest.mark.asyncio
async def test_client_lookups(mongo) -> None:
    repository = ClientRepository(cast(MongoDatabase, mongo))
    assert (await repository.get_by_id("c1")).name == "Client c1"
    assert await repository.get_by_id("zzz") is None
    assert {c.id for c in await repository.get_by_ids(["c1", "c3"])} == {"c1", "c3"}
    assert await repository.get_by_ids([]) == []
    assert await repository.count_by_status(ClientStatus.ACTIVE) == 2


@pytest.mark.asyncio
async def test_client_failures_are_wrapped(mongo) -> None:
    mongo.get_collection(CLIENTS).fail_on("find_one")
    with pytest.raises(PersistenceError):
        await ClientRepository(cast(MongoDatabase, mongo)).get_by_id("c1")


def test_build_order_filter() -> None:
    start = NOW - timedelta(days=7)
    query = OrderQuery(date_range=DateRange(start=start, end=NOW), client_id="c1")
    assert build_order_filter(query) == {
        "order_date": {"$gte": start, "$lt": NOW},
        "client_id": "c1",
    }
    assert build_order_filter(OrderQuery()) == {}


@pytest.mark.asyncio
async def test_order_find(mongo) -> None:
    repository = OrderRepository(cast(MongoDatabase, mongo))

    in_range = await repository.find(
        OrderQuery(date_range=DateRange(start=NOW - timedelta(days=2), end=NOW))
    )
    assert [o.id for o in in_range] == ["o3", "o2"]

    newest = await repository.find(OrderQuery(), newest_first=True, limit=1)
    assert [o.id for o in newest] == ["o2"]

    mongo.get_collection(ORDERS).fail_on("find")
    with pytest.raises(PersistenceError):
        await repository.find(OrderQuery())


@pytest.mark.asyncio
async def test_order_totals_are_grouped_in_the_store(mongo) -> None:
    repository = OrderRepository(cast(MongoDatabase, mongo))
    collection = mongo.get_collection(ORDERS)

    daily = await repository.daily_sales(DateRange())
    by_status = await repository.status_totals(DateRange(end=NOW - timedelta(days=1)))

    assert [(d.period, d.order_count, d.total_revenue) for d in daily] == [
        (date(2025, 2, 19), 1, 10.0),
        (date(2025, 2, 27), 1, 30.0),
        (date(2025, 2, 28), 1, 20.0),
    ]
    assert [(row.key, row.order_count, row.total_revenue) for row in by_status] == [
        ("DELIVERED", 2, 40.0)
    ]
    assert collection.queries == []
    assert collection.pipelines[1][0] == {
        "$match": {"order_date": {"$lt": NOW - timedelta(days=1)}}
    }


@pytest.mark.asyncio
async def test_revenue_ties_go_to_the_earliest_client(mongo) -> None:
    repository = OrderRepository(cast(MongoDatabase, mongo))

    rankings = await repository.revenue_by_client(DateRange(), limit=10)
    top = await repository.revenue_by_client(DateRange(), limit=1)

    assert [(r.client_id, r.total_revenue, r.order_count) for r in rankings] == [
        ("c1", 30.0, 2),
        ("c3", 30.0, 1),
    ]
    assert [r.client_id for r in top] == ["c1"]
    assert mongo.get_collection(ORDERS).pipelines[-1][-1] == {"$limit": 1}


@pytest.mark.asyncio
async def test_sales_by_product_sums_order_lines(mongo) -> None:
    mongo.seed(
        ORDERS,
        order_document(
            "o4",
            "c2",
            NOW - timedelta(days=5),
            45.0,
            items=[
                {"product_id": "p2", "quantity": 1, "unit_price": 15.0, "total_price": 15.0},
                {"product_id": "p1", "quantity": 3, "unit_price": 5.0, "total_price": 15.0},
            ],
        ),
        order_document(
            "o5",
            "c2",
            NOW - timedelta(days=3),
            30.0,
            items=[
                {"product_id": "p3", "quantity": 2, "unit_price": 15.0, "total_price": 30.0},
                {"product_id": "p1", "quantity": 1, "unit_price": 5.0, "total_price": 5.0},
            ],
        ),
    )
    repository = OrderRepository(cast(MongoDatabase, mongo))

    rows = await repository.sales_by_product(DateRange(), limit=20)

    assert [(r.product_id, r.total_revenue, r.total_quantity, r.line_count) for r in rows] == [
        ("p3", 30.0, 2, 1),
        ("p1", 20.0, 4, 2),
        ("p2", 15.0, 1, 1),
    ]


@pytest.mark.asyncio
async def test_aggregation_failures_are_wrapped(mongo) -> None:
    mongo.get_collection(ORDERS).fail_on("aggregate")
    with pytest.raises(PersistenceError):
        await OrderRepository(cast(MongoDatabase, mongo)).status_totals(DateRange())


@pytest.mark.asyncio
async def test_feedback_apply_sentiment(mongo) -> None:
    repository = FeedbackRepository(cast(MongoDatabase, mongo))

    updated = await repository.apply_sentiment("f1", SentimentLabel.NEGATIVE, -0.6)

    assert updated.sentiment is SentimentLabel.NEGATIVE
    assert updated.is_processed is True
    with pytest.raises(NotFoundError):
        await repository.apply_sentiment("missing", SentimentLabel.NEUTRAL, 0.0)

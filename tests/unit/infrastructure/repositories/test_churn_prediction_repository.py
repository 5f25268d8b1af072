from __future__ import annotations

from datetime import datetime, timezone
from typing import cast

import pytest

from bizintel.domain.entities.errors import PersistenceError
from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier
from bizintel.infrastructure.database.mongo_database import (
    CHURN_PREDICTIONS,
    MongoDatabase,
)
from bizintel.infrastructure.repositories import ChurnPredictionRepository
from tests.conftest import FakeMongoDatabase


def _prediction(client_id: str, score: float) -> ChurnPrediction:
    return ChurnPrediction(
        client_id=client_id,
        churn_score=score,
        risk_level=RiskTier.from_score(score),
        prediction_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def repository(fake_mongo_database: FakeMongoDatabase) -> ChurnPredictionRepository:
    return ChurnPredictionRepository(cast(MongoDatabase, fake_mongo_database))


@pytest.mark.asyncio
async def test_replace_active_retires_previous(repository, fake_mongo_database) -> None:
    await repository.replace_active([_prediction("c1", 0.3), _prediction("c2", 0.9)])
    await repository.replace_active([_prediction("c1", 0.65)])

    documents = fake_mongo_database.get_collection(CHURN_PREDICTIONS).documents
    active = [(d["client_id"], d["churn_score"]) for d in documents if d["is_active"]]
    assert sorted(active) == [("c1", 0.65), ("c2", 0.9)]

    history = [d for d in documents if d["client_id"] == "c1"]
    assert len(history) == 2
    assert sum(1 for d in history if d["is_active"]) == 1
    retired = next(d for d in history if not d["is_active"])
    assert retired["retired_at"] is not None
    assert fake_mongo_database.committed_transactions == 2


@pytest.mark.asyncio
async def test_replace_active_rejects_duplicate_clients(
    repository, fake_mongo_database
) -> None:
    with pytest.raises(PersistenceError):
        await repository.replace_active([_prediction("c1", 0.1), _prediction("c1", 0.2)])
    assert fake_mongo_database.get_collection(CHURN_PREDICTIONS).documents == []


@pytest.mark.asyncio
async def test_replace_active_with_empty_batch_is_a_no_op(
    repository, fake_mongo_database
) -> None:
    await repository.replace_active([])
    assert fake_mongo_database.committed_transactions == 0


@pytest.mark.asyncio
async def test_find_active_by_tiers(repository) -> None:
    await repository.replace_active(
        [_prediction("a", 0.2), _prediction("b", 0.7), _prediction("c", 0.85)]
    )

    rows = await repository.find_active_by_tiers((RiskTier.HIGH, RiskTier.CRITICAL))
    assert [row.client_id for row in rows] == ["c", "b"]
    assert await repository.find_active_by_tiers(()) == []
    limited = await repository.find_active_by_tiers([RiskTier.HIGH, RiskTier.CRITICAL], limit=1)
    assert [row.client_id for row in limited] == ["c"]


@pytest.mark.asyncio
async def test_update_failure_is_wrapped(repository, fake_mongo_database) -> None:
    fake_mongo_database.get_collection(CHURN_PREDICTIONS).fail_on("update_many")
    with pytest.raises(PersistenceError):
        await repository.replace_active([_prediction("c1", 0.5)])
    assert fake_mongo_database.aborted_transactions == 1

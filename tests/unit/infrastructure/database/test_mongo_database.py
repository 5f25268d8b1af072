from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Set

import pytest
from pymongo.errors import OperationFailure

from bizintel.domain.entities.errors import PersistenceError
from bizintel.infrastructure.database import mongo_database as module
from bizintel.infrastructure.database.mongo_database import (
    CHURN_PREDICTIONS,
    INDEXES,
    MongoDatabase,
)


class _Collection:
    def __init__(self, fail_on: Set[str]) -> None:
        self.created: List[tuple] = []
        self.dropped: List[str] = []
        self._fail_on = fail_on

    def drop_index(self, name: str) -> None:
        self.dropped.append(name)

    def create_index(self, keys: Any, name: str, **options: Any) -> str:
        if name in self._fail_on:
            raise OperationFailure("E11000 duplicate key error")
        self.created.append((keys, name, options))
        return name


class _Db(dict):
    def __init__(self, fail_on: Set[str]) -> None:
        super().__init__()
        self._fail_on = fail_on
        self.name = "bizintel"

    def __missing__(self, key: str) -> _Collection:
        self[key] = _Collection(self._fail_on)
        return self[key]


class _Transaction:
    def __init__(self, log: List[str]) -> None:
        self.log = log

    def __enter__(self):
        self.log.append("start")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.log.append("abort" if exc_type else "commit")
        return False


class _Session:
    def __init__(self, log: List[str]) -> None:
        self.log = log

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.log.append("end")
        return False

    def start_transaction(self):
        return _Transaction(self.log)


class _Client:
    def __init__(self, db: _Db) -> None:
        self.db = db
        self.closed = False
        self.log: List[str] = []

    def __getitem__(self, name: str) -> _Db:
        return self.db

    def start_session(self) -> _Session:
        return _Session(self.log)

    def close(self) -> None:
        self.closed = True


def _database(monkeypatch, *fail_on: str) -> MongoDatabase:
    created: Dict[str, Any] = {}

    def _factory(uri: str, tz_aware: bool) -> _Client:
        created["client"] = _Client(_Db(set(fail_on)))
        created["tz_aware"] = tz_aware
        return created["client"]

    monkeypatch.setattr(module, "MongoClient", _factory)
    database = MongoDatabase("mongodb://localhost:27017", "bizintel")
    assert created["tz_aware"] is True
    return database


@pytest.mark.asyncio
async def test_create_indexes(monkeypatch) -> None:
    database = _database(monkeypatch)

    await database.create_indexes()

    churn = database.get_collection(CHURN_PREDICTIONS)
    names = [name for _, name, _ in churn.created]
    assert "one_active_per_client_idx" in names
    unique_active = next(
        opts for _, name, opts in churn.created if name == "one_active_per_client_idx"
    )
    assert unique_active == {
        "unique": True,
        "partialFilterExpression": {"is_active": True},
    }
    assert set(database.db) == set(INDEXES)


@pytest.mark.asyncio
async def test_create_indexes_never_drops_existing_indexes(monkeypatch) -> None:
    database = _database(monkeypatch)

    await database.create_indexes()

    assert all(not collection.dropped for collection in database.db.values())


@pytest.mark.asyncio
async def test_optional_index_failure_is_tolerated(monkeypatch) -> None:
    database = _database(monkeypatch, "active_risk_idx")

    await database.create_indexes()

    churn = database.get_collection(CHURN_PREDICTIONS)
    assert "one_active_per_client_idx" in [name for _, name, _ in churn.created]


@pytest.mark.asyncio
async def test_one_active_prediction_index_failure_aborts_startup(monkeypatch) -> None:
    database = _database(monkeypatch, "one_active_per_client_idx")

    with pytest.raises(PersistenceError) as exc_info:
        await database.create_indexes()

    assert exc_info.value.details == {
        "collection": CHURN_PREDICTIONS,
        "index": "one_active_per_client_idx",
    }


def test_transaction_commits_and_aborts(monkeypatch) -> None:
    database = _database(monkeypatch)
    log = database.client.log

    with database.transaction() as session:
        assert session is not None
    assert log == ["start", "commit", "end"]

    log.clear()
    with pytest.raises(RuntimeError):
        with database.transaction():
            raise RuntimeError("boom")
    assert log == ["start", "abort", "end"]


def test_close(monkeypatch) -> None:
    database = _database(monkeypatch)
    database.close()
    assert database.client.closed is True

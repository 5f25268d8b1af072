from __future__ import annotations

import copy
import sys
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional

import pytest
from pymongo.errors import OperationFailure

from bizintel.domain.entities.client import Client, ClientStatus, Order, OrderLine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _compare(value: Any, operator: str, operand: Any) -> bool:
    if operator == "$in":
        return value in operand
    if value is None:
        return False
    if operator == "$lt":
        return value < operand
    if operator == "$lte":
        return value <= operand
    if operator == "$gt":
        return value > operand
    if operator == "$gte":
        return value >= operand
    if operator == "$ne":
        return value != operand
    raise NotImplementedError(operator)


def matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        value = document.get(key)
        if isinstance(expected, dict) and any(k.startswith("$") for k in expected):
            if not all(_compare(value, op, arg) for op, arg in expected.items()):
                return False
        elif value != expected:
            return False
    return True


def resolve(document: Dict[str, Any], expression: Any) -> Any:
    """Evaluate the small subset of aggregation expressions the repositories use."""
    if isinstance(expression, str) and expression.startswith("$"):
        value: Any = document
        for part in expression[1:].split("."):
            value = value.get(part) if isinstance(value, dict) else None
        return value
    if isinstance(expression, dict) and "$dateToString" in expression:
        options = expression["$dateToString"]
        return resolve(document, options["date"]).strftime(options["format"])
    return expression


def _group(rows: List[Dict[str, Any]], spec: Dict[str, Any]) -> List[Dict[str, Any]]:
    groups: Dict[Any, Dict[str, Any]] = {}
    for row in rows:
        key = resolve(row, spec["_id"])
        group = groups.setdefault(key, {"_id": key})
        for name, accumulator in spec.items():
            if name == "_id":
                continue
            ((operator, expression),) = accumulator.items()
            value = resolve(row, expression)
            if operator == "$sum":
                group[name] = group.get(name, 0) + (value or 0)
            elif operator == "$min":
                group[name] = value if name not in group else min(group[name], value)
            else:
                raise NotImplementedError(operator)
    return list(groups.values())


def run_pipeline(
    documents: List[Dict[str, Any]], pipeline: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    rows = copy.deepcopy(documents)
    for stage in pipeline:
        ((name, spec),) = stage.items()
        if name == "$match":
            rows = [row for row in rows if matches(row, spec)]
        elif name == "$unwind":
            field = spec[1:]
            rows = [{**row, field: item} for row in rows for item in row.get(field) or []]
        elif name == "$group":
            rows = _group(rows, spec)
        elif name == "$sort":
            # stable sorts applied from the last key to the first
            for key, direction in reversed(list(spec.items())):
                rows.sort(key=lambda row: row.get(key), reverse=direction < 0)
        elif name == "$limit":
            rows = rows[:spec]
        else:
            raise NotImplementedError(name)
    return rows


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = list(documents)
        self._limit: Optional[int] = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents
        if self._limit:
            docs = docs[: self._limit]
        return iter([copy.deepcopy(doc) for doc in docs])


class FakeCollection:
    """In-memory stand-in for a pymongo collection."""

    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.failures: Dict[str, Exception] = {}
        self.queries: List[Dict[str, Any]] = []
        self.pipelines: List[List[Dict[str, Any]]] = []

    def fail_on(self, method: str, error: Optional[Exception] = None) -> None:
        self.failures[method] = error or OperationFailure(f"{method} failed")

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self._maybe_fail("find")
        self.queries.append(query)
        return FakeCursor([doc for doc in self.documents if matches(doc, query)])

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        self._maybe_fail("aggregate")
        self.pipelines.append(pipeline)
        return iter(run_pipeline(self.documents, pipeline))

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._maybe_fail("find_one")
        for document in self.documents:
            if matches(document, query):
                return copy.deepcopy(document)
        return None

    def count_documents(self, query: Dict[str, Any]) -> int:
        self._maybe_fail("count_documents")
        return sum(1 for doc in self.documents if matches(doc, query))

    def insert_many(self, documents: List[Dict[str, Any]], session: Any = None) -> Any:
        self._maybe_fail("insert_many")
        self.documents.extend(copy.deepcopy(doc) for doc in documents)
        return SimpleNamespace(inserted_ids=[doc.get("id") for doc in documents])

    def update_many(
        self, query: Dict[str, Any], update: Dict[str, Any], session: Any = None
    ) -> Any:
        self._maybe_fail("update_many")
        modified = 0
        for document in self.documents:
            if matches(document, query):
                document.update(update.get("$set", {}))
                modified += 1
        return SimpleNamespace(modified_count=modified)

    def find_one_and_update(
        self, query: Dict[str, Any], update: Dict[str, Any], **kwargs: Any
    ) -> Optional[Dict[str, Any]]:
        self._maybe_fail("find_one_and_update")
        for document in self.documents:
            if matches(document, query):
                document.update(update.get("$set", {}))
                return copy.deepcopy(document)
        return None


class FakeMongoDatabase:
    """Collections keyed by name plus an all-or-nothing transaction."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.committed_transactions = 0
        self.aborted_transactions = 0
        self.client = SimpleNamespace()

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def seed(self, name: str, *documents: Dict[str, Any]) -> None:
        self.get_collection(name).documents.extend(documents)

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        snapshot = {
            name: copy.deepcopy(collection.documents)
            for name, collection in self.collections.items()
        }
        try:
            yield SimpleNamespace(name="session")
        except Exception:
            for name, documents in snapshot.items():
                self.collections[name].documents = documents
            self.aborted_transactions += 1
            raise
        self.committed_transactions += 1

    async def create_indexes(self) -> None:
        pass

    def close(self) -> None:
        pass


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def client_document(
    client_id: str,
    *,
    status: ClientStatus = ClientStatus.ACTIVE,
    created_at: Optional[datetime] = None,
    monthly_consumption: Optional[float] = None,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": client_id,
        "name": name or f"Client {client_id}",
        "status": status.value,
        "email": f"{client_id}@example.com",
        "monthly_consumption": monthly_consumption,
        "created_at": created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


def order_document(
    order_id: str,
    client_id: str,
    order_date: datetime,
    total_amount: float,
    *,
    status: str = "DELIVERED",
    items: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "id": order_id,
        "client_id": client_id,
        "order_date": order_date,
        "total_amount": total_amount,
        "status": status,
        "items": items or [],
    }


def make_orders(
    client_id: str, count: int, start: datetime, step: timedelta, amount: float = 100.0
) -> List[Order]:
    return [
        Order(
            id=f"{client_id}-o{index}",
            client_id=client_id,
            order_date=start + step * index,
            total_amount=amount,
            items=[
                OrderLine(
                    product_id="p1", quantity=1, unit_price=amount, total_price=amount
                )
            ],
        )
        for index in range(count)
    ]


@pytest.fixture()
def sample_client(dummy_now: datetime) -> Client:
    return Client(
        id="c1",
        name="Acme Water",
        status=ClientStatus.ACTIVE,
        monthly_consumption=120.0,
        created_at=dummy_now - timedelta(days=400),
    )

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import cast

import pytest

from bizintel.application.dtos.ai_dto import SentimentRequestDTO
from bizintel.application.use_cases.sentiment_use_case import (
    AnalyzeSentimentUseCase,
    to_sentiment_label,
)
from bizintel.domain.entities.ai import SentimentAnalysis
from bizintel.domain.entities.client import SentimentLabel
from bizintel.domain.entities.errors import (
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from bizintel.infrastructure.database.mongo_database import FEEDBACK, MongoDatabase
from bizintel.infrastructure.repositories import FeedbackRepository
from tests.conftest import FakeMongoDatabase


class _Gateway:
    def __init__(self, sentiment: str | None = "positive", score: float = 0.8):
        self.sentiment = sentiment
        self.score = score
        self.calls: list[str] = []

    async def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        self.calls.append(text)
        return SentimentAnalysis(sentiment=self.sentiment, score=self.score, confidence=0.7)


@pytest.fixture()
def database(fake_mongo_database: FakeMongoDatabase) -> FakeMongoDatabase:
    fake_mongo_database.seed(
        FEEDBACK,
        {
            "id": "f1",
            "client_id": "c1",
            "rating": 4,
            "comment": "Fast delivery",
            "is_processed": False,
            "created_at": datetime(2025, 2, 1, tzinfo=timezone.utc),
        },
    )
    return fake_mongo_database


def _use_case(database, gateway):
    return AnalyzeSentimentUseCase(
        ai_gateway=gateway,
        feedback_repository=FeedbackRepository(cast(MongoDatabase, database)),
    )


@pytest.mark.asyncio
async def test_annotates_feedback(database) -> None:
    gateway = _Gateway()

    response = await _use_case(database, gateway).execute(
        SentimentRequestDTO(text="  Great service  ", feedback_id="f1")
    )

    assert gateway.calls == ["Great service"]
    assert response.feedback_id == "f1"
    document = database.get_collection(FEEDBACK).documents[0]
    assert document["sentiment"] == "POSITIVE"
    assert document["sentiment_score"] == 0.8
    assert document["is_processed"] is True


@pytest.mark.asyncio
async def test_without_feedback_nothing_is_written(database) -> None:
    response = await _use_case(database, _Gateway()).execute(
        SentimentRequestDTO(text="fine")
    )
    assert response.sentiment == "positive"
    assert "sentiment" not in database.get_collection(FEEDBACK).documents[0]


@pytest.mark.asyncio
async def test_missing_feedback_is_checked_before_upstream(database) -> None:
    gateway = _Gateway()
    with pytest.raises(NotFoundError):
        await _use_case(database, gateway).execute(
            SentimentRequestDTO(text="fine", feedback_id="nope")
        )
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_blank_text_is_rejected(database) -> None:
    with pytest.raises(ValidationError):
        await _use_case(database, _Gateway()).execute(SentimentRequestDTO(text="   "))


@pytest.mark.asyncio
async def test_unknown_label_is_stored_as_neutral(database) -> None:
    await _use_case(database, _Gateway(sentiment="mixed", score=0.1)).execute(
        SentimentRequestDTO(text="meh", feedback_id="f1")
    )
    assert database.get_collection(FEEDBACK).documents[0]["sentiment"] == "NEUTRAL"


def test_to_sentiment_label() -> None:
    assert to_sentiment_label("Negative") is SentimentLabel.NEGATIVE
    assert to_sentiment_label(None) is SentimentLabel.NEUTRAL
    assert to_sentiment_label("???") is SentimentLabel.NEUTRAL


class _UnreachableGateway:
    async def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        raise UpstreamUnavailableError("AI service unavailable: connection refused")


@pytest.mark.asyncio
async def test_unreachable_ai_service_leaves_feedback_untouched(database) -> None:
    before = copy.deepcopy(database.get_collection(FEEDBACK).documents)

    with pytest.raises(UpstreamUnavailableError):
        await _use_case(database, _UnreachableGateway()).execute(
            SentimentRequestDTO(text="Late again", feedback_id="f1")
        )

    assert database.get_collection(FEEDBACK).documents == before

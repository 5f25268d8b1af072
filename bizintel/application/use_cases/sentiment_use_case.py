"""
Application Use Case - Sentiment Analysis

Scores a text and, when it belongs to a feedback record, annotates that
record with the result.
"""

from __future__ import annotations

import structlog

from bizintel.application.dtos.ai_dto import SentimentRequestDTO, SentimentResponseDTO
from bizintel.domain.entities.client import SentimentLabel
from bizintel.domain.entities.errors import NotFoundError, ValidationError
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.domain.repositories.feedback_repository import IFeedbackRepository

logger = structlog.get_logger(__name__)


def to_sentiment_label(raw: str | None) -> SentimentLabel:
    """Upper-cased upstream label, NEUTRAL when missing or unrecognised."""
    if not raw:
        return SentimentLabel.NEUTRAL
    try:
        return SentimentLabel(raw.strip().upper())
    except ValueError:
        logger.warning("sentiment.unknown_label", label=raw)
        return SentimentLabel.NEUTRAL


class AnalyzeSentimentUseCase:
    def __init__(
        self,
        ai_gateway: IAIServiceGateway,
        feedback_repository: IFeedbackRepository,
    ):
        self.ai_gateway = ai_gateway
        self.feedback_repository = feedback_repository

    async def execute(self, request: SentimentRequestDTO) -> SentimentResponseDTO:
        text = (request.text or "").strip()
        if not text:
            raise ValidationError("Text is required for sentiment analysis")

        if request.feedback_id is not None:
            feedback = await self.feedback_repository.get_by_id(request.feedback_id)
            if feedback is None:
                raise NotFoundError("Feedback", request.feedback_id)

        analysis = await self.ai_gateway.analyze_sentiment(text)

        if request.feedback_id is not None:
            await self.feedback_repository.apply_sentiment(
                request.feedback_id,
                to_sentiment_label(analysis.sentiment),
                analysis.score or 0.0,
            )

        return SentimentResponseDTO.from_domain(analysis, request.feedback_id)

"""
Application Use Case - Churn Prediction

Scores every active client (or a requested subset) in one upstream call
and makes the fresh scores the active prediction of each client:
  * Histories are loaded in a fixed number of batched queries
  * Features are extracted at a single instant for the whole batch
  * Previous active predictions are retired and the new ones inserted
    atomically, so a failed write leaves the old state in place
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Set

import structlog

from bizintel.application.dtos.ai_dto import (
    ChurnPredictionDTO,
    ChurnRequestDTO,
    ChurnResponseDTO,
)
from bizintel.domain.entities.ai import ChurnAnalysis
from bizintel.domain.entities.client import ClientStatus
from bizintel.domain.entities.errors import InsufficientDataError
from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.domain.repositories.churn_prediction_repository import (
    IChurnPredictionRepository,
)
from bizintel.domain.repositories.client_repository import IClientRepository
from bizintel.domain.services.feature_extractor import FeatureExtractor

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PredictChurnUseCase:
    """Runs one churn scoring batch end to end."""

    def __init__(
        self,
        client_repository: IClientRepository,
        prediction_repository: IChurnPredictionRepository,
        ai_gateway: IAIServiceGateway,
        feature_extractor: Optional[FeatureExtractor] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client_repository = client_repository
        self.prediction_repository = prediction_repository
        self.ai_gateway = ai_gateway
        self.feature_extractor = feature_extractor or FeatureExtractor()
        self._clock = clock or _utcnow

    async def execute(self, request: ChurnRequestDTO) -> ChurnResponseDTO:
        histories = await self.client_repository.find_histories(
            ClientStatus.ACTIVE, request.client_ids
        )
        if not histories:
            raise InsufficientDataError(
                "No clients found for analysis",
                {"client_ids": list(request.client_ids or [])},
            )

        now = self._clock()
        features = self.feature_extractor.extract_many(histories, now)
        logger.info("churn.start", clients=len(features))

        analysis = await self.ai_gateway.predict_churn(features)

        requested = {history.client.id for history in histories}
        predictions = self._build_predictions(analysis, requested, now)
        await self.prediction_repository.replace_active(predictions)

        logger.info(
            "churn.persisted",
            clients=len(features),
            predictions=len(predictions),
            model_type=analysis.model_type,
        )

        return ChurnResponseDTO(
            predictions=[ChurnPredictionDTO.from_domain(p) for p in predictions],
            model_type=analysis.model_type,
            accuracy_metrics=analysis.accuracy_metrics,
            total_clients=len(features),
        )

    def _build_predictions(
        self, analysis: ChurnAnalysis, requested: Set[str], now: datetime
    ) -> List[ChurnPrediction]:
        by_client: Dict[str, ChurnPrediction] = {}
        for score in analysis.predictions:
            if score.client_id not in requested:
                logger.warning("churn.unknown_client_dropped", client_id=score.client_id)
                continue
            if score.client_id in by_client:
                logger.warning("churn.duplicate_score", client_id=score.client_id)
            by_client[score.client_id] = ChurnPrediction(
                client_id=score.client_id,
                churn_score=score.churn_score,
                risk_level=RiskTier.from_score(score.churn_score),
                risk_factors=dict(score.risk_factors),
                prediction_date=now,
            )
        return list(by_client.values())

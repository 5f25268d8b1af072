"""
Domain Gateway - AI Service

Contract for the external prediction/analysis microservice. Every call is
a single attempt bounded by a timeout. Implementations raise
``UpstreamUnavailableError`` when the service cannot be reached and
``UpstreamApplicationError`` when it answers with a failure; anything else
is a decoded result.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from bizintel.domain.entities.ai import (
    ChatReply,
    ChurnAnalysis,
    DocumentExtraction,
    HistoricalSale,
    SalesForecastResult,
    SentimentAnalysis,
)
from bizintel.domain.entities.features import FeatureVector
from bizintel.domain.entities.health import DependencyStatus
from bizintel.domain.entities.prediction import ForecastPeriod


class IAIServiceGateway(ABC):
    """Interface for the AI service gateway."""

    @abstractmethod
    async def predict_churn(self, features: Sequence[FeatureVector]) -> ChurnAnalysis:
        """
        Score a batch of clients in one call.

        Args:
            features: One feature vector per client

        Returns:
            Churn scores and model metadata

        Raises:
            UpstreamUnavailableError: When the service is unreachable
            UpstreamApplicationError: When the service reports a failure
        """
        pass

    @abstractmethod
    async def forecast_sales(
        self,
        history: Sequence[HistoricalSale],
        period: ForecastPeriod,
        horizon: int,
        client_id: Optional[str] = None,
    ) -> SalesForecastResult:
        """
        Forecast future sales from a dated history.

        Args:
            history: Past sales, ascending by date
            period: Granularity of the forecast
            horizon: Number of days to forecast
            client_id: Optional client the history is scoped to

        Returns:
            Forecasted points and model metadata
        """
        pass

    @abstractmethod
    async def extract_document(
        self, content: bytes, mime_type: str, document_type: str
    ) -> DocumentExtraction:
        """Run OCR and field extraction on a document."""
        pass

    @abstractmethod
    async def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        """Score the sentiment of a text."""
        pass

    @abstractmethod
    async def chat(self, message: str, context: Dict[str, Any]) -> ChatReply:
        """Send a message to the business assistant."""
        pass

    @abstractmethod
    async def check_service(self, name: str) -> DependencyStatus:
        """Probe one upstream service. Never raises; reports DOWN instead."""
        pass

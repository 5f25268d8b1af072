"""
Infrastructure Gateway - AI Service Implementation

HTTP client for the external prediction/analysis microservice. Each call
is a single attempt bounded by its timeout; failures are translated into
the two typed upstream errors of the domain layer.
"""

import base64
import time
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from bizintel.domain.entities.ai import (
    ChatReply,
    ChurnAnalysis,
    ChurnScore,
    DocumentExtraction,
    ForecastedSale,
    HistoricalSale,
    SalesForecastResult,
    SentimentAnalysis,
)
from bizintel.domain.entities.errors import (
    UpstreamApplicationError,
    UpstreamUnavailableError,
)
from bizintel.domain.entities.features import FeatureVector
from bizintel.domain.entities.health import DependencyStatus, ServiceStatus
from bizintel.domain.entities.prediction import ForecastPeriod
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.shared.consts import (
    DOCUMENT_CALL_TIMEOUT,
    STANDARD_CALL_TIMEOUT,
    STATUS_PROBE_TIMEOUT,
)

logger = structlog.get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class _ChurnScorePayload(BaseModel):
    client_id: str
    churn_score: float = Field(ge=0.0, le=1.0)
    risk_factors: Dict[str, Any] = Field(default_factory=dict)


class _ChurnResponse(BaseModel):
    predictions: List[_ChurnScorePayload]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = Field(default_factory=dict)


class _ForecastPointPayload(BaseModel):
    date: date
    amount: float
    confidence: Optional[float] = None


class _ForecastResponse(BaseModel):
    predictions: List[_ForecastPointPayload]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = Field(default_factory=dict)
    confidence_level: Optional[float] = None


class _DocumentResponse(BaseModel):
    extracted_text: str = ""
    structured_data: Dict[str, Any] = Field(default_factory=dict)
    confidence: float = 0.0
    processing_time: float = 0.0


class _SentimentResponse(BaseModel):
    sentiment: Optional[str] = None
    score: Optional[float] = None
    confidence: Optional[float] = None
    emotions: Dict[str, Any] = Field(default_factory=dict)
    processing_time: float = 0.0


class _ChatResponse(BaseModel):
    response: str
    intent: Optional[str] = None
    confidence: Optional[float] = None
    suggested_actions: List[Any] = Field(default_factory=list)
    processing_time: float = 0.0


def _upstream_message(response: httpx.Response) -> str:
    """Pick the most useful error text out of a failed upstream response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "detail"):
            if body.get(key):
                return str(body[key])
    return response.text or f"HTTP {response.status_code}"


class AIServiceGateway(IAIServiceGateway):
    """Implementation of the AI service gateway using an HTTP client."""

    def __init__(
        self,
        base_url: str,
        timeout: float = STANDARD_CALL_TIMEOUT,
        document_timeout: float = DOCUMENT_CALL_TIMEOUT,
        status_timeout: float = STATUS_PROBE_TIMEOUT,
    ):
        """
        Initialize the AI service gateway.

        Args:
            base_url: Base URL of the AI service (e.g., "http://ai-services:8000")
            timeout: Timeout in seconds for standard calls
            document_timeout: Timeout in seconds for document extraction
            status_timeout: Timeout in seconds for status probes
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.document_timeout = document_timeout
        self.status_timeout = status_timeout

    async def predict_churn(self, features: Sequence[FeatureVector]) -> ChurnAnalysis:
        payload = {"clients": [vector.to_payload() for vector in features]}
        result = await self._post("/churn", payload, _ChurnResponse, self.timeout)
        return ChurnAnalysis(
            predictions=[
                ChurnScore(
                    client_id=item.client_id,
                    churn_score=item.churn_score,
                    risk_factors=item.risk_factors,
                )
                for item in result.predictions
            ],
            model_type=result.model_type,
            accuracy_metrics=result.accuracy_metrics,
        )

    async def forecast_sales(
        self,
        history: Sequence[HistoricalSale],
        period: ForecastPeriod,
        horizon: int,
        client_id: Optional[str] = None,
    ) -> SalesForecastResult:
        payload = {
            "historical_data": [
                {"date": sale.date.isoformat(), "amount": float(sale.amount)}
                for sale in history
            ],
            "period": period.value,
            "forecast_days": horizon,
            "client_id": client_id,
        }
        result = await self._post(
            "/forecast", payload, _ForecastResponse, self.timeout
        )
        return SalesForecastResult(
            predictions=[
                ForecastedSale(
                    date=point.date, amount=point.amount, confidence=point.confidence
                )
                for point in result.predictions
            ],
            model_type=result.model_type,
            accuracy_metrics=result.accuracy_metrics,
            confidence_level=result.confidence_level,
        )

    async def extract_document(
        self, content: bytes, mime_type: str, document_type: str
    ) -> DocumentExtraction:
        payload = {
            "file_data": base64.b64encode(content).decode("ascii"),
            "file_type": mime_type,
            "document_type": document_type,
        }
        result = await self._post(
            "/ocr", payload, _DocumentResponse, self.document_timeout
        )
        return DocumentExtraction(
            extracted_text=result.extracted_text,
            structured_data=result.structured_data,
            confidence=result.confidence,
            processing_time=result.processing_time,
        )

    async def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        result = await self._post(
            "/sentiment", {"text": text}, _SentimentResponse, self.timeout
        )
        return SentimentAnalysis(
            sentiment=result.sentiment,
            score=result.score if result.score is not None else 0.0,
            confidence=result.confidence,
            emotions=result.emotions,
            processing_time=result.processing_time,
        )

    async def chat(self, message: str, context: Dict[str, Any]) -> ChatReply:
        result = await self._post(
            "/chatbot",
            {"message": message, "context": context},
            _ChatResponse,
            self.timeout,
        )
        return ChatReply(
            response=result.response,
            intent=result.intent,
            confidence=result.confidence,
            suggested_actions=result.suggested_actions,
            processing_time=result.processing_time,
        )

    async def check_service(self, name: str) -> DependencyStatus:
        url = f"{self.base_url}/health/{name}"
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.status_timeout) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("ai_gateway.status.unreachable", service=name, error=str(e))
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=str(e) or e.__class__.__name__,
                latency_ms=(time.perf_counter() - start) * 1000,
            )

        latency_ms = (time.perf_counter() - start) * 1000
        if response.is_success:
            return DependencyStatus(
                name=name, status=ServiceStatus.UP, latency_ms=latency_ms
            )
        return DependencyStatus(
            name=name,
            status=ServiceStatus.DOWN,
            message=f"HTTP {response.status_code}",
            latency_ms=latency_ms,
            details={"status_code": response.status_code},
        )

    async def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        response_model: Type[ResponseT],
        timeout: float,
    ) -> ResponseT:
        url = f"{self.base_url}{path}"
        logger.info("ai_gateway.request", url=url, timeout=timeout)

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            message = _upstream_message(e.response)
            logger.error(
                "ai_gateway.http_error",
                status_code=status_code,
                response_text=e.response.text,
                url=url,
            )
            raise UpstreamApplicationError(
                f"AI service error: {message}", upstream_status=status_code
            ) from e

        except httpx.RequestError as e:
            logger.error("ai_gateway.request_error", error=str(e), url=url)
            raise UpstreamUnavailableError(
                f"AI service unavailable: {str(e) or e.__class__.__name__}",
                {"url": url},
            ) from e

        try:
            return response_model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(
                "ai_gateway.malformed_response",
                status_code=response.status_code,
                error=str(e),
                url=url,
            )
            raise UpstreamApplicationError(
                "AI service returned a malformed response",
                upstream_status=response.status_code,
            ) from e

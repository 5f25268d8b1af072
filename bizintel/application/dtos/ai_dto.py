"""
Application DTOs - AI

Requests and responses of the endpoints that forward work to the AI
service: churn scoring, sales forecasting, document extraction, sentiment
analysis and the business assistant.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from bizintel.domain.entities.ai import ChatReply, DocumentExtraction, SentimentAnalysis
from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier


class ChurnRequestDTO(BaseModel):
    """Clients to score. Omitted or empty means every active client."""

    client_ids: Optional[List[str]] = Field(
        default=None, description="Restrict scoring to these client IDs"
    )


class ChurnPredictionDTO(BaseModel):
    id: str
    client_id: str
    churn_score: float = Field(ge=0.0, le=1.0)
    risk_level: RiskTier
    risk_factors: Dict[str, Any] = Field(default_factory=dict)
    prediction_date: datetime

    @classmethod
    def from_domain(cls, prediction: ChurnPrediction) -> "ChurnPredictionDTO":
        return cls(
            id=prediction.id,
            client_id=prediction.client_id,
            churn_score=prediction.churn_score,
            risk_level=prediction.risk_level,
            risk_factors=prediction.risk_factors,
            prediction_date=prediction.prediction_date,
        )


class ChurnResponseDTO(BaseModel):
    """Fresh churn predictions, now the active record for each client."""

    predictions: List[ChurnPredictionDTO]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = Field(default_factory=dict)
    total_clients: int = Field(description="Number of clients sent for scoring")

    model_config = {
        "protected_namespaces": (),
        "json_schema_extra": {
            "example": {
                "predictions": [
                    {
                        "id": "6f1c1c57-4ad1-4c59-9f8c-0c3f0e4b8c11",
                        "client_id": "4d1f8c55-7d8b-4b8e-9a55-1b8a9e9b2d10",
                        "churn_score": 0.72,
                        "risk_level": "HIGH",
                        "risk_factors": {"days_since_last_order": "high"},
                        "prediction_date": "2025-03-01T12:00:00Z",
                    }
                ],
                "model_type": "random_forest",
                "accuracy_metrics": {"auc": 0.87},
                "total_clients": 1,
            }
        },
    }


class ForecastRequestDTO(BaseModel):
    period: str = Field(default="monthly", description="daily, weekly or monthly")
    forecast_days: int = Field(default=30, description="Days to forecast (1-365)")
    client_id: Optional[str] = Field(
        default=None, description="Scope the history to one client"
    )


class ForecastPointDTO(BaseModel):
    date: date
    amount: float
    confidence: float


class ForecastResponseDTO(BaseModel):
    """A persisted forecast batch."""

    request_id: str = Field(description="Identifier shared by every stored point")
    period: str
    client_id: Optional[str] = None
    forecast: List[ForecastPointDTO]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = Field(default_factory=dict)
    confidence_level: Optional[float] = None

    model_config = {"protected_namespaces": ()}


class DocumentExtractionDTO(BaseModel):
    filename: Optional[str] = None
    document_type: str
    extracted_text: str
    structured_data: Dict[str, Any] = Field(default_factory=dict)
    confidence: float = 0.0
    processing_time: float = 0.0

    @classmethod
    def from_domain(
        cls,
        extraction: DocumentExtraction,
        document_type: str,
        filename: Optional[str] = None,
    ) -> "DocumentExtractionDTO":
        return cls(
            filename=filename,
            document_type=document_type,
            extracted_text=extraction.extracted_text,
            structured_data=extraction.structured_data,
            confidence=extraction.confidence,
            processing_time=extraction.processing_time,
        )


class SentimentRequestDTO(BaseModel):
    text: str = Field(description="Text to analyse")
    feedback_id: Optional[str] = Field(
        default=None, description="Feedback record to annotate with the result"
    )


class SentimentResponseDTO(BaseModel):
    sentiment: Optional[str] = None
    score: float = 0.0
    confidence: Optional[float] = None
    emotions: Dict[str, Any] = Field(default_factory=dict)
    processing_time: float = 0.0
    feedback_id: Optional[str] = Field(
        default=None, description="Feedback record updated with this result"
    )

    @classmethod
    def from_domain(
        cls, analysis: SentimentAnalysis, feedback_id: Optional[str] = None
    ) -> "SentimentResponseDTO":
        return cls(
            sentiment=analysis.sentiment,
            score=analysis.score,
            confidence=analysis.confidence,
            emotions=analysis.emotions,
            processing_time=analysis.processing_time,
            feedback_id=feedback_id,
        )


class ChatRequestDTO(BaseModel):
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


class ChatResponseDTO(BaseModel):
    response: str
    intent: Optional[str] = None
    confidence: Optional[float] = None
    suggested_actions: List[Any] = Field(default_factory=list)
    processing_time: float = 0.0

    @classmethod
    def from_domain(cls, reply: ChatReply) -> "ChatResponseDTO":
        return cls(
            response=reply.response,
            intent=reply.intent,
            confidence=reply.confidence,
            suggested_actions=reply.suggested_actions,
            processing_time=reply.processing_time,
        )


class AIServiceStatusItemDTO(BaseModel):
    service: str
    status: Literal["online", "offline"]
    error: Optional[str] = None
    latency_ms: Optional[float] = None


class AIServiceStatusDTO(BaseModel):
    overall_status: Literal["healthy", "degraded"]
    services: List[AIServiceStatusItemDTO]
    timestamp: datetime

"""Results decoded from the external AI service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class ChurnScore:
    client_id: str
    churn_score: float
    risk_factors: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ChurnAnalysis:
    predictions: List[ChurnScore]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class HistoricalSale:
    """One point of the sales history sent to the forecaster."""

    date: date
    amount: float


@dataclass(slots=True)
class ForecastedSale:
    date: date
    amount: float
    confidence: Optional[float] = None


@dataclass(slots=True)
class SalesForecastResult:
    predictions: List[ForecastedSale]
    model_type: Optional[str] = None
    accuracy_metrics: Dict[str, Any] = field(default_factory=dict)
    confidence_level: Optional[float] = None


@dataclass(slots=True)
class DocumentExtraction:
    extracted_text: str
    structured_data: Dict[str, Any] = field(default_factory=dict)
    confidence: float = 0.0
    processing_time: float = 0.0


@dataclass(slots=True)
class SentimentAnalysis:
    sentiment: Optional[str]
    score: float = 0.0
    confidence: Optional[float] = None
    emotions: Dict[str, Any] = field(default_factory=dict)
    processing_time: float = 0.0


@dataclass(slots=True)
class ChatReply:
    response: str
    intent: Optional[str] = None
    confidence: Optional[float] = None
    suggested_actions: List[Any] = field(default_factory=list)
    processing_time: float = 0.0

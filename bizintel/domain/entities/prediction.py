"""Domain entities for persisted model output."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4


class RiskTier(str, Enum):
    """Discrete churn risk derived from a continuous score."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_score(cls, score: float) -> "RiskTier":
        """Map a churn score in [0, 1] onto its tier using fixed thresholds."""
        if score >= 0.8:
            return cls.CRITICAL
        if score >= 0.6:
            return cls.HIGH
        if score >= 0.4:
            return cls.MEDIUM
        return cls.LOW

    @classmethod
    def at_least(cls, tier: "RiskTier") -> list["RiskTier"]:
        """All tiers with the same or a higher severity than ``tier``."""
        members = list(cls)
        return members[members.index(tier) :]


class ForecastPeriod(str, Enum):
    """Granularity of a time bucket or forecast."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(slots=True)
class ChurnPrediction:
    """A churn score for one client. Only the latest one is active."""

    client_id: str
    churn_score: float
    risk_level: RiskTier
    risk_factors: Dict[str, Any] = field(default_factory=dict)
    prediction_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_active: bool = True
    retired_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: str(uuid4()))


@dataclass(slots=True)
class SalesForecast:
    """One forecasted point, persisted as part of a forecast batch."""

    request_id: str
    period: ForecastPeriod
    forecast_date: datetime
    predicted_amount: float
    confidence: float = 0.95
    client_id: Optional[str] = None
    model_metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: str(uuid4()))

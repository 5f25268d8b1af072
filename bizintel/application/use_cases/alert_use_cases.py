"""
Alert Use Cases - Application Layer

Synthesizes operational alerts from three independent sources, always
evaluated in the same order:

1. Overdue invoices (still SENT after their due date)
2. Deliveries that failed in the last seven days
3. Clients whose active churn prediction is HIGH or CRITICAL

A source produces an alert only when it returns at least one record.
Nothing is written.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import structlog

from bizintel.domain.entities.analytics import Alert, AlertSeverity, AlertType
from bizintel.domain.entities.operations import Delivery, Invoice
from bizintel.domain.entities.prediction import ChurnPrediction, RiskTier
from bizintel.domain.entities.query import ensure_utc
from bizintel.domain.repositories.churn_prediction_repository import (
    IChurnPredictionRepository,
)
from bizintel.domain.repositories.delivery_repository import IDeliveryRepository
from bizintel.domain.repositories.invoice_repository import IInvoiceRepository

from ..dtos.analytics_dto import AlertDTO, AlertsResponseDTO

logger = structlog.get_logger(__name__)

OVERDUE_INVOICE_CAP = 10
HIGH_RISK_CAP = 10
FAILED_DELIVERY_WINDOW = timedelta(days=7)
HIGH_RISK_TIERS = tuple(RiskTier.at_least(RiskTier.HIGH))


def _invoice_data(invoice: Invoice) -> Dict[str, Any]:
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "order_id": invoice.order_id,
        "client_id": invoice.client_id,
        "amount": invoice.amount,
        "due_date": invoice.due_date.isoformat(),
    }


def _delivery_data(delivery: Delivery) -> Dict[str, Any]:
    return {
        "id": delivery.id,
        "order_id": delivery.order_id,
        "client_id": delivery.client_id,
        "scheduled_date": delivery.scheduled_date.isoformat(),
        "notes": delivery.notes,
    }


def _prediction_data(prediction: ChurnPrediction) -> Dict[str, Any]:
    return {
        "client_id": prediction.client_id,
        "churn_score": prediction.churn_score,
        "risk_level": prediction.risk_level.value,
        "prediction_date": prediction.prediction_date.isoformat(),
    }


class GetAlertsUseCase:
    """Builds the current list of business alerts."""

    def __init__(
        self,
        invoice_repository: IInvoiceRepository,
        delivery_repository: IDeliveryRepository,
        prediction_repository: IChurnPredictionRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.invoice_repository = invoice_repository
        self.delivery_repository = delivery_repository
        self.prediction_repository = prediction_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self, now: Optional[datetime] = None) -> AlertsResponseDTO:
        now = ensure_utc(now) if now is not None else self._clock()
        alerts: List[Alert] = []

        overdue = await self.invoice_repository.find_overdue(
            now, limit=OVERDUE_INVOICE_CAP
        )
        if overdue:
            alerts.append(
                Alert(
                    alert_type=AlertType.OVERDUE_INVOICES,
                    severity=AlertSeverity.HIGH,
                    count=len(overdue),
                    message=f"{len(overdue)} overdue invoices require attention",
                    data=[_invoice_data(invoice) for invoice in overdue],
                )
            )

        failed = await self.delivery_repository.find_failed_since(
            now - FAILED_DELIVERY_WINDOW
        )
        if failed:
            alerts.append(
                Alert(
                    alert_type=AlertType.FAILED_DELIVERIES,
                    severity=AlertSeverity.MEDIUM,
                    count=len(failed),
                    message=f"{len(failed)} deliveries failed in the last 7 days",
                    data=[_delivery_data(delivery) for delivery in failed],
                )
            )

        at_risk = await self.prediction_repository.find_active_by_tiers(
            HIGH_RISK_TIERS, limit=HIGH_RISK_CAP
        )
        if at_risk:
            alerts.append(
                Alert(
                    alert_type=AlertType.HIGH_CHURN_RISK,
                    severity=AlertSeverity.HIGH,
                    count=len(at_risk),
                    message=f"{len(at_risk)} clients at high risk of churning",
                    data=[_prediction_data(prediction) for prediction in at_risk],
                )
            )

        logger.info("alerts.evaluated", total=len(alerts))
        return AlertsResponseDTO(
            alerts=[AlertDTO.from_domain(alert) for alert in alerts],
            total_alerts=len(alerts),
            generated_at=now,
        )

"""Conversions between MongoDB documents and domain entities."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from bizintel.domain.entities.client import (
    Client,
    ClientStatus,
    Feedback,
    Interaction,
    InteractionType,
    Order,
    OrderLine,
    OrderStatus,
    SentimentLabel,
)
from bizintel.domain.entities.operations import (
    Delivery,
    DeliveryStatus,
    Invoice,
    InvoiceStatus,
    Product,
)
from bizintel.domain.entities.prediction import (
    ChurnPrediction,
    RiskTier,
    SalesForecast,
)
from bizintel.domain.entities.query import ensure_utc


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


def _float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(str(value)) if not isinstance(value, (int, float)) else float(value)


def client_from_document(document: Dict[str, Any]) -> Client:
    return Client(
        id=str(document["id"]),
        name=document.get("name", ""),
        status=ClientStatus(document.get("status", ClientStatus.ACTIVE.value)),
        phone=document.get("phone"),
        email=document.get("email"),
        monthly_consumption=(
            _float(document["monthly_consumption"])
            if document.get("monthly_consumption") is not None
            else None
        ),
        created_at=ensure_utc(document["created_at"]),
    )


def order_from_document(document: Dict[str, Any]) -> Order:
    return Order(
        id=str(document["id"]),
        client_id=str(document.get("client_id", "")),
        order_date=ensure_utc(document["order_date"]),
        total_amount=_float(document.get("total_amount")),
        status=OrderStatus(document.get("status", OrderStatus.PENDING.value)),
        items=[
            OrderLine(
                product_id=str(item["product_id"]),
                quantity=int(item.get("quantity", 0)),
                unit_price=_float(item.get("unit_price")),
                total_price=_float(item.get("total_price")),
            )
            for item in document.get("items") or []
        ],
    )


def interaction_from_document(document: Dict[str, Any]) -> Interaction:
    return Interaction(
        id=str(document.get("id", "")),
        client_id=str(document.get("client_id", "")),
        type=InteractionType(document.get("type", InteractionType.VISIT.value)),
        visit_date=ensure_utc(document["visit_date"]),
        outcome=document.get("outcome"),
    )


def feedback_from_document(document: Dict[str, Any]) -> Feedback:
    sentiment = document.get("sentiment")
    return Feedback(
        id=str(document["id"]),
        client_id=str(document.get("client_id", "")),
        rating=int(document.get("rating", 3)),
        comment=document.get("comment"),
        sentiment=SentimentLabel(sentiment) if sentiment else None,
        sentiment_score=document.get("sentiment_score"),
        is_processed=bool(document.get("is_processed", False)),
        created_at=ensure_utc(document["created_at"]),
    )


def product_from_document(document: Dict[str, Any]) -> Product:
    return Product(
        id=str(document["id"]),
        name=document.get("name", ""),
        price=_float(document.get("price")),
        is_active=bool(document.get("is_active", True)),
    )


def invoice_from_document(document: Dict[str, Any]) -> Invoice:
    return Invoice(
        id=str(document["id"]),
        order_id=str(document.get("order_id", "")),
        client_id=document.get("client_id"),
        invoice_number=document.get("invoice_number"),
        amount=_float(document.get("amount")),
        status=InvoiceStatus(document.get("status", InvoiceStatus.DRAFT.value)),
        due_date=ensure_utc(document["due_date"]),
    )


def delivery_from_document(document: Dict[str, Any]) -> Delivery:
    return Delivery(
        id=str(document["id"]),
        order_id=str(document.get("order_id", "")),
        client_id=document.get("client_id"),
        scheduled_date=ensure_utc(document["scheduled_date"]),
        status=DeliveryStatus(document.get("status", DeliveryStatus.SCHEDULED.value)),
        notes=document.get("notes"),
    )


def churn_prediction_to_document(prediction: ChurnPrediction) -> Dict[str, Any]:
    return {
        "id": prediction.id,
        "client_id": prediction.client_id,
        "churn_score": prediction.churn_score,
        "risk_level": prediction.risk_level.value,
        "risk_factors": dict(prediction.risk_factors),
        "prediction_date": prediction.prediction_date,
        "is_active": prediction.is_active,
        "retired_at": prediction.retired_at,
    }


def churn_prediction_from_document(document: Dict[str, Any]) -> ChurnPrediction:
    return ChurnPrediction(
        id=str(document["id"]),
        client_id=str(document["client_id"]),
        churn_score=float(document["churn_score"]),
        risk_level=RiskTier(document["risk_level"]),
        risk_factors=dict(document.get("risk_factors") or {}),
        prediction_date=ensure_utc(document["prediction_date"]),
        is_active=bool(document.get("is_active", False)),
        retired_at=_utc(document.get("retired_at")),
    )


def sales_forecast_to_document(forecast: SalesForecast) -> Dict[str, Any]:
    return {
        "id": forecast.id,
        "request_id": forecast.request_id,
        "client_id": forecast.client_id,
        "period": forecast.period.value,
        "forecast_date": forecast.forecast_date,
        "predicted_amount": forecast.predicted_amount,
        "confidence": forecast.confidence,
        "model_metadata": dict(forecast.model_metadata),
        "created_at": forecast.created_at,
    }

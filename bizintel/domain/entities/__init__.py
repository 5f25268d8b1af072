"""
Domain Entities Package

Core records and value objects of the decision pipeline.
"""

from .ai import (
    ChatReply,
    ChurnAnalysis,
    ChurnScore,
    DocumentExtraction,
    ForecastedSale,
    HistoricalSale,
    SalesForecastResult,
    SentimentAnalysis,
)
from .analytics import (
    AggregationBucket,
    Alert,
    AlertSeverity,
    AlertType,
    ClientRanking,
    ProductProfitability,
    ProductSalesTotals,
    SalesTotals,
)
from .client import (
    Client,
    ClientHistory,
    ClientStatus,
    Feedback,
    Interaction,
    InteractionType,
    Order,
    OrderLine,
    OrderStatus,
    SentimentLabel,
)
from .errors import (
    DomainError,
    ErrorCategory,
    InsufficientDataError,
    NotFoundError,
    PersistenceError,
    UpstreamApplicationError,
    UpstreamUnavailableError,
    ValidationError,
)
from .features import FeatureVector
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .operations import Delivery, DeliveryStatus, Invoice, InvoiceStatus, Product
from .prediction import ChurnPrediction, ForecastPeriod, RiskTier, SalesForecast
from .query import DateRange, OrderQuery, ensure_utc

__all__ = [
    "AggregationBucket",
    "Alert",
    "AlertSeverity",
    "AlertType",
    "ApplicationInfo",
    "ChatReply",
    "ChurnAnalysis",
    "ChurnPrediction",
    "ChurnScore",
    "Client",
    "ClientHistory",
    "ClientRanking",
    "ClientStatus",
    "DateRange",
    "Delivery",
    "DeliveryStatus",
    "DependencyStatus",
    "DocumentExtraction",
    "DomainError",
    "ErrorCategory",
    "FeatureVector",
    "Feedback",
    "ForecastPeriod",
    "ForecastedSale",
    "HistoricalSale",
    "InsufficientDataError",
    "Interaction",
    "InteractionType",
    "Invoice",
    "InvoiceStatus",
    "NotFoundError",
    "Order",
    "OrderQuery",
    "OrderLine",
    "OrderStatus",
    "PersistenceError",
    "Product",
    "ProductProfitability",
    "ProductSalesTotals",
    "RiskTier",
    "SalesForecast",
    "SalesForecastResult",
    "SalesTotals",
    "SentimentAnalysis",
    "SentimentLabel",
    "ServiceStatus",
    "SystemHealth",
    "UpstreamApplicationError",
    "UpstreamUnavailableError",
    "ValidationError",
    "ensure_utc",
]

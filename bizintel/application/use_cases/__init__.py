"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data between the
repositories, the AI gateway and the domain services.
"""

from .ai_status_use_case import GetAIServiceStatusUseCase
from .alert_use_cases import GetAlertsUseCase
from .analytics_use_cases import (
    GetDashboardUseCase,
    GetProfitabilityUseCase,
    GetSalesTrendsUseCase,
    GetTopClientsUseCase,
)
from .chatbot_use_case import ChatbotUseCase
from .churn_prediction_use_case import PredictChurnUseCase
from .document_extraction_use_case import ExtractDocumentUseCase, UploadedDocument
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .order_quote_use_case import QuoteOrderUseCase
from .sales_forecast_use_case import ForecastSalesUseCase
from .sentiment_use_case import AnalyzeSentimentUseCase

__all__ = [
    "AnalyzeSentimentUseCase",
    "ChatbotUseCase",
    "ExtractDocumentUseCase",
    "ForecastSalesUseCase",
    "GetAIServiceStatusUseCase",
    "GetAlertsUseCase",
    "GetApplicationInfoUseCase",
    "GetDashboardUseCase",
    "GetHealthStatusUseCase",
    "GetProfitabilityUseCase",
    "GetSalesTrendsUseCase",
    "GetTopClientsUseCase",
    "PredictChurnUseCase",
    "QuoteOrderUseCase",
    "UploadedDocument",
]

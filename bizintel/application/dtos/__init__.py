"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .ai_dto import (
    AIServiceStatusDTO,
    AIServiceStatusItemDTO,
    ChatRequestDTO,
    ChatResponseDTO,
    ChurnPredictionDTO,
    ChurnRequestDTO,
    ChurnResponseDTO,
    DocumentExtractionDTO,
    ForecastPointDTO,
    ForecastRequestDTO,
    ForecastResponseDTO,
    SentimentRequestDTO,
    SentimentResponseDTO,
)
from .analytics_dto import (
    AlertDTO,
    AlertsResponseDTO,
    AnalyticsQuery,
    ClientRevenueDTO,
    DashboardKPIsDTO,
    DashboardResponseDTO,
    ProductProfitabilityDTO,
    ProfitabilityResponseDTO,
    SalesTrendBucketDTO,
    SalesTrendsResponseDTO,
    TopClientsResponseDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO
from .order_dto import (
    OrderQuoteLineDTO,
    OrderQuoteRequestDTO,
    OrderQuoteResponseDTO,
    QuotedLineDTO,
)

__all__ = [
    "AIServiceStatusDTO",
    "AIServiceStatusItemDTO",
    "AlertDTO",
    "AlertsResponseDTO",
    "AnalyticsQuery",
    "ApplicationInfoDTO",
    "ChatRequestDTO",
    "ChatResponseDTO",
    "ChurnPredictionDTO",
    "ChurnRequestDTO",
    "ChurnResponseDTO",
    "ClientRevenueDTO",
    "DashboardKPIsDTO",
    "DashboardResponseDTO",
    "DependencyStatusDTO",
    "DocumentExtractionDTO",
    "ForecastPointDTO",
    "ForecastRequestDTO",
    "ForecastResponseDTO",
    "OrderQuoteLineDTO",
    "OrderQuoteRequestDTO",
    "OrderQuoteResponseDTO",
    "ProductProfitabilityDTO",
    "ProfitabilityResponseDTO",
    "QuotedLineDTO",
    "SalesTrendBucketDTO",
    "SalesTrendsResponseDTO",
    "SentimentRequestDTO",
    "SentimentResponseDTO",
    "SystemHealthDTO",
    "TopClientsResponseDTO",
]

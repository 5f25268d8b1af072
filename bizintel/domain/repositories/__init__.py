"""
Repositories Package

Contracts for data access. Concrete implementations are provided by the
infrastructure layer.
"""

from .churn_prediction_repository import IChurnPredictionRepository
from .client_repository import IClientRepository
from .delivery_repository import IDeliveryRepository
from .feedback_repository import IFeedbackRepository
from .invoice_repository import IInvoiceRepository
from .order_repository import IOrderRepository
from .product_repository import IProductRepository
from .sales_forecast_repository import ISalesForecastRepository

__all__ = [
    "IChurnPredictionRepository",
    "IClientRepository",
    "IDeliveryRepository",
    "IFeedbackRepository",
    "IInvoiceRepository",
    "IOrderRepository",
    "IProductRepository",
    "ISalesForecastRepository",
]

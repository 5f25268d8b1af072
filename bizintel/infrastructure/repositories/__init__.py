"""
Repositories Package - Infrastructure Layer

MongoDB implementations of the domain repository interfaces.
"""

from .churn_prediction_repository import ChurnPredictionRepository
from .client_repository import ClientRepository
from .delivery_repository import DeliveryRepository
from .feedback_repository import FeedbackRepository
from .invoice_repository import InvoiceRepository
from .order_repository import OrderRepository
from .product_repository import ProductRepository
from .sales_forecast_repository import SalesForecastRepository

__all__ = [
    "ChurnPredictionRepository",
    "ClientRepository",
    "DeliveryRepository",
    "FeedbackRepository",
    "InvoiceRepository",
    "OrderRepository",
    "ProductRepository",
    "SalesForecastRepository",
]

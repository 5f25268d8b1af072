"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from bizintel.application.models import SystemInfo
from bizintel.application.use_cases.ai_status_use_case import GetAIServiceStatusUseCase
from bizintel.application.use_cases.alert_use_cases import GetAlertsUseCase
from bizintel.application.use_cases.analytics_use_cases import (
    GetDashboardUseCase,
    GetProfitabilityUseCase,
    GetSalesTrendsUseCase,
    GetTopClientsUseCase,
)
from bizintel.application.use_cases.chatbot_use_case import ChatbotUseCase
from bizintel.application.use_cases.churn_prediction_use_case import (
    PredictChurnUseCase,
)
from bizintel.application.use_cases.document_extraction_use_case import (
    ExtractDocumentUseCase,
)
from bizintel.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from bizintel.application.use_cases.order_quote_use_case import QuoteOrderUseCase
from bizintel.application.use_cases.sales_forecast_use_case import (
    ForecastSalesUseCase,
)
from bizintel.application.use_cases.sentiment_use_case import AnalyzeSentimentUseCase
from bizintel.domain.services import AggregationEngine, FeatureExtractor
from bizintel.infrastructure.database import MongoDatabase
from bizintel.infrastructure.gateways import AIServiceGateway
from bizintel.infrastructure.repositories import (
    ChurnPredictionRepository,
    ClientRepository,
    DeliveryRepository,
    FeedbackRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
    SalesForecastRepository,
)
from bizintel.infrastructure.services import HealthCheckService
from bizintel.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    client_repository = providers.Singleton(ClientRepository, database=mongo_database)
    order_repository = providers.Singleton(OrderRepository, database=mongo_database)
    product_repository = providers.Singleton(
        ProductRepository, database=mongo_database
    )
    churn_prediction_repository = providers.Singleton(
        ChurnPredictionRepository, database=mongo_database
    )
    sales_forecast_repository = providers.Singleton(
        SalesForecastRepository, database=mongo_database
    )
    feedback_repository = providers.Singleton(
        FeedbackRepository, database=mongo_database
    )
    invoice_repository = providers.Singleton(InvoiceRepository, database=mongo_database)
    delivery_repository = providers.Singleton(
        DeliveryRepository, database=mongo_database
    )

    # Gateways
    ai_service_gateway = providers.Singleton(
        AIServiceGateway,
        base_url=config.ai.base_url,
        timeout=config.ai.timeout,
        document_timeout=config.ai.document_timeout,
        status_timeout=config.ai.status_timeout,
    )

    # Domain services
    feature_extractor = providers.Singleton(FeatureExtractor)
    aggregation_engine = providers.Singleton(AggregationEngine)

    # Application (use cases)
    predict_churn_use_case = providers.Factory(
        PredictChurnUseCase,
        client_repository=client_repository,
        prediction_repository=churn_prediction_repository,
        ai_gateway=ai_service_gateway,
        feature_extractor=feature_extractor,
    )

    forecast_sales_use_case = providers.Factory(
        ForecastSalesUseCase,
        order_repository=order_repository,
        client_repository=client_repository,
        forecast_repository=sales_forecast_repository,
        ai_gateway=ai_service_gateway,
    )

    extract_document_use_case = providers.Factory(
        ExtractDocumentUseCase,
        ai_gateway=ai_service_gateway,
        max_file_size=config.upload.max_file_size,
        allowed_mime_types=config.upload.allowed_mime_types,
        allowed_extensions=config.upload.allowed_extensions,
    )

    analyze_sentiment_use_case = providers.Factory(
        AnalyzeSentimentUseCase,
        ai_gateway=ai_service_gateway,
        feedback_repository=feedback_repository,
    )

    chatbot_use_case = providers.Factory(ChatbotUseCase, ai_gateway=ai_service_gateway)

    ai_status_use_case = providers.Factory(
        GetAIServiceStatusUseCase, ai_gateway=ai_service_gateway
    )

    get_sales_trends_use_case = providers.Factory(
        GetSalesTrendsUseCase,
        order_repository=order_repository,
        engine=aggregation_engine,
    )

    get_profitability_use_case = providers.Factory(
        GetProfitabilityUseCase,
        order_repository=order_repository,
        product_repository=product_repository,
        client_repository=client_repository,
        engine=aggregation_engine,
    )

    get_top_clients_use_case = providers.Factory(
        GetTopClientsUseCase,
        order_repository=order_repository,
        client_repository=client_repository,
    )

    get_dashboard_use_case = providers.Factory(
        GetDashboardUseCase,
        client_repository=client_repository,
        product_repository=product_repository,
        order_repository=order_repository,
    )

    get_alerts_use_case = providers.Factory(
        GetAlertsUseCase,
        invoice_repository=invoice_repository,
        delivery_repository=delivery_repository,
        prediction_repository=churn_prediction_repository,
    )

    quote_order_use_case = providers.Factory(
        QuoteOrderUseCase,
        client_repository=client_repository,
        product_repository=product_repository,
        tax_rate=config.business.tax_rate,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        ai_gateway=ai_service_gateway,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        database_uri=config.database.mongo_uri,
        ai_service_url=config.ai.base_url,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the MongoDB indexes the pipeline relies on at startup and
    closes the client at shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()
        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")

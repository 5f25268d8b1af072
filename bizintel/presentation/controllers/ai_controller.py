"""
AI Router - Presentation Layer

Endpoints forwarding work to the external AI service: churn scoring,
sales forecasting, OCR, sentiment analysis, the business assistant and
the upstream status overview.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from bizintel.application.dtos.ai_dto import (
    AIServiceStatusDTO,
    ChatRequestDTO,
    ChatResponseDTO,
    ChurnRequestDTO,
    ChurnResponseDTO,
    DocumentExtractionDTO,
    ForecastRequestDTO,
    ForecastResponseDTO,
    SentimentRequestDTO,
    SentimentResponseDTO,
)
from bizintel.application.models import CallerIdentity
from bizintel.application.use_cases.ai_status_use_case import GetAIServiceStatusUseCase
from bizintel.application.use_cases.chatbot_use_case import ChatbotUseCase
from bizintel.application.use_cases.churn_prediction_use_case import (
    PredictChurnUseCase,
)
from bizintel.application.use_cases.document_extraction_use_case import (
    DEFAULT_DOCUMENT_TYPE,
    ExtractDocumentUseCase,
    UploadedDocument,
)
from bizintel.application.use_cases.sales_forecast_use_case import (
    ForecastSalesUseCase,
)
from bizintel.application.use_cases.sentiment_use_case import AnalyzeSentimentUseCase
from bizintel.domain.entities.errors import DomainError
from bizintel.main.container import AppContainer
from bizintel.presentation.errors import to_http_exception
from bizintel.presentation.security import get_caller_identity

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/ai", tags=["AI"], dependencies=[Depends(get_caller_identity)]
)


def _internal_error(event: str, exc: Exception) -> HTTPException:
    logger.error(event, error=str(exc), exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post(
    "/churn",
    response_model=ChurnResponseDTO,
    summary="Score churn risk for active clients",
    description="""
    Build a feature vector for every active client (or the requested subset),
    score the batch with the churn model and make the new scores the active
    prediction of each client. Previous predictions are kept as history.
    """,
)
@inject
async def predict_churn(
    payload: ChurnRequestDTO,
    churn_use_case: PredictChurnUseCase = Depends(
        Provide[AppContainer.predict_churn_use_case]
    ),
) -> ChurnResponseDTO:
    try:
        return await churn_use_case.execute(payload)
    except DomainError as exc:
        logger.warning("ai.churn.failed", error=exc.message, category=exc.category)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover
        raise _internal_error("ai.churn.unexpected_error", exc) from exc


@router.post(
    "/forecast",
    response_model=ForecastResponseDTO,
    summary="Forecast sales",
    description="""
    Send the last two years of orders (optionally for a single client) to the
    forecasting model and store the returned points as one batch. At least
    ten orders are required.
    """,
)
@inject
async def forecast_sales(
    payload: ForecastRequestDTO,
    forecast_use_case: ForecastSalesUseCase = Depends(
        Provide[AppContainer.forecast_sales_use_case]
    ),
) -> ForecastResponseDTO:
    try:
        return await forecast_use_case.execute(payload)
    except DomainError as exc:
        logger.warning("ai.forecast.failed", error=exc.message, category=exc.category)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover
        raise _internal_error("ai.forecast.unexpected_error", exc) from exc


@router.post(
    "/ocr",
    response_model=DocumentExtractionDTO,
    summary="Extract text and fields from a document",
)
@inject
async def extract_document(
    document: UploadFile = File(..., description="JPEG, PNG or PDF document"),
    document_type: str = Form(DEFAULT_DOCUMENT_TYPE),
    document_use_case: ExtractDocumentUseCase = Depends(
        Provide[AppContainer.extract_document_use_case]
    ),
) -> DocumentExtractionDTO:
    upload = UploadedDocument(
        stream=document.file,
        mime_type=document.content_type,
        filename=document.filename,
        document_type=document_type or DEFAULT_DOCUMENT_TYPE,
    )
    try:
        return await document_use_case.execute(upload)
    except DomainError as exc:
        logger.warning("ai.ocr.failed", error=exc.message, category=exc.category)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover
        raise _internal_error("ai.ocr.unexpected_error", exc) from exc


@router.post("/sentiment", response_model=SentimentResponseDTO)
@inject
async def analyze_sentiment(
    payload: SentimentRequestDTO,
    sentiment_use_case: AnalyzeSentimentUseCase = Depends(
        Provide[AppContainer.analyze_sentiment_use_case]
    ),
) -> SentimentResponseDTO:
    """Score the sentiment of a text and optionally annotate a feedback record."""
    try:
        return await sentiment_use_case.execute(payload)
    except DomainError as exc:
        logger.warning("ai.sentiment.failed", error=exc.message, category=exc.category)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover
        raise _internal_error("ai.sentiment.unexpected_error", exc) from exc


@router.post("/chatbot", response_model=ChatResponseDTO)
@inject
async def chat(
    payload: ChatRequestDTO,
    caller: CallerIdentity = Depends(get_caller_identity),
    chatbot_use_case: ChatbotUseCase = Depends(
        Provide[AppContainer.chatbot_use_case]
    ),
) -> ChatResponseDTO:
    """Talk to the business assistant."""
    try:
        return await chatbot_use_case.execute(payload, caller)
    except DomainError as exc:
        logger.warning("ai.chatbot.failed", error=exc.message, category=exc.category)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover
        raise _internal_error("ai.chatbot.unexpected_error", exc) from exc


@router.get("/status", response_model=AIServiceStatusDTO)
@inject
async def ai_status(
    status_use_case: GetAIServiceStatusUseCase = Depends(
        Provide[AppContainer.ai_status_use_case]
    ),
) -> AIServiceStatusDTO:
    """Report which upstream AI services are reachable."""
    return await status_use_case.execute()

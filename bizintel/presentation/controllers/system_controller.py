"""
System Router - Presentation Layer

Liveness and build metadata. ``/health`` answers 503 while the store is
down so load balancers stop routing to the instance; an offline AI
endpoint only shows up as DEGRADED.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, Response, status

from bizintel.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from bizintel.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from bizintel.domain.entities.health import ServiceStatus
from bizintel.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={503: {"model": SystemHealthDTO, "description": "Store unreachable"}},
)
@inject
async def health(
    response: Response,
    health_use_case: GetHealthStatusUseCase = Depends(
        Provide[AppContainer.get_health_status_use_case]
    ),
) -> SystemHealthDTO:
    report = await health_use_case.execute()
    if report.status is ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("system.health.down", store=report.store.message)
    elif report.offline_ai_services:
        logger.info("system.health.degraded", offline=report.offline_ai_services)
    return report


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    info_use_case: GetApplicationInfoUseCase = Depends(
        Provide[AppContainer.get_application_info_use_case]
    ),
) -> ApplicationInfoDTO:
    """Version, commit, uptime and the current health report."""
    started_at = getattr(request.app.state, "started_at", None)
    return await info_use_case.execute(started_at)

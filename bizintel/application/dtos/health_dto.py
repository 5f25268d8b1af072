"""Application DTOs - Health and application info"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from bizintel.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, dependency: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=dependency.name,
            status=dependency.status,
            message=dependency.message,
            checked_at=dependency.checked_at,
            latency_ms=dependency.latency_ms,
            details=dependency.details,
        )


class SystemHealthDTO(BaseModel):
    """
    Response of ``GET /health``.

    ``status`` is DOWN when the store is unreachable and DEGRADED when
    only some AI service endpoints are.
    """

    status: ServiceStatus
    store: DependencyStatusDTO
    ai_services: List[DependencyStatusDTO] = Field(default_factory=list)
    offline_ai_services: List[str] = Field(
        default_factory=list, description="AI features currently unavailable"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            store=DependencyStatusDTO.from_domain(health.store),
            ai_services=[
                DependencyStatusDTO.from_domain(service)
                for service in health.ai_services
            ],
            offline_ai_services=health.offline_ai_services,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "degraded",
                "store": {
                    "name": "mongo",
                    "status": "up",
                    "checked_at": "2025-03-01T12:00:00Z",
                    "latency_ms": 3.1,
                    "details": {"database": "bizintel"},
                },
                "ai_services": [
                    {
                        "name": "churn",
                        "status": "up",
                        "checked_at": "2025-03-01T12:00:00Z",
                        "latency_ms": 12.4,
                    },
                    {
                        "name": "ocr",
                        "status": "down",
                        "message": "HTTP 503",
                        "checked_at": "2025-03-01T12:00:00Z",
                        "latency_ms": 8.0,
                        "details": {"status_code": 503},
                    },
                ],
                "offline_ai_services": ["ocr"],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """Response of ``GET /info``."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: SystemHealthDTO
    extras: Dict[str, Any] = Field(
        default_factory=dict,
        description="Store and AI service locations, credentials removed",
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            health=SystemHealthDTO.from_domain(info.health),
            extras=info.extras,
        )

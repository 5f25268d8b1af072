"""Application Use Case - AI service status"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Sequence

from bizintel.application.dtos.ai_dto import AIServiceStatusDTO, AIServiceStatusItemDTO
from bizintel.domain.entities.health import ServiceStatus
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.shared.consts import AI_SERVICE_NAMES


class GetAIServiceStatusUseCase:
    """Probes every upstream AI service concurrently."""

    def __init__(
        self,
        ai_gateway: IAIServiceGateway,
        service_names: Sequence[str] = AI_SERVICE_NAMES,
    ):
        self.ai_gateway = ai_gateway
        self.service_names = tuple(service_names)

    async def execute(self) -> AIServiceStatusDTO:
        statuses = await asyncio.gather(
            *(self.ai_gateway.check_service(name) for name in self.service_names)
        )

        services = [
            AIServiceStatusItemDTO(
                service=status.name,
                status="online" if status.status == ServiceStatus.UP else "offline",
                error=None if status.status == ServiceStatus.UP else status.message,
                latency_ms=status.latency_ms,
            )
            for status in statuses
        ]
        overall = (
            "healthy" if all(item.status == "online" for item in services) else "degraded"
        )
        return AIServiceStatusDTO(
            overall_status=overall,
            services=services,
            timestamp=datetime.now(timezone.utc),
        )

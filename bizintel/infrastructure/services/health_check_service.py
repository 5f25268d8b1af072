"""
Infrastructure Service - Health checks

MongoDB is pinged directly. AI service endpoints are probed through the
gateway's status call, the same probe ``/ai/status`` uses, so both views
agree.
"""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import List, Optional, Sequence

import structlog
from pymongo.errors import PyMongoError

from bizintel.domain.entities.health import DependencyStatus, ServiceStatus
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway
from bizintel.domain.ports.health_check import IHealthCheckService
from bizintel.infrastructure.database.mongo_database import MongoDatabase
from bizintel.shared.consts import AI_SERVICE_NAMES

logger = structlog.get_logger(__name__)

STORE = "mongo"


class HealthCheckService(IHealthCheckService):
    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        ai_gateway: Optional[IAIServiceGateway],
        service_names: Sequence[str] = AI_SERVICE_NAMES,
    ) -> None:
        self._mongo_database = mongo_database
        self._ai_gateway = ai_gateway
        self._service_names = tuple(service_names)

    async def check_store(self) -> DependencyStatus:
        if self._mongo_database is None:
            return DependencyStatus(
                name=STORE,
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.to_thread(self._mongo_database.client.admin.command, "ping")
        except PyMongoError as exc:
            logger.warning("health.store.unreachable", error=str(exc))
            return DependencyStatus(
                name=STORE,
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )

        return DependencyStatus(
            name=STORE,
            status=ServiceStatus.UP,
            latency_ms=(perf_counter() - start) * 1000,
            details={"database": self._mongo_database.db.name},
        )

    async def check_ai_services(self) -> List[DependencyStatus]:
        if self._ai_gateway is None:
            return [
                DependencyStatus(
                    name=name,
                    status=ServiceStatus.UNKNOWN,
                    message="AI service gateway not configured.",
                )
                for name in self._service_names
            ]

        return list(
            await asyncio.gather(
                *(self._ai_gateway.check_service(name) for name in self._service_names)
            )
        )

"""
Use cases behind ``/health`` and ``/info``.

Both evaluate the same report: the store plus every AI service endpoint.
``/info`` adds build metadata and where the service points, with
credentials stripped from connection URLs.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from bizintel.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from bizintel.application.models import SystemInfo
from bizintel.domain.entities.health import ApplicationInfo
from bizintel.domain.ports.health_check import IHealthCheckService


def redact_url(url: str) -> str:
    """Strip ``user:password@`` from a connection URL, keeping host and port."""
    if not url:
        return url

    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url

    netloc = parsed.netloc.rsplit("@", 1)[-1]
    return urlunsplit((parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment))


def uptime_seconds(started_at: datetime, now: datetime) -> float:
    return max(0.0, (now - started_at).total_seconds())


class GetHealthStatusUseCase:
    """Store and AI service availability."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        return SystemHealthDTO.from_domain(await self._health_check_service.evaluate())


class GetApplicationInfoUseCase:
    """Build metadata, uptime and the current health report."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    def _locations(self) -> Dict[str, Any]:
        return {
            "store_uri": redact_url(self._info.database_uri),
            "ai_service_url": redact_url(self._info.ai_service_url),
        }

    async def execute(
        self, started_at: Optional[datetime], now: Optional[datetime] = None
    ) -> ApplicationInfoDTO:
        health = await self._health_check_service.evaluate()
        now = now or datetime.now(timezone.utc)
        started = started_at or now

        return ApplicationInfoDTO.from_domain(
            ApplicationInfo(
                name=self._info.title,
                description=self._info.description,
                version=self._info.version,
                environment=self._info.environment,
                git_commit=self._info.git_commit,
                build_time=self._info.build_time,
                started_at=started,
                uptime_seconds=uptime_seconds(started, now),
                health=health,
                extras=self._locations(),
            )
        )

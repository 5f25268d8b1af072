"""
Health domain entities.

The store is required for every operation; each AI service endpoint only
backs its own feature. A store outage takes the system DOWN, while an
unreachable AI endpoint leaves it DEGRADED.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Result of probing one dependency."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


def overall_status(
    store: DependencyStatus, ai_services: List[DependencyStatus]
) -> ServiceStatus:
    if store.status in (ServiceStatus.DOWN, ServiceStatus.UNKNOWN):
        return store.status
    if any(service.status is not ServiceStatus.UP for service in ai_services):
        return ServiceStatus.DEGRADED
    return store.status


@dataclass(slots=True)
class SystemHealth:
    """Store availability plus one entry per AI service endpoint."""

    store: DependencyStatus
    ai_services: List[DependencyStatus] = field(default_factory=list)
    status: ServiceStatus = field(init=False)

    def __post_init__(self) -> None:
        self.status = overall_status(self.store, self.ai_services)

    @property
    def offline_ai_services(self) -> List[str]:
        return [s.name for s in self.ai_services if s.status is not ServiceStatus.UP]


@dataclass(slots=True)
class ApplicationInfo:
    """Build and runtime metadata returned by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: SystemHealth
    extras: Dict[str, Any] = field(default_factory=dict)

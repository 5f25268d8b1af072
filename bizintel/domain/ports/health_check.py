"""
Domain Port - Health checks

Probes the store and the AI service endpoints. Probes report failures in
the returned status instead of raising.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import List

from bizintel.domain.entities.health import DependencyStatus, SystemHealth


class IHealthCheckService(ABC):
    """Interface for the dependency probes behind /health and /info."""

    @abstractmethod
    async def check_store(self) -> DependencyStatus:
        pass

    @abstractmethod
    async def check_ai_services(self) -> List[DependencyStatus]:
        """One status per AI service endpoint, in a stable order."""
        pass

    async def evaluate(self) -> SystemHealth:
        store, ai_services = await asyncio.gather(
            self.check_store(), self.check_ai_services()
        )
        return SystemHealth(store=store, ai_services=list(ai_services))

"""
Domain Layer Package

Business rules of the decision pipeline: entities, contracts for the store
and the AI service, and pure computations. No framework or infrastructure
dependencies.
"""

from bizintel.domain import entities, gateways, ports, repositories, services

__all__ = ["entities", "gateways", "ports", "repositories", "services"]

"""
Gateways Package - Domain Layer

Contracts for external service communication. Concrete implementations
live in the infrastructure layer.
"""

from .ai_service_gateway import IAIServiceGateway

__all__ = ["IAIServiceGateway"]

"""
Gateways Package - Infrastructure Layer

HTTP implementations of the domain gateway interfaces.
"""

from .ai_service_gateway import AIServiceGateway

__all__ = ["AIServiceGateway"]

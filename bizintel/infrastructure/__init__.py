"""
Infrastructure Layer Package

MongoDB persistence, the HTTP gateway to the AI service and the health
check service.
"""

from bizintel.infrastructure import repositories

__all__ = ["repositories"]

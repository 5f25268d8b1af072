"""
Presentation Layer Package

FastAPI routers translating HTTP requests into use case calls and domain
errors into HTTP responses.
"""

from bizintel.presentation import controllers

__all__ = ["controllers"]

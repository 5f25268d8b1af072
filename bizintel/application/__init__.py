"""
Application Layer Package

Use cases orchestrating the domain services, the repositories and the AI
gateway, and the DTOs exchanged with the presentation layer.
"""

from bizintel.application import dtos, models, use_cases

__all__ = ["dtos", "models", "use_cases"]

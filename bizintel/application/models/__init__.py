"""Application-level models."""

from .caller import CallerIdentity
from .system_info import SystemInfo

__all__ = ["CallerIdentity", "SystemInfo"]

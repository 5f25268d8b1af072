"""Identity of the caller, as supplied by the authentication layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerIdentity:
    user_id: str
    role: str

"""
Caller identity.

Authentication happens upstream; the authenticated user's id and role
reach this service as request headers.
"""

from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from bizintel.application.models import CallerIdentity

DEFAULT_ROLE = "USER"

user_id_header = APIKeyHeader(name="X-User-Id", auto_error=False)
user_role_header = APIKeyHeader(name="X-User-Role", auto_error=False)


async def get_caller_identity(
    user_id: Optional[str] = Security(user_id_header),
    role: Optional[str] = Security(user_role_header),
) -> CallerIdentity:
    """Resolve the caller or reject the request with 401."""
    if not user_id or not user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing caller identity.",
        )
    return CallerIdentity(user_id=user_id.strip(), role=(role or DEFAULT_ROLE).strip())

from __future__ import annotations

import pytest
from fastapi import HTTPException

from bizintel.presentation.security import get_caller_identity


@pytest.mark.asyncio
async def test_caller_identity_from_headers() -> None:
    caller = await get_caller_identity(user_id=" u-1 ", role="ADMIN")
    assert caller.user_id == "u-1"
    assert caller.role == "ADMIN"


@pytest.mark.asyncio
async def test_role_defaults_to_user() -> None:
    caller = await get_caller_identity(user_id="u-1", role=None)
    assert caller.role == "USER"


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [None, "", "   "])
async def test_missing_identity_is_unauthorized(user_id) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_caller_identity(user_id=user_id, role=None)
    assert exc_info.value.status_code == 401

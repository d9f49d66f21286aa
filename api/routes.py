"""
Session-protected routes.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from auth.dependencies import require_session

router = APIRouter()


@router.post("/test/login")
async def check_login(
    user: Dict[str, Any] = Depends(require_session),
) -> Dict[str, Any]:
    """Confirms the session cookie resolves to a user."""
    return {"message": "User correctly connected", "data": user}

"""
Request identity.

Authentication happens upstream; the auth layer forwards the signed-in user's
id in a header (X-User-Id by default). Routes that act on behalf of a user
depend on `get_current_user_id`.
"""

from fastapi import Depends, Request

from career_guide.core.config import Settings, get_settings
from career_guide.core.errors import UnauthorizedError


async def get_current_user_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """
    FastAPI dependency - id of the calling user.

    Usage:
        @router.get("/me")
        async def route(user_id: str = Depends(get_current_user_id)):
            ...
    """
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        raise UnauthorizedError("Authentication required")
    return user_id

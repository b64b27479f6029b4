# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import authenticate, get_bearer_token, require_service_role
#
#   @router.post("/request-pause")
#   def request_pause(body: PauseRequest, token: Optional[str] = Depends(get_bearer_token)):
#       user = authenticate(token)
# =============================================================================

from app.auth.dependencies import (
    authenticate,
    decode_token,
    get_bearer_token,
    require_service_role,
)
from app.auth.models import AuthUser

__all__ = [
    "authenticate",
    "decode_token",
    "get_bearer_token",
    "require_service_role",
    "AuthUser",
]

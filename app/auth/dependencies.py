# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Supports both:
# - ES256/RS256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret), only when SUPABASE_JWT_SECRET is set
#
# Usage:
#   # Inside a handler, after the body has been checked
#   user = authenticate(token)
#
#   # As a route guard for service callers
#   @router.post("/schedule-today", dependencies=[Depends(require_service_role)])
# =============================================================================

import hmac
import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Missing headers are handled here (401),
# not by FastAPI.
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

SERVICE_ROLE_CLAIM = "service_role"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        UnauthorizedError: Unreadable header, HS256 without a configured
            secret, or an asymmetric token whose kid is not in the JWKS
    """
    # Decode header without verification to get algorithm and key ID
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise UnauthorizedError(f"Invalid token: {e}")

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    # If HS256, use the legacy secret; never verify against an empty one
    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            logger.error("Rejecting HS256 token: SUPABASE_JWT_SECRET is not configured")
            raise UnauthorizedError("HS256 tokens are not accepted")
        return settings.SUPABASE_JWT_SECRET, "HS256"

    # For ES256 or other algorithms, use JWKS
    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}")
    raise UnauthorizedError("Invalid token: unknown signing key")


def decode_token(token: str, audience: str | None = "authenticated") -> dict[str, Any]:
    """
    Verify a Supabase JWT and return its claims.

    Args:
        token: Raw JWT
        audience: Expected "aud" claim, or None to skip the audience check

    Raises:
        UnauthorizedError: If the token is invalid or expired
    """
    signing_key, algorithm = _get_signing_key(token)

    try:
        return jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthorizedError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthorizedError(f"Invalid token: {e}")


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[str]:
    """
    The caller's raw bearer token, if any.

    Not verified here: it is forwarded to Supabase, which enforces RLS.
    """
    if credentials is None:
        return None
    return credentials.credentials


def authenticate(token: Optional[str]) -> AuthUser:
    """
    Extract and validate user from a Supabase JWT token.

    1. Verifies the JWT signature (supports ES256 and HS256)
    2. Validates the token hasn't expired
    3. Returns an AuthUser with the user's ID, email and role claim

    Called from the handler body rather than as a dependency, so that
    request validation (400) runs before authentication (401).

    Raises:
        UnauthorizedError: 401 if token is missing, invalid or expired
    """
    if not token:
        raise UnauthorizedError("Missing bearer token")

    payload = decode_token(token)

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise UnauthorizedError("Invalid token: missing user ID")

    # Convert string UUID to UUID object
    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise UnauthorizedError("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"), role=payload.get("role"))


async def require_service_role(
    token: Optional[str] = Depends(get_bearer_token)
) -> None:
    """
    Only let service callers (cron, workers, admins' tooling) through.

    Accepts the service_role key itself, or a JWT whose "role" claim is
    service_role.

    Raises:
        UnauthorizedError: 401 for any other caller
    """
    if not token:
        raise UnauthorizedError("Missing bearer token")

    if hmac.compare_digest(token.encode(), settings.SUPABASE_SERVICE_ROLE_KEY.encode()):
        return

    payload = decode_token(token, audience=None)
    if payload.get("role") != SERVICE_ROLE_CLAIM:
        logger.warning(f"Rejected scheduler call with role={payload.get('role')}")
        raise UnauthorizedError("Service role required")

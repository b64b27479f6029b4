# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database. `role` is the Postgres role claim
    ("authenticated"), not the application role stored on profiles.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None

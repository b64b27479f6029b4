# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def same_id(left: Any, right: Any) -> bool:
    """Compare row ids that may arrive as UUID, str or int."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


# =============================================================================
# Error Utilities
# =============================================================================

def error_message(exc: Exception) -> str:
    """
    Best human-readable message for an exception.

    PostgREST errors (postgrest.exceptions.APIError) carry the database
    message in `.message`; str() on them yields a dict repr instead.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)

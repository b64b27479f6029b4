# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the handler logic behind the HTTP endpoints:
# - models/: Pydantic schemas for rows, request bodies and responses
# - services/: Macro report, ETA, pause and scheduler services
#
# Services take a Supabase client as their first argument and raise
# app.exceptions errors; they never build clients or HTTP responses.
# =============================================================================

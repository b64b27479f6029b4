# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the NutriFit delivery API:
# - conftest.py: FakeSupabase, JWT helpers, TestClient fixture
# - test_geo.py / test_delivery_calendar.py: Pure helpers
# - test_models.py: Pydantic model validation
# - test_services.py: Service layer against FakeSupabase
# - test_api.py: HTTP contract of every endpoint
# - test_auth.py / test_config.py / test_supabase_client.py: Ambient stack
# - test_workers.py / test_seed.py: Celery tasks and the seed script
#
# Run tests with: pytest
# =============================================================================

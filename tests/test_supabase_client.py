# =============================================================================
# tests/test_supabase_client.py - Supabase Client Factory Tests
# =============================================================================
# create_client is patched out, so no network access happens here.
#
# Run with: pytest tests/test_supabase_client.py -v
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError


@pytest.fixture(autouse=True)
def reset_singleton():
    SupabaseClient.reset()
    yield
    SupabaseClient.reset()


class TestServiceClient:
    """Tests for the service_role singleton."""

    def test_created_once(self):
        with patch("lib.supabase_client.create_client", return_value=MagicMock()) as mock_create:
            first = SupabaseClient.get_service_client()
            second = SupabaseClient.get_service_client()

        assert first is second
        mock_create.assert_called_once_with(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    def test_reset_drops_instance(self):
        with patch("lib.supabase_client.create_client", side_effect=[MagicMock(), MagicMock()]):
            first = SupabaseClient.get_service_client()
            SupabaseClient.reset()
            second = SupabaseClient.get_service_client()

        assert first is not second

    def test_creation_failure_wrapped(self):
        with patch("lib.supabase_client.create_client", side_effect=ValueError("Invalid URL")):
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_service_client()

        assert exc_info.value.code == "CLIENT_INIT_FAILED"
        assert "SUPABASE_SERVICE_ROLE_KEY" in str(exc_info.value)


class TestUserClient:
    """Tests for caller-scoped clients."""

    def test_forwards_bearer_token(self):
        with patch("lib.supabase_client.create_client", return_value=MagicMock()) as mock_create:
            SupabaseClient.for_user("caller-jwt")

        args, kwargs = mock_create.call_args
        assert args == (settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        assert kwargs["options"].headers["Authorization"] == "Bearer caller-jwt"

    def test_not_cached(self):
        with patch("lib.supabase_client.create_client", side_effect=[MagicMock(), MagicMock()]):
            assert SupabaseClient.for_user("a") is not SupabaseClient.for_user("b")

    def test_anonymous_without_token(self):
        with patch("lib.supabase_client.create_client", return_value=MagicMock()) as mock_create:
            SupabaseClient.for_user(None)

        assert "Authorization" not in mock_create.call_args.kwargs["options"].headers

"""Tests for the study generation rate limiter."""

from datetime import datetime, timezone

import pytest

from app.core.errors import AppError
from app.modules.rate_limit.service import RateLimitService

NOW = datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def service(fake_supabase):
    return RateLimitService(
        fake_supabase,
        anonymous_limit=1,
        authenticated_limit=5,
        anonymous_window_minutes=480,
        authenticated_window_minutes=60,
    )


class TestWindows:
    """Tests for fixed window calculation."""

    def test_hour_aligned_window(self, service) -> None:
        start, end = service.calculate_window("authenticated", NOW)
        assert start == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert end == datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc)

    def test_multi_hour_window(self, service) -> None:
        start, end = service.calculate_window("anonymous", NOW)
        assert start.hour == 8
        assert end.hour == 16

    def test_sub_hour_window(self, fake_supabase) -> None:
        service = RateLimitService(fake_supabase, authenticated_window_minutes=15)
        start, _ = service.calculate_window("authenticated", NOW)
        assert start.minute == 30

    def test_reset_time(self, service) -> None:
        assert service.calculate_reset_time("authenticated", NOW) == 30
        assert service.calculate_reset_time("anonymous", NOW) == 330


class TestCheckRateLimit:
    """Tests for check_rate_limit and enforce_rate_limit."""

    def test_first_request_allowed(self, service, fake_supabase) -> None:
        result = service.check_rate_limit("session-1", "anonymous", NOW)
        assert result.allowed
        assert result.remaining == 1
        query = fake_supabase.queries_for("rate_limit_usage")[0]
        assert query.has("eq", "window_start", "2024-01-01T08:00:00+00:00")

    def test_exhausted(self, service, fake_supabase) -> None:
        fake_supabase.queue("rate_limit_usage", {"count": 1})
        result = service.check_rate_limit("session-1", "anonymous", NOW)
        assert not result.allowed
        assert result.remaining == 0

    def test_storage_error_fails_open(self, service, fake_supabase) -> None:
        fake_supabase.queue("rate_limit_usage", Exception("connection refused"))
        result = service.check_rate_limit("user-1", "authenticated", NOW)
        assert result.allowed
        assert result.remaining == 5

    def test_invalid_user_type(self, service) -> None:
        with pytest.raises(AppError) as exc_info:
            service.check_rate_limit("user-1", "admin", NOW)
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_enforce_records_usage(self, service, fake_supabase) -> None:
        fake_supabase.queue("rate_limit_usage", {"count": 2})
        result = service.enforce_rate_limit("user-1", "authenticated", NOW)
        assert result.remaining == 2
        assert result.current_usage == 3
        rpc = fake_supabase.queries_for("rpc:increment_rate_limit_usage")[0]
        _, params = rpc.args_for("rpc")[0]
        assert params["p_identifier"] == "user-1"
        assert params["p_window_start"] == "2024-01-01T10:00:00+00:00"

    def test_enforce_raises_when_exhausted(self, service, fake_supabase) -> None:
        fake_supabase.queue("rate_limit_usage", {"count": 1})
        with pytest.raises(AppError) as exc_info:
            service.enforce_rate_limit("session-1", "anonymous", NOW)
        assert exc_info.value.code == "RATE_LIMIT_EXCEEDED"
        assert exc_info.value.status_code == 429
        assert "330 minutes" in exc_info.value.message
        assert not fake_supabase.queries_for("rpc:increment_rate_limit_usage")


class TestResetUserLimit:
    """Tests for reset_user_limit."""

    def test_deletes_usage(self, service, fake_supabase) -> None:
        service.reset_user_limit("user-1", "authenticated")
        query = fake_supabase.queries_for("rate_limit_usage")[0]
        assert query.has("delete")
        assert query.has("eq", "identifier", "user-1")

    def test_failure_raises(self, service, fake_supabase) -> None:
        fake_supabase.queue("rate_limit_usage", Exception("boom"))
        with pytest.raises(AppError) as exc_info:
            service.reset_user_limit("user-1", "authenticated")
        assert exc_info.value.code == "RATE_LIMIT_RESET_ERROR"

"""Tests for token costs, balances and consumption."""

import pytest

from app.core.errors import AppError
from app.modules.tokens.service import TokenService


@pytest.fixture
def service(fake_supabase):
    return TokenService(fake_supabase)


class TestTokenCost:
    """Tests for cost calculation."""

    @pytest.mark.parametrize("language,mode,expected", [
        ("en", "standard", 10),
        ("en", "quick", 5),
        ("hi", "deep", 23),
        ("ml", "lectio", 18),
        ("ml", "sermon", 30),
        ("fr", "standard", 10),
    ])
    def test_calculate_token_cost(self, service, language, mode, expected) -> None:
        assert service.calculate_token_cost(language, mode) == expected

    def test_cost_in_rupees_rounds_up(self, service) -> None:
        assert service.calculate_cost_in_rupees(10) == 3
        assert service.calculate_cost_in_rupees(100) == 25


class TestGetUserTokens:
    """Tests for get_user_tokens."""

    def test_returns_balance(self, service, fake_supabase) -> None:
        fake_supabase.queue("rpc:get_or_create_user_tokens", [{
            "available_tokens": 15,
            "purchased_tokens": 40,
            "daily_limit": 20,
            "last_reset": "2024-01-01",
            "total_consumed_today": 5,
        }])
        info = service.get_user_tokens("user-1", "standard")
        assert info.total_tokens == 55
        assert info.can_purchase
        assert not info.is_unlimited

    def test_invalid_plan(self, service) -> None:
        with pytest.raises(AppError) as exc_info:
            service.get_user_tokens("user-1", "gold")
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_empty_result(self, service) -> None:
        with pytest.raises(AppError) as exc_info:
            service.get_user_tokens("user-1", "standard")
        assert exc_info.value.code == "TOKEN_SERVICE_ERROR"


class TestConsumeTokens:
    """Tests for consume_tokens."""

    def test_success_logs_event(self, service, fake_supabase) -> None:
        fake_supabase.queue("rpc:consume_user_tokens", [{
            "success": True,
            "available_tokens": 10,
            "purchased_tokens": 0,
            "daily_limit": 20,
        }])
        result = service.consume_tokens("user-1", "standard", 10, {"user_id": "user-1", "extra": {"language": "en"}})
        assert result.success
        assert result.total_tokens == 10
        log = fake_supabase.queries_for("rpc:log_token_event")[0]
        _, params = log.args_for("rpc")[0]
        assert params["p_event_type"] == "token_consumed"
        assert params["p_event_data"]["language"] == "en"

    def test_insufficient(self, service, fake_supabase) -> None:
        fake_supabase.queue("rpc:consume_user_tokens", {
            "success": False,
            "available_tokens": 2,
            "purchased_tokens": 0,
            "error_message": "Insufficient tokens",
        })
        with pytest.raises(AppError) as exc_info:
            service.consume_tokens("user-1", "standard", 10)
        assert exc_info.value.code == "INSUFFICIENT_TOKENS"
        assert exc_info.value.status_code == 429

    @pytest.mark.parametrize("cost", [0, -5, 1001, True])
    def test_invalid_cost(self, service, cost) -> None:
        with pytest.raises(AppError):
            service.consume_tokens("user-1", "standard", cost)

    def test_log_failure_does_not_raise(self, service, fake_supabase) -> None:
        fake_supabase.queue("rpc:consume_user_tokens", [{"success": True, "available_tokens": 5, "purchased_tokens": 0}])
        fake_supabase.queue("rpc:log_token_event", Exception("analytics down"))
        result = service.consume_tokens("user-1", "standard", 10, {"user_id": "user-1"})
        assert result.daily_limit == 20


class TestAddPurchasedTokens:
    """Tests for add_purchased_tokens."""

    def test_standard_plan_purchase(self, service, fake_supabase) -> None:
        fake_supabase.queue("rpc:add_purchased_tokens", [{"success": True, "new_purchased_balance": 100}])
        result = service.add_purchased_tokens("user-1", "standard", 100)
        assert result.new_purchased_balance == 100
        assert result.cost_in_rupees == 25

    def test_other_plans_cannot_purchase(self, service) -> None:
        with pytest.raises(AppError) as exc_info:
            service.add_purchased_tokens("user-1", "premium", 100)
        assert exc_info.value.code == "INVALID_OPERATION"

    def test_amount_bounds(self, service) -> None:
        with pytest.raises(AppError) as exc_info:
            service.add_purchased_tokens("user-1", "standard", 10001)
        assert exc_info.value.code == "VALIDATION_ERROR"

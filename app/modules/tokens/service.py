import math
import logging
from typing import Any, Dict, Optional

from supabase import Client

from app.core.errors import AppError
from app.modules.tokens.schemas import TokenInfo, TokenConsumptionResult, TokenPurchaseResponse

logger = logging.getLogger(__name__)

PLAN_CONFIGS = {
    "free": {"daily_limit": 8, "is_unlimited": False, "can_purchase": True},
    "standard": {"daily_limit": 20, "is_unlimited": False, "can_purchase": True},
    "plus": {"daily_limit": 50, "is_unlimited": False, "can_purchase": True},
    "premium": {"daily_limit": 999999999, "is_unlimited": True, "can_purchase": False},
}

LANGUAGE_TOKEN_COSTS = {"en": 10, "hi": 15, "ml": 15}
DEFAULT_TOKEN_COST = 10

STUDY_MODE_MULTIPLIERS = {
    "quick": 0.5,
    "standard": 1.0,
    "deep": 1.5,
    "lectio": 1.2,
    "sermon": 2.0,
}

TOKENS_PER_RUPEE = 4
MIN_PURCHASE = 1
MAX_PURCHASE = 10000
MAX_TOKEN_COST = 1000


def _first_row(data: Any) -> Optional[Dict[str, Any]]:
    """RPCs returning a table come back as a list; scalar-row ones as a dict."""
    if isinstance(data, list):
        return data[0] if data else None
    return data or None


class TokenService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def calculate_token_cost(self, language: str, study_mode: str = "standard") -> int:
        base = LANGUAGE_TOKEN_COSTS.get(language, DEFAULT_TOKEN_COST)
        multiplier = STUDY_MODE_MULTIPLIERS.get(study_mode, 1.0)
        return math.ceil(base * multiplier)

    def calculate_cost_in_rupees(self, token_amount: int) -> int:
        return math.ceil(token_amount / TOKENS_PER_RUPEE)

    def get_daily_limit(self, user_plan: str) -> int:
        return PLAN_CONFIGS[user_plan]["daily_limit"]

    def can_purchase_tokens(self, user_plan: str) -> bool:
        return PLAN_CONFIGS[user_plan]["can_purchase"]

    def is_unlimited_plan(self, user_plan: str) -> bool:
        return PLAN_CONFIGS[user_plan]["is_unlimited"]

    def _validate_identifier(self, identifier: str) -> None:
        if not identifier or not isinstance(identifier, str) or not identifier.strip():
            raise AppError("VALIDATION_ERROR", "Invalid user identifier provided", 400)

    def _validate_plan(self, user_plan: str) -> None:
        if user_plan not in PLAN_CONFIGS:
            raise AppError("VALIDATION_ERROR", "Invalid user plan provided", 400)

    def _validate_token_cost(self, token_cost: int) -> None:
        if isinstance(token_cost, bool) or not isinstance(token_cost, int) or not 0 < token_cost <= MAX_TOKEN_COST:
            raise AppError("VALIDATION_ERROR", "Token cost must be a positive integer between 1 and 1000", 400)

    def get_user_tokens(self, identifier: str, user_plan: str) -> TokenInfo:
        """Current balance; the RPC creates the row and applies the daily reset when due."""
        self._validate_identifier(identifier)
        self._validate_plan(user_plan)
        try:
            result = self.supabase.rpc("get_or_create_user_tokens", {
                "p_identifier": identifier,
                "p_user_plan": user_plan,
            }).execute()
            data = _first_row(result.data)
            if not data:
                raise AppError("TOKEN_SERVICE_ERROR", "No token data returned from database", 500)
            return TokenInfo(
                available_tokens=data["available_tokens"],
                purchased_tokens=data.get("purchased_tokens") or 0,
                daily_limit=data["daily_limit"],
                last_reset=data.get("last_reset"),
                total_consumed_today=data.get("total_consumed_today") or 0,
                total_tokens=data["available_tokens"] + (data.get("purchased_tokens") or 0),
                user_plan=user_plan,
                is_unlimited=self.is_unlimited_plan(user_plan),
                can_purchase=self.can_purchase_tokens(user_plan),
            )
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to get user tokens: {e}")
            raise AppError("TOKEN_SERVICE_ERROR", "Failed to retrieve token information", 500)

    def consume_tokens(
        self,
        identifier: str,
        user_plan: str,
        token_cost: int,
        context: Optional[Dict[str, Any]] = None
    ) -> TokenConsumptionResult:
        """Atomically spend tokens (purchased first). Raises INSUFFICIENT_TOKENS when short."""
        self._validate_identifier(identifier)
        self._validate_plan(user_plan)
        self._validate_token_cost(token_cost)
        try:
            result = self.supabase.rpc("consume_user_tokens", {
                "p_identifier": identifier,
                "p_user_plan": user_plan,
                "p_token_cost": token_cost,
            }).execute()
            data = _first_row(result.data)
            if not data:
                raise AppError("TOKEN_SERVICE_ERROR", "No result returned from token consumption", 500)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to consume tokens: {e}")
            raise AppError("TOKEN_SERVICE_ERROR", "Failed to process token consumption", 500)

        if not data.get("success"):
            self.log_token_event(identifier, "token_insufficient", {
                "user_plan": user_plan,
                "token_cost": token_cost,
                "remaining_daily": data.get("available_tokens"),
                "remaining_purchased": data.get("purchased_tokens"),
            }, context)
            raise AppError("INSUFFICIENT_TOKENS", data.get("error_message") or "Not enough tokens available", 429)

        if context is not None:
            self.log_token_event(identifier, "token_consumed", {
                "user_plan": user_plan,
                "token_cost": token_cost,
                "remaining_daily": data.get("available_tokens"),
                "remaining_purchased": data.get("purchased_tokens"),
            }, context)

        available = data.get("available_tokens") or 0
        purchased = data.get("purchased_tokens") or 0
        return TokenConsumptionResult(
            success=True,
            available_tokens=available,
            purchased_tokens=purchased,
            daily_limit=data.get("daily_limit") or self.get_daily_limit(user_plan),
            total_tokens=available + purchased,
            error_message=data.get("error_message"),
        )

    def add_purchased_tokens(
        self,
        identifier: str,
        user_plan: str,
        token_amount: int,
        context: Optional[Dict[str, Any]] = None
    ) -> TokenPurchaseResponse:
        self._validate_identifier(identifier)
        self._validate_plan(user_plan)
        if isinstance(token_amount, bool) or not isinstance(token_amount, int) or not MIN_PURCHASE <= token_amount <= MAX_PURCHASE:
            raise AppError(
                "VALIDATION_ERROR",
                f"Token purchase amount must be between {MIN_PURCHASE} and {MAX_PURCHASE}",
                400,
            )
        if user_plan != "standard":
            raise AppError("INVALID_OPERATION", f"{user_plan} plan users cannot purchase tokens", 400)

        try:
            result = self.supabase.rpc("add_purchased_tokens", {
                "p_identifier": identifier,
                "p_user_plan": user_plan,
                "p_token_amount": token_amount,
            }).execute()
            data = _first_row(result.data)
            if not data:
                raise AppError("TOKEN_SERVICE_ERROR", "No result returned from token purchase", 500)
            if not data.get("success"):
                self.log_token_event(identifier, "token_purchase_failed", {
                    "user_plan": user_plan,
                    "tokens_added": token_amount,
                    "error": data.get("error_message"),
                }, context)
                raise AppError("TOKEN_PURCHASE_ERROR", data.get("error_message") or "Failed to purchase tokens", 400)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to add purchased tokens: {e}")
            raise AppError("TOKEN_SERVICE_ERROR", "Failed to add purchased tokens", 500)

        self.log_token_event(identifier, "token_added", {
            "user_plan": user_plan,
            "tokens_added": token_amount,
            "source": "purchase",
            "new_purchased_balance": data.get("new_purchased_balance"),
        }, context)
        return TokenPurchaseResponse(
            success=True,
            tokens_added=token_amount,
            new_purchased_balance=data.get("new_purchased_balance") or 0,
            cost_in_rupees=self.calculate_cost_in_rupees(token_amount),
        )

    def log_token_event(
        self,
        identifier: str,
        event_type: str,
        event_data: Dict[str, Any],
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Best-effort analytics; never raises."""
        try:
            self.supabase.rpc("log_token_event", {
                "p_user_id": identifier,
                "p_event_type": event_type,
                "p_event_data": {**event_data, **((context or {}).get("extra") or {})},
                "p_session_id": (context or {}).get("session_id"),
            }).execute()
        except Exception as e:
            logger.warning(f"Failed to log token event {event_type}: {e}")

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class TokenInfo(BaseModel):
    available_tokens: int
    purchased_tokens: int
    daily_limit: int
    last_reset: Optional[date] = None
    total_consumed_today: int = 0
    total_tokens: int
    user_plan: str
    is_unlimited: bool = False
    can_purchase: bool = False


class TokenConsumptionResult(BaseModel):
    success: bool
    available_tokens: int
    purchased_tokens: int
    daily_limit: int
    total_tokens: int
    error_message: Optional[str] = None


class TokenCostResponse(BaseModel):
    language: str
    study_mode: str
    token_cost: int
    cost_in_rupees: int


class TokenPurchaseRequest(BaseModel):
    token_amount: int = Field(..., ge=1, le=10000)
    payment_id: Optional[str] = None


class TokenPurchaseResponse(BaseModel):
    success: bool
    tokens_added: int
    new_purchased_balance: int
    cost_in_rupees: int

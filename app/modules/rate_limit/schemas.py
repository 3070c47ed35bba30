from pydantic import BaseModel


class RateLimitResult(BaseModel):
    allowed: bool
    remaining: int
    reset_time: int  # minutes until the current window ends
    current_usage: int
    limit: int


class RateLimitInfo(BaseModel):
    remaining: int
    reset_time: int


class RateLimitStatusResponse(BaseModel):
    user_type: str
    allowed: bool
    remaining: int
    reset_time: int
    limit: int
    window_minutes: int

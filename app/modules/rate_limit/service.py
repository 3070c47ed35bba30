import math
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from supabase import Client

from app.config.settings import settings
from app.core.errors import AppError, rate_limit_error
from app.modules.rate_limit.schemas import RateLimitResult

logger = logging.getLogger(__name__)

USER_TYPES = ("anonymous", "authenticated")


class RateLimitService:
    """Fixed-window limiter for study generation, counted in rate_limit_usage.

    Storage failures never block a caller: checks fail open with the full limit
    remaining and usage recording only logs.
    """

    def __init__(
        self,
        supabase: Client,
        anonymous_limit: Optional[int] = None,
        authenticated_limit: Optional[int] = None,
        anonymous_window_minutes: Optional[int] = None,
        authenticated_window_minutes: Optional[int] = None,
    ):
        self.supabase = supabase
        self.limits = {
            "anonymous": anonymous_limit if anonymous_limit is not None else settings.anonymous_rate_limit,
            "authenticated": authenticated_limit if authenticated_limit is not None else settings.authenticated_rate_limit,
        }
        self.windows = {
            "anonymous": anonymous_window_minutes or settings.anonymous_window_minutes,
            "authenticated": authenticated_window_minutes or settings.authenticated_window_minutes,
        }

    def get_limit(self, user_type: str) -> int:
        return self.limits["anonymous" if user_type == "anonymous" else "authenticated"]

    def get_window_minutes(self, user_type: str) -> int:
        return self.windows["anonymous" if user_type == "anonymous" else "authenticated"]

    def calculate_window(self, user_type: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """Return (start, end) of the fixed window containing now.

        Windows of an hour or more are aligned to multiples of their length in
        hours from midnight; shorter windows to multiples of their length in minutes.
        """
        now = now or datetime.now(timezone.utc)
        window_minutes = self.get_window_minutes(user_type)
        if window_minutes >= 60:
            window_hours = window_minutes / 60
            start_hour = int(math.floor(now.hour / window_hours) * window_hours)
            start = now.replace(hour=start_hour, minute=0, second=0, microsecond=0)
        else:
            start_minute = (now.minute // window_minutes) * window_minutes
            start = now.replace(minute=start_minute, second=0, microsecond=0)
        return start, start + timedelta(minutes=window_minutes)

    def calculate_reset_time(self, user_type: str, now: Optional[datetime] = None) -> int:
        """Whole minutes until the current window ends, never negative."""
        now = now or datetime.now(timezone.utc)
        _, end = self.calculate_window(user_type, now)
        return max(0, math.ceil((end - now).total_seconds() / 60))

    def _validate_inputs(self, identifier: str, user_type: str) -> None:
        if not identifier or not isinstance(identifier, str):
            raise AppError("VALIDATION_ERROR", "Invalid user identifier provided", 400)
        if user_type not in USER_TYPES:
            raise AppError("VALIDATION_ERROR", 'Invalid user type. Must be "anonymous" or "authenticated"', 400)

    def _get_usage(self, identifier: str, user_type: str, window_start: datetime) -> int:
        try:
            result = self.supabase.table("rate_limit_usage")\
                .select("count")\
                .eq("identifier", identifier)\
                .eq("user_type", user_type)\
                .eq("window_start", window_start.isoformat())\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return 0
            return int(result.data.get("count") or 0)
        except Exception as e:
            if getattr(e, "code", None) == "PGRST116":
                return 0
            logger.error(f"Error reading rate limit usage for {user_type} caller: {e}")
            return 0

    def check_rate_limit(self, identifier: str, user_type: str, now: Optional[datetime] = None) -> RateLimitResult:
        now = now or datetime.now(timezone.utc)
        self._validate_inputs(identifier, user_type)
        limit = self.get_limit(user_type)
        reset_time = self.calculate_reset_time(user_type, now)
        try:
            window_start, _ = self.calculate_window(user_type, now)
            usage = self._get_usage(identifier, user_type, window_start)
            return RateLimitResult(
                allowed=usage < limit,
                remaining=max(0, limit - usage),
                reset_time=reset_time,
                current_usage=usage,
                limit=limit,
            )
        except Exception as e:
            logger.error(f"Rate limiting error, failing open: {e}")
            return RateLimitResult(allowed=True, remaining=limit, reset_time=reset_time, current_usage=0, limit=limit)

    def record_usage(self, identifier: str, user_type: str, now: Optional[datetime] = None) -> None:
        try:
            self._validate_inputs(identifier, user_type)
            window_start, _ = self.calculate_window(user_type, now)
            self.supabase.rpc("increment_rate_limit_usage", {
                "p_identifier": identifier,
                "p_user_type": user_type,
                "p_window_start": window_start.isoformat(),
            }).execute()
        except Exception as e:
            logger.error(f"Failed to record rate limit usage: {e}")

    def enforce_rate_limit(self, identifier: str, user_type: str, now: Optional[datetime] = None) -> RateLimitResult:
        """Raise RATE_LIMIT_EXCEEDED when the caller is out of requests, otherwise count this one."""
        result = self.check_rate_limit(identifier, user_type, now)
        if not result.allowed:
            raise rate_limit_error(result.reset_time)
        self.record_usage(identifier, user_type, now)
        return result.model_copy(update={
            "remaining": max(0, result.remaining - 1),
            "current_usage": result.current_usage + 1,
        })

    def reset_user_limit(self, identifier: str, user_type: str) -> None:
        self._validate_inputs(identifier, user_type)
        try:
            self.supabase.table("rate_limit_usage")\
                .delete()\
                .eq("identifier", identifier)\
                .eq("user_type", user_type)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to reset rate limit: {e}")
            raise AppError("RATE_LIMIT_RESET_ERROR", f"Failed to reset rate limit for {user_type} user", 500)

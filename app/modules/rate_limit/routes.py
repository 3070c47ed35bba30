from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.rate_limit.schemas import RateLimitStatusResponse
from app.modules.rate_limit.service import RateLimitService
from app.core.dependencies import get_request_context, RequestContext
from supabase import Client

router = APIRouter(prefix="/rate-limit", tags=["rate-limit"])


def get_rate_limit_service(supabase: Client = Depends(get_supabase)) -> RateLimitService:
    return RateLimitService(supabase)


@router.get("/status", response_model=RateLimitStatusResponse)
async def get_rate_limit_status(
    context: RequestContext = Depends(get_request_context),
    service: RateLimitService = Depends(get_rate_limit_service)
):
    """Remaining study generations for the caller in the current window"""
    result = service.check_rate_limit(context.identifier, context.user_type)
    return RateLimitStatusResponse(
        user_type=context.user_type,
        allowed=result.allowed,
        remaining=result.remaining,
        reset_time=result.reset_time,
        limit=result.limit,
        window_minutes=service.get_window_minutes(context.user_type),
    )

from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.tokens.schemas import TokenInfo, TokenCostResponse, TokenPurchaseRequest, TokenPurchaseResponse
from app.modules.tokens.service import TokenService
from app.core.dependencies import get_authenticated_context, RequestContext
from app.core.errors import validation_error
from supabase import Client

router = APIRouter(prefix="/tokens", tags=["tokens"])


def get_token_service(supabase: Client = Depends(get_supabase)) -> TokenService:
    return TokenService(supabase)


@router.get("/status", response_model=TokenInfo)
async def get_token_status(
    context: RequestContext = Depends(get_authenticated_context),
    service: TokenService = Depends(get_token_service)
):
    """Current token balance for the signed-in user"""
    return service.get_user_tokens(context.user_id, context.plan)


@router.get("/cost", response_model=TokenCostResponse)
async def get_token_cost(
    language: str = Query("en"),
    study_mode: str = Query("standard"),
    service: TokenService = Depends(get_token_service)
):
    """Tokens a study guide costs for a language and study mode"""
    if language not in ("en", "hi", "ml"):
        raise validation_error("Unsupported language", {"language": language})
    if study_mode not in ("quick", "standard", "deep", "lectio", "sermon"):
        raise validation_error("Unsupported study mode", {"study_mode": study_mode})
    cost = service.calculate_token_cost(language, study_mode)
    return TokenCostResponse(
        language=language,
        study_mode=study_mode,
        token_cost=cost,
        cost_in_rupees=service.calculate_cost_in_rupees(cost),
    )


@router.post("/purchase", response_model=TokenPurchaseResponse)
async def purchase_tokens(
    purchase: TokenPurchaseRequest,
    context: RequestContext = Depends(get_authenticated_context),
    service: TokenService = Depends(get_token_service)
):
    """Record a token purchase (standard plan only)"""
    return service.add_purchased_tokens(
        context.user_id,
        context.plan,
        purchase.token_amount,
        {"user_id": context.user_id, "extra": {"payment_id": purchase.payment_id}},
    )

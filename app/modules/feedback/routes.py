from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.feedback.schemas import FeedbackRequest, FeedbackResponse
from app.modules.feedback.service import FeedbackService
from app.core.dependencies import get_client_ip, get_request_context, RequestContext
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/feedback", tags=["feedback"])


def get_feedback_service(supabase: Client = Depends(get_supabase)) -> FeedbackService:
    return FeedbackService(supabase)


@router.post("", response_model=FeedbackResponse, status_code=201)
async def submit_feedback(
    body: FeedbackRequest,
    ip_address: Optional[str] = Depends(get_client_ip),
    context: RequestContext = Depends(get_request_context),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Record whether a study guide or Jeff Reed session was helpful"""
    return service.submit_feedback(body, context, ip_address)

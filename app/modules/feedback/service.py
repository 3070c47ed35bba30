import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from app.core.analytics import AnalyticsLogger
from app.core.dependencies import RequestContext
from app.core.errors import AppError
from app.core.security_validator import sanitize_input, validate_input
from app.modules.feedback.schemas import MAX_MESSAGE_LENGTH, FeedbackData, FeedbackRequest, FeedbackResponse

logger = logging.getLogger(__name__)

POSITIVE_WORDS = {"good", "great", "helpful", "love", "amazing", "excellent", "wonderful"}
NEGATIVE_WORDS = {"bad", "terrible", "awful", "hate", "horrible", "poor", "useless"}


def calculate_sentiment_score(message: Optional[str]) -> Optional[float]:
    """Word-count sentiment: 0.7 positive, 0.3 negative, 0.5 otherwise. None without a message."""
    if not message:
        return None
    words = message.lower().split()
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    if positive > negative:
        return 0.7
    if negative > positive:
        return 0.3
    return 0.5


class FeedbackService:
    def __init__(self, supabase: Client, analytics: Optional[AnalyticsLogger] = None):
        self.supabase = supabase
        self.analytics = analytics or AnalyticsLogger(supabase)

    def _clean_message(self, request: FeedbackRequest, context: RequestContext, ip_address: Optional[str]) -> Optional[str]:
        """Feedback is never blocked; suspicious messages are sanitized and logged."""
        if not request.message or not request.message.strip():
            return None
        result = validate_input(request.message, "feedback", max_length=MAX_MESSAGE_LENGTH)
        if result.is_valid:
            return request.message.strip()
        self.analytics.log_event("security_violation", {
            "event_type": result.event_type,
            "risk_score": result.risk_score,
            "action_taken": "SANITIZED",
        }, user_id=context.user_id, session_id=context.session_id, ip_address=ip_address)
        return sanitize_input(request.message, max_length=MAX_MESSAGE_LENGTH) or None

    def _exists(self, table: str, column: str, value: str, context: Optional[RequestContext] = None) -> bool:
        try:
            query = self.supabase.table(table).select("id").eq(column, value)
            if context is not None:
                owner = "user_id" if context.is_authenticated else "session_id"
                query = query.eq(owner, context.identifier)
            result = query.limit(1).execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Failed to look up {table} {value}: {e}")
            raise AppError("DATABASE_ERROR", "Failed to verify feedback target", 500)

    def _verify_targets(self, request: FeedbackRequest, context: RequestContext) -> None:
        if request.study_guide_id:
            table = "study_guides" if context.is_authenticated else "anonymous_study_guides"
            if not self._exists(table, "id", request.study_guide_id, context):
                raise AppError("NOT_FOUND", "Study guide not found or access denied", 404)
        if request.jeff_reed_session_id:
            if not self._exists("jeff_reed_sessions", "id", request.jeff_reed_session_id):
                raise AppError("NOT_FOUND", "Session not found or access denied", 404)

    def submit_feedback(
        self,
        request: FeedbackRequest,
        context: RequestContext,
        ip_address: Optional[str] = None
    ) -> FeedbackResponse:
        message = self._clean_message(request, context, ip_address)
        self._verify_targets(request, context)

        sentiment = calculate_sentiment_score(message)
        try:
            result = self.supabase.table("feedback").insert({
                "study_guide_id": request.study_guide_id,
                "jeff_reed_session_id": request.jeff_reed_session_id,
                "user_id": context.user_id,
                "session_id": context.session_id,
                "was_helpful": request.was_helpful,
                "message": message,
                "category": request.category,
                "sentiment_score": sentiment,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }).execute()
            if not result.data:
                raise AppError("DATABASE_ERROR", "Failed to save feedback", 500)
            row = result.data[0]
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to save feedback: {e}")
            raise AppError("DATABASE_ERROR", "Failed to save feedback", 500)

        self.analytics.log_event("feedback_submitted", {
            "feedback_id": row.get("id"),
            "study_guide_id": request.study_guide_id,
            "jeff_reed_session_id": request.jeff_reed_session_id,
            "was_helpful": request.was_helpful,
            "category": request.category,
            "sentiment_score": sentiment,
            "has_message": message is not None,
        }, user_id=context.user_id, session_id=context.session_id, ip_address=ip_address)

        return FeedbackResponse(data=FeedbackData(
            id=str(row["id"]),
            was_helpful=row.get("was_helpful", request.was_helpful),
            message=row.get("message"),
            category=row.get("category") or request.category,
            sentiment_score=row.get("sentiment_score"),
            created_at=row.get("created_at"),
        ))

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

from app.core.analytics import AnalyticsLogger
from app.core.dependencies import RequestContext
from app.core.errors import AppError, not_found_error
from app.core.security_validator import hash_sensitive_data, validate_input
from app.modules.llm.schemas import StudyGuideContent
from app.modules.llm.service import LLMService, get_llm_service
from app.modules.rate_limit.schemas import RateLimitInfo
from app.modules.rate_limit.service import RateLimitService
from app.modules.study_guides.schemas import (
    GenerationMetrics,
    SaveStudyGuideResponse,
    StudyGuideGenerateRequest,
    StudyGuideGenerateResponse,
    StudyGuideListResponse,
    StudyGuideMetadata,
    StudyGuideResponse,
)
from app.modules.tokens.service import TokenService

logger = logging.getLogger(__name__)

HIDDEN_INPUT = "[Hidden]"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class StudyGuideService:
    """
    Generation, caching and management of study guides.

    Signed-in users' guides live in ``study_guides`` keyed by user id; anonymous
    sessions write to ``anonymous_study_guides`` and only a hash of their input
    is stored.
    """

    def __init__(
        self,
        supabase: Client,
        llm_service: Optional[LLMService] = None,
        rate_limit_service: Optional[RateLimitService] = None,
        token_service: Optional[TokenService] = None,
        analytics: Optional[AnalyticsLogger] = None,
    ):
        self.supabase = supabase
        self.llm_service = llm_service
        self.rate_limit_service = rate_limit_service or RateLimitService(supabase)
        self.token_service = token_service or TokenService(supabase)
        self.analytics = analytics or AnalyticsLogger(supabase)

    @staticmethod
    def _table(context: RequestContext) -> str:
        return "study_guides" if context.is_authenticated else "anonymous_study_guides"

    @staticmethod
    def _owner_column(context: RequestContext) -> str:
        return "user_id" if context.is_authenticated else "session_id"

    def _to_response(
        self,
        row: Dict[str, Any],
        context: RequestContext,
        metadata: Optional[StudyGuideMetadata] = None
    ) -> StudyGuideResponse:
        return StudyGuideResponse(
            id=str(row["id"]),
            input_type=row["input_type"],
            input_value=(row.get("input_value") or HIDDEN_INPUT) if context.is_authenticated else HIDDEN_INPUT,
            study_mode=row.get("study_mode") or "standard",
            summary=row["summary"],
            interpretation=row.get("interpretation") or "",
            context=row["context"],
            related_verses=row.get("related_verses") or [],
            reflection_questions=row.get("reflection_questions") or [],
            prayer_points=row.get("prayer_points") or [],
            language=row.get("language") or "en",
            is_saved=bool(row.get("is_saved")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            metadata=metadata,
        )

    def _event_ids(self, context: RequestContext) -> Dict[str, Optional[str]]:
        return {"user_id": context.user_id, "session_id": context.session_id}

    def _enforce_security(self, request: StudyGuideGenerateRequest, context: RequestContext, ip_address: Optional[str]) -> None:
        result = validate_input(request.input_value, request.input_type)
        if result.is_valid:
            return
        logger.warning(
            f"Blocked study guide input ({result.event_type}, risk {result.risk_score}) for {context.user_type} caller"
        )
        self.analytics.log_event("security_violation", {
            "event_type": result.event_type,
            "risk_score": result.risk_score,
            "action_taken": "BLOCKED",
            "input_type": request.input_type,
        }, ip_address=ip_address, **self._event_ids(context))
        raise AppError("SECURITY_VIOLATION", result.message, 400)

    def _find_existing(self, request: StudyGuideGenerateRequest, context: RequestContext, input_value: str) -> Optional[Dict[str, Any]]:
        """Most recent guide this caller already has for the same input; cache misses on any error."""
        try:
            query = self.supabase.table(self._table(context))\
                .select("*")\
                .eq(self._owner_column(context), context.identifier)\
                .eq("input_type", request.input_type)\
                .eq("language", request.language)\
                .eq("study_mode", request.study_mode)
            if context.is_authenticated:
                query = query.eq("input_value", input_value)
            else:
                query = query.eq("input_value_hash", hash_sensitive_data(input_value))
            result = query.order("created_at", desc=True).limit(1).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.warning(f"Study guide cache lookup failed: {e}")
            return None

    def _save(
        self,
        request: StudyGuideGenerateRequest,
        context: RequestContext,
        input_value: str,
        content: StudyGuideContent
    ) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            self._owner_column(context): context.identifier,
            "input_type": request.input_type,
            "study_mode": request.study_mode,
            "language": request.language,
            "is_saved": False,
            **content.model_dump(),
        }
        if context.is_authenticated:
            row["input_value"] = input_value
        else:
            row["input_value_hash"] = hash_sensitive_data(input_value)
        try:
            result = self.supabase.table(self._table(context)).insert(row).execute()
            if not result.data:
                raise AppError("DATABASE_ERROR", "Failed to save study guide", 500)
            return result.data[0]
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to save study guide: {e}")
            raise AppError("DATABASE_ERROR", "Failed to save study guide", 500)

    def generate_study_guide(
        self,
        request: StudyGuideGenerateRequest,
        context: RequestContext,
        ip_address: Optional[str] = None
    ) -> StudyGuideGenerateResponse:
        """Validate, rate limit, reuse a cached guide when possible, otherwise generate and store one."""
        started = time.monotonic()
        input_value = request.input_value.strip()

        self._enforce_security(request, context, ip_address)
        rate = self.rate_limit_service.enforce_rate_limit(context.identifier, context.user_type)
        rate_info = RateLimitInfo(remaining=rate.remaining, reset_time=rate.reset_time)
        token_cost = self.token_service.calculate_token_cost(request.language, request.study_mode)

        existing = self._find_existing(request, context, input_value)
        if existing:
            elapsed = int((time.monotonic() - started) * 1000)
            self.analytics.log_event("study_guide_cache_hit", {
                "input_type": request.input_type,
                "language": request.language,
                "study_mode": request.study_mode,
                "tokens_saved": token_cost,
                "generation_time_ms": elapsed,
            }, ip_address=ip_address, **self._event_ids(context))
            metadata = StudyGuideMetadata(cache_hit=True, generation_time_ms=elapsed)
            return StudyGuideGenerateResponse(data=self._to_response(existing, context, metadata), rate_limit=rate_info)

        tokens_consumed = 0
        if context.is_authenticated and not self.token_service.is_unlimited_plan(context.plan):
            self.token_service.consume_tokens(context.user_id, context.plan, token_cost, {
                "user_id": context.user_id,
                "extra": {"language": request.language, "study_mode": request.study_mode},
            })
            tokens_consumed = token_cost

        if self.llm_service is None:
            self.llm_service = get_llm_service()
        content = self.llm_service.generate_study_guide(
            request.input_type, input_value, request.language, request.study_mode
        )
        saved = self._save(request, context, input_value, content)

        elapsed = int((time.monotonic() - started) * 1000)
        self.analytics.log_event("study_guide_generated", {
            "input_type": request.input_type,
            "language": request.language,
            "study_mode": request.study_mode,
            "is_authenticated": context.is_authenticated,
            "tokens_consumed": tokens_consumed,
            "generation_time_ms": elapsed,
        }, ip_address=ip_address, **self._event_ids(context))

        metadata = StudyGuideMetadata(cache_hit=False, generation_time_ms=elapsed, tokens_consumed=tokens_consumed)
        return StudyGuideGenerateResponse(data=self._to_response(saved, context, metadata), rate_limit=rate_info)

    def list_study_guides(
        self,
        context: RequestContext,
        saved_only: bool = False,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0
    ) -> StudyGuideListResponse:
        """Caller's guides, newest first. limit is clamped to 1..100 and offset to >= 0."""
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        offset = max(0, offset)
        try:
            query = self.supabase.table(self._table(context))\
                .select("*")\
                .eq(self._owner_column(context), context.identifier)
            if saved_only:
                query = query.eq("is_saved", True)
            result = query.order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return StudyGuideListResponse(
                data=[self._to_response(row, context) for row in result.data or []],
                limit=limit,
                offset=offset,
            )
        except Exception as e:
            logger.error(f"Failed to list study guides: {e}")
            raise AppError("DATABASE_ERROR", "Failed to retrieve study guides", 500)

    def update_save_status(self, study_guide_id: str, action: str, context: RequestContext) -> SaveStudyGuideResponse:
        try:
            result = self.supabase.table(self._table(context))\
                .update({
                    "is_saved": action == "save",
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })\
                .eq("id", study_guide_id)\
                .eq(self._owner_column(context), context.identifier)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to update save status for {study_guide_id}: {e}")
            raise AppError("DATABASE_ERROR", "Failed to update study guide", 500)

        if not result.data:
            raise not_found_error("Study guide")
        self.analytics.log_event(f"study_guide_{action}d", {"study_guide_id": study_guide_id}, **self._event_ids(context))
        return SaveStudyGuideResponse(
            message=f"Study guide {action}d successfully",
            data=self._to_response(result.data[0], context),
        )

    def delete_study_guide(self, study_guide_id: str, context: RequestContext) -> None:
        try:
            existing = self.supabase.table(self._table(context))\
                .select("id")\
                .eq("id", study_guide_id)\
                .eq(self._owner_column(context), context.identifier)\
                .execute()
            if not existing.data:
                raise not_found_error("Study guide")
            self.supabase.table(self._table(context))\
                .delete()\
                .eq("id", study_guide_id)\
                .eq(self._owner_column(context), context.identifier)\
                .execute()
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete study guide {study_guide_id}: {e}")
            raise AppError("DATABASE_ERROR", "Failed to delete study guide", 500)

    def get_generation_metrics(self, context: RequestContext) -> GenerationMetrics:
        """Generation and cache statistics for the caller, from analytics events."""
        try:
            result = self.supabase.table("analytics_events")\
                .select("event_type, event_data")\
                .eq(self._owner_column(context), context.identifier)\
                .in_("event_type", ["study_guide_generated", "study_guide_cache_hit"])\
                .execute()
            events: List[Dict[str, Any]] = result.data or []
        except Exception as e:
            logger.error(f"Failed to load generation metrics: {e}")
            raise AppError("DATABASE_ERROR", "Failed to retrieve generation metrics", 500)

        generated = [e for e in events if e["event_type"] == "study_guide_generated"]
        hits = [e for e in events if e["event_type"] == "study_guide_cache_hit"]
        total = len(generated) + len(hits)
        times = [
            (e.get("event_data") or {}).get("generation_time_ms") for e in generated
        ]
        times = [t for t in times if isinstance(t, (int, float))]
        return GenerationMetrics(
            total_generated=len(generated),
            cache_hits=len(hits),
            cache_hit_rate=round(len(hits) / total, 4) if total else 0.0,
            average_response_time_ms=round(sum(times) / len(times), 1) if times else None,
            tokens_saved=sum((e.get("event_data") or {}).get("tokens_saved") or 0 for e in hits),
        )

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from app.database.supabase_client import get_supabase
from app.modules.study_guides.schemas import (
    StudyGuideGenerateRequest, StudyGuideGenerateResponse, StudyGuideListResponse,
    SaveStudyGuideRequest, SaveStudyGuideResponse, GenerationMetrics
)
from app.modules.study_guides.service import StudyGuideService
from app.core.dependencies import get_client_ip, get_request_context, RequestContext
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/study-guides", tags=["study-guides"])


def get_study_guide_service(supabase: Client = Depends(get_supabase)) -> StudyGuideService:
    return StudyGuideService(supabase)


@router.post("/generate", response_model=StudyGuideGenerateResponse)
async def generate_study_guide(
    body: StudyGuideGenerateRequest,
    ip_address: Optional[str] = Depends(get_client_ip),
    context: RequestContext = Depends(get_request_context),
    service: StudyGuideService = Depends(get_study_guide_service)
):
    """Generate a study guide for a scripture reference or topic (reuses an existing one when available)"""
    return await run_in_threadpool(service.generate_study_guide, body, context, ip_address)


@router.get("", response_model=StudyGuideListResponse)
async def list_study_guides(
    saved_only: bool = False,
    limit: int = Query(20),
    offset: int = Query(0),
    context: RequestContext = Depends(get_request_context),
    service: StudyGuideService = Depends(get_study_guide_service)
):
    """List the caller's study guides, newest first"""
    return service.list_study_guides(context, saved_only=saved_only, limit=limit, offset=offset)


@router.get("/metrics", response_model=GenerationMetrics)
async def get_generation_metrics(
    context: RequestContext = Depends(get_request_context),
    service: StudyGuideService = Depends(get_study_guide_service)
):
    """Generation and cache statistics for the caller"""
    return service.get_generation_metrics(context)


@router.post("/{study_guide_id}/save", response_model=SaveStudyGuideResponse)
async def save_study_guide(
    study_guide_id: str,
    body: SaveStudyGuideRequest,
    context: RequestContext = Depends(get_request_context),
    service: StudyGuideService = Depends(get_study_guide_service)
):
    """Save or unsave a study guide"""
    return service.update_save_status(study_guide_id, body.action, context)


@router.delete("/{study_guide_id}", status_code=204)
async def delete_study_guide(
    study_guide_id: str,
    context: RequestContext = Depends(get_request_context),
    service: StudyGuideService = Depends(get_study_guide_service)
):
    """Delete one of the caller's study guides"""
    service.delete_study_guide(study_guide_id, context)

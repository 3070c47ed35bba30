from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from app.database.supabase_client import get_supabase
from app.modules.daily_verse.schemas import DailyVerseResponse
from app.modules.daily_verse.service import DailyVerseService
from app.core.errors import validation_error
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/daily-verse", tags=["daily-verse"])


def get_daily_verse_service(supabase: Client = Depends(get_supabase)) -> DailyVerseService:
    return DailyVerseService(supabase)


@router.get("", response_model=DailyVerseResponse)
async def get_daily_verse(
    date_str: Optional[str] = Query(None, alias="date"),
    service: DailyVerseService = Depends(get_daily_verse_service)
):
    """Verse of the day in English, Hindi and Malayalam (defaults to today, UTC)"""
    target_date = None
    if date_str:
        try:
            target_date = date.fromisoformat(date_str)
        except ValueError:
            raise validation_error("Invalid date format. Use YYYY-MM-DD", {"date": date_str})
    verse = await run_in_threadpool(service.get_daily_verse, target_date)
    return DailyVerseResponse(data=verse)

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from app.config.settings import settings
from app.database.supabase_client import SupabaseClient
from app.modules.daily_verse.service import DailyVerseService

logger = logging.getLogger(__name__)


async def pregenerate_daily_verses(today: Optional[date] = None, service: Optional[DailyVerseService] = None):
    """Make sure today's and tomorrow's verses are cached, then drop expired rows."""
    try:
        service = service or DailyVerseService(SupabaseClient.get_service_client())
        today = today or datetime.now(timezone.utc).date()
        for target in (today, today + timedelta(days=1)):
            try:
                if await asyncio.to_thread(service.ensure_verse, target):
                    logger.info(f"Pre-generated daily verse for {target.isoformat()}")
                else:
                    logger.debug(f"Daily verse for {target.isoformat()} already cached")
            except Exception as e:
                logger.error(f"Failed to pre-generate daily verse for {target.isoformat()}: {str(e)}")

        removed = await asyncio.to_thread(service.cleanup_expired)
        if removed:
            logger.info(f"Removed {removed} expired daily verse(s)")
    except Exception as e:
        logger.error(f"Error in daily verse scheduler: {str(e)}")


async def daily_verse_scheduler_loop():
    """Background task that keeps the daily verse cache filled"""
    while True:
        try:
            await pregenerate_daily_verses()
        except Exception as e:
            logger.error(f"Error in daily verse scheduler loop: {str(e)}")

        await asyncio.sleep(settings.daily_verse_check_interval_seconds)

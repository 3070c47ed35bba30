import logging
from typing import Any, Dict, Optional

from supabase import Client

logger = logging.getLogger(__name__)


class AnalyticsLogger:
    """Writes product events to the analytics_events table. Never raises."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def log_event(
        self,
        event_type: str,
        event_data: Dict[str, Any],
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        try:
            self.supabase.table("analytics_events").insert({
                "event_type": event_type,
                "event_data": event_data,
                "user_id": user_id,
                "session_id": session_id,
                "ip_address": ip_address,
                "user_agent": user_agent,
            }).execute()
        except Exception as e:
            logger.warning(f"Failed to log analytics event {event_type}: {e}")

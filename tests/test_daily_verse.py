"""Tests for the daily verse service and its scheduler."""

import asyncio
from datetime import date
from unittest.mock import MagicMock

import pytest

from app.core.errors import AppError
from app.modules.daily_verse.scheduler import pregenerate_daily_verses
from app.modules.daily_verse.service import (
    CACHE_TABLE,
    FALLBACK_VERSES,
    DailyVerseService,
    fallback_index,
    get_fallback_verse,
)
from app.modules.llm.schemas import DailyVerseContent, VerseTranslations

TRANSLATIONS = {"esv": "And we know", "hi": "और हम जानते हैं", "ml": "നാം അറിയുന്നു"}
DAY = date(2024, 1, 1)


@pytest.fixture
def llm_service() -> MagicMock:
    llm = MagicMock()
    llm.generate_daily_verse.return_value = DailyVerseContent(
        reference="Romans 8:28",
        reference_translations={"en": "Romans 8:28", "hi": "रोमियों 8:28", "ml": "റോമർ 8:28"},
        translations=VerseTranslations(**TRANSLATIONS),
    )
    return llm


@pytest.fixture
def service(fake_supabase, llm_service) -> DailyVerseService:
    return DailyVerseService(fake_supabase, llm_service=llm_service)


def _upserts(fake_supabase):
    return [q for q in fake_supabase.queries_for(CACHE_TABLE) if q.has("upsert")]


class TestFallback:
    """Tests for the built-in fallback verses."""

    def test_index_is_deterministic(self) -> None:
        assert fallback_index(date(2024, 1, 1)) == 0
        assert fallback_index(date(2024, 1, 2)) == 2
        assert all(0 <= fallback_index(date(2024, 3, d)) < len(FALLBACK_VERSES) for d in range(1, 32))

    def test_fallback_verse(self) -> None:
        verse = get_fallback_verse(DAY)
        assert verse.reference == "John 3:16"
        assert verse.reference_translations["hi"] == "यूहन्ना 3:16"
        assert verse.date == "2024-01-01"


class TestGetDailyVerse:
    """Tests for get_daily_verse."""

    def test_cache_hit(self, service, fake_supabase, llm_service) -> None:
        fake_supabase.queue(CACHE_TABLE, [{"verse_data": {
            "reference": "Psalm 23:1",
            "reference_translations": {"en": "Psalm 23:1"},
            "translations": TRANSLATIONS,
        }}])

        verse = service.get_daily_verse(DAY)

        assert verse.reference == "Psalm 23:1"
        assert verse.date == "2024-01-01"
        llm_service.generate_daily_verse.assert_not_called()
        lookup = fake_supabase.queries_for(CACHE_TABLE)[0]
        assert lookup.has("eq", "date_key", "2024-01-01")
        assert lookup.has("eq", "is_active", True)

    def test_generates_and_caches(self, service, fake_supabase, llm_service) -> None:
        fake_supabase.queue(
            CACHE_TABLE,
            [],
            [
                {"verse_data": {"reference": "John 3:16"}},
                {"verse_data": {"reference": "Psalm 23:1"}},
                {"verse_data": {"reference": "John 3:16"}},
            ],
            [],
        )

        verse = service.get_daily_verse(DAY)

        assert verse.reference == "Romans 8:28"
        llm_service.generate_daily_verse.assert_called_once_with(["John 3:16", "Psalm 23:1"], "en")
        upsert = _upserts(fake_supabase)[0]
        row, = upsert.args_for("upsert")[0]
        assert row["date_key"] == "2024-01-01"
        assert row["verse_data"]["reference"] == "Romans 8:28"
        assert row["is_active"] is True
        assert upsert.ops[0][2] == {"on_conflict": "date_key"}

    def test_history_window(self, service, fake_supabase) -> None:
        service.get_recent_references(date(2024, 2, 1))
        query = fake_supabase.queries_for(CACHE_TABLE)[0]
        assert query.has("gte", "date_key", "2024-01-02")

    def test_malformed_cache_row_regenerates(self, service, fake_supabase, llm_service) -> None:
        fake_supabase.queue(CACHE_TABLE, [{"verse_data": {"reference": "John 3:16"}}])
        verse = service.get_daily_verse(DAY)
        assert verse.reference == "Romans 8:28"
        llm_service.generate_daily_verse.assert_called_once()

    def test_llm_failure_serves_uncached_fallback(self, service, fake_supabase, llm_service) -> None:
        llm_service.generate_daily_verse.side_effect = AppError("LLM_SERVICE_ERROR", "down", 503)

        verse = service.get_daily_verse(DAY)

        assert verse.reference == "John 3:16"
        assert verse.translations.esv.startswith("For God so loved the world")
        assert _upserts(fake_supabase) == []

    def test_cache_write_failure_still_returns_verse(self, service, fake_supabase) -> None:
        fake_supabase.queue(CACHE_TABLE, [], [], RuntimeError("write failed"))
        assert service.get_daily_verse(DAY).reference == "Romans 8:28"


class TestMaintenance:
    """Tests for ensure_verse and cleanup_expired."""

    def test_ensure_verse_skips_cached(self, service, fake_supabase, llm_service) -> None:
        fake_supabase.queue(CACHE_TABLE, [{"verse_data": {
            "reference": "Psalm 23:1",
            "translations": TRANSLATIONS,
        }}])
        assert service.ensure_verse(DAY) is False
        llm_service.generate_daily_verse.assert_not_called()

    def test_ensure_verse_generates(self, service, llm_service) -> None:
        assert service.ensure_verse(DAY) is True
        llm_service.generate_daily_verse.assert_called_once()

    def test_ensure_verse_raises_on_llm_failure(self, service, llm_service) -> None:
        llm_service.generate_daily_verse.side_effect = AppError("LLM_SERVICE_ERROR", "down", 503)
        with pytest.raises(AppError):
            service.ensure_verse(DAY)

    def test_cleanup_expired(self, service, fake_supabase) -> None:
        fake_supabase.queue(CACHE_TABLE, [{"id": 1}, {"id": 2}])
        assert service.cleanup_expired() == 2
        query = fake_supabase.queries_for(CACHE_TABLE)[0]
        assert query.has("delete")
        assert query.has("lt", "expires_at")


class TestScheduler:
    """Tests for pregenerate_daily_verses."""

    def test_generates_today_and_tomorrow(self) -> None:
        service = MagicMock()
        service.ensure_verse.return_value = True
        service.cleanup_expired.return_value = 1

        asyncio.run(pregenerate_daily_verses(today=DAY, service=service))

        targets = [c.args[0] for c in service.ensure_verse.call_args_list]
        assert targets == [date(2024, 1, 1), date(2024, 1, 2)]
        service.cleanup_expired.assert_called_once()

    def test_failure_for_one_day_continues(self) -> None:
        service = MagicMock()
        service.ensure_verse.side_effect = [RuntimeError("down"), False]
        service.cleanup_expired.return_value = 0

        asyncio.run(pregenerate_daily_verses(today=DAY, service=service))

        assert service.ensure_verse.call_count == 2
        service.cleanup_expired.assert_called_once()

    def test_cleanup_failure_is_logged(self) -> None:
        service = MagicMock()
        service.ensure_verse.return_value = False
        service.cleanup_expired.side_effect = RuntimeError("db down")
        asyncio.run(pregenerate_daily_verses(today=DAY, service=service))

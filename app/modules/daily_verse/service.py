import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from pydantic import ValidationError
from supabase import Client

from app.config.settings import settings
from app.core.bible_book_normalizer import localize_reference
from app.modules.daily_verse.schemas import DailyVerseData
from app.modules.llm.schemas import VerseTranslations
from app.modules.llm.service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

CACHE_TABLE = "daily_verses_cache"

# Served when neither the cache nor the LLM can provide a verse
FALLBACK_VERSES = [
    ("John 3:16", VerseTranslations(
        esv="For God so loved the world, that he gave his only Son, that whoever believes in him should not perish but have eternal life.",
        hi="क्योंकि परमेश्वर ने जगत से ऐसा प्रेम रखा कि उसने अपना एकलौता पुत्र दे दिया, ताकि जो कोई उस पर विश्वास करे वह नष्ट न हो, परन्तु अनन्त जीवन पाए।",
        ml="കാരണം ദൈവം ലോകത്തെ ഇങ്ങനെ സ്നേഹിച്ചു, തന്റെ ഏകജാതനായ പുത്രനെ നൽകി, അവനിൽ വിശ്വസിക്കുന്നവൻ നശിക്കാതെ നിത്യജീവൻ പ്രാപിക്കേണ്ടതിന്.",
    )),
    ("Psalm 23:1", VerseTranslations(
        esv="The Lord is my shepherd; I shall not want.",
        hi="यहोवा मेरा चरवाहा है; मुझे कमी न होगी।",
        ml="യഹോവ എന്റെ ഇടയൻ ആകുന്നു; എനിക്കു മുട്ടു വരികയില്ല.",
    )),
    ("Philippians 4:13", VerseTranslations(
        esv="I can do all things through him who strengthens me.",
        hi="मैं उसके द्वारा जो मुझे सामर्थ्य देता है, सब कुछ कर सकता हूँ।",
        ml="എന്നെ ബലപ്പെടുത്തുന്ന ക്രിസ്തുവിൽ എനിക്കു സകലവും ചെയ്വാൻ കഴിയും.",
    )),
    ("Joshua 1:9", VerseTranslations(
        esv="Have I not commanded you? Be strong and courageous. Do not be frightened, and do not be dismayed, for the Lord your God is with you wherever you go.",
        hi="क्या मैं ने तुझे आज्ञा नहीं दी? हियाव बाँधकर दृढ़ हो जा; भयभीत न हो, और तेरा मन कच्चा न हो क्योंकि जहाँ कहीं तू जाएगा वहाँ तेरा परमेश्वर यहोवा तेरे संग रहेगा।",
        ml="ഞാൻ നിന്നോടു കല്പിച്ചിട്ടില്ലയോ? ബലപ്പെടുകയും ധൈര്യപ്പെടുകയും ചെയ്ക; ഭയപ്പെടുകയോ ഭ്രമിക്കുകയോ ചെയ്യേണ്ടാ; നീ എവിടെ പോയാലും നിന്റെ ദൈവമായ യഹോവ നിന്നോടുകൂടെ ഉണ്ടു.",
    )),
    ("Romans 8:28", VerseTranslations(
        esv="And we know that for those who love God all things work together for good, for those who are called according to his purpose.",
        hi="और हम जानते हैं कि जो लोग परमेश्वर से प्रेम करते हैं, उनके लिये सब बातें मिलकर भलाई ही को उत्पन्न करती हैं; अर्थात् उन्हीं के लिये जो उसकी इच्छा के अनुसार बुलाए गए हैं।",
        ml="ദൈവത്തെ സ്നേഹിക്കുന്നവർക്കു, അവന്റെ ഉദ്ദേശ്യത്തിന് അനുസാരമായി വിളിക്കപ്പെട്ടവർക്കു സർവ്വവും ഗുണത്തിന്നായി കൂടിവരുന്നു എന്നു നാം അറിയുന്നു.",
    )),
]


def fallback_index(target_date: date) -> int:
    """Deterministic pick so every instance serves the same fallback on a given day."""
    day_of_year = target_date.timetuple().tm_yday
    return ((target_date.year + day_of_year) * 37) % len(FALLBACK_VERSES)


def get_fallback_verse(target_date: date) -> DailyVerseData:
    reference, translations = FALLBACK_VERSES[fallback_index(target_date)]
    return DailyVerseData(
        reference=reference,
        reference_translations={lang: localize_reference(reference, lang) for lang in ("en", "hi", "ml")},
        translations=translations.model_copy(),
        date=target_date.isoformat(),
    )


class DailyVerseService:
    """
    One verse per calendar day, shared by every caller.

    Lookup order is the cache table, then the LLM (avoiding recently used
    references), then the built-in fallback list. Generated verses are cached;
    fallbacks are not, so a later request or scheduler pass can still generate.
    """

    def __init__(self, supabase: Client, llm_service: Optional[LLMService] = None):
        self.supabase = supabase
        self.llm_service = llm_service

    def get_daily_verse(self, target_date: Optional[date] = None) -> DailyVerseData:
        target_date = target_date or datetime.now(timezone.utc).date()
        date_key = target_date.isoformat()
        try:
            cached = self.get_cached_verse(date_key)
            if cached:
                return cached
            verse = self._generate(target_date)
            self._cache_verse(date_key, verse)
            return verse
        except Exception as e:
            logger.error(f"Daily verse for {date_key} unavailable, using fallback: {e}")
            return get_fallback_verse(target_date)

    def ensure_verse(self, target_date: date) -> bool:
        """Generate and cache the verse for target_date unless one exists. Returns True when generated."""
        date_key = target_date.isoformat()
        if self.get_cached_verse(date_key):
            return False
        verse = self._generate(target_date)
        self._cache_verse(date_key, verse)
        return True

    def get_cached_verse(self, date_key: str) -> Optional[DailyVerseData]:
        try:
            result = self.supabase.table(CACHE_TABLE)\
                .select("verse_data")\
                .eq("date_key", date_key)\
                .eq("is_active", True)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.warning(f"Daily verse cache lookup failed for {date_key}: {e}")
            return None

        if not result.data:
            return None
        try:
            return DailyVerseData.model_validate({"date": date_key, **(result.data[0].get("verse_data") or {})})
        except ValidationError as e:
            logger.warning(f"Ignoring malformed cached verse for {date_key}: {e}")
            return None

    def get_recent_references(self, target_date: date) -> List[str]:
        """References used in the history window before target_date; empty on error."""
        cutoff = (target_date - timedelta(days=settings.daily_verse_history_days)).isoformat()
        try:
            result = self.supabase.table(CACHE_TABLE)\
                .select("verse_data")\
                .gte("date_key", cutoff)\
                .eq("is_active", True)\
                .execute()
        except Exception as e:
            logger.warning(f"Failed to load recent daily verses: {e}")
            return []

        references = []
        for row in result.data or []:
            reference = (row.get("verse_data") or {}).get("reference")
            if reference and reference not in references:
                references.append(reference)
        return references

    def cleanup_expired(self) -> int:
        """Delete cache rows past their expiry. Returns the number removed."""
        now = datetime.now(timezone.utc).isoformat()
        result = self.supabase.table(CACHE_TABLE)\
            .delete()\
            .lt("expires_at", now)\
            .execute()
        return len(result.data or [])

    def _generate(self, target_date: date) -> DailyVerseData:
        if self.llm_service is None:
            self.llm_service = get_llm_service()
        excluded = self.get_recent_references(target_date)
        content = self.llm_service.generate_daily_verse(excluded, "en")
        return DailyVerseData(
            reference=content.reference,
            reference_translations=content.reference_translations,
            translations=content.translations,
            date=target_date.isoformat(),
        )

    def _cache_verse(self, date_key: str, verse: DailyVerseData) -> None:
        now = datetime.now(timezone.utc)
        try:
            self.supabase.table(CACHE_TABLE).upsert({
                "date_key": date_key,
                "verse_data": verse.model_dump(),
                "is_active": True,
                "created_at": now.isoformat(),
                "expires_at": (now + timedelta(days=settings.daily_verse_cache_days)).isoformat(),
            }, on_conflict="date_key").execute()
        except Exception as e:
            logger.warning(f"Failed to cache daily verse for {date_key}: {e}")

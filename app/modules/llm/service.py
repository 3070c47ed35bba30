import logging
from datetime import date
from functools import lru_cache
from typing import Dict, List, Optional

from app.config.settings import settings
from app.core.bible_book_normalizer import get_normalizer, localize_reference
from app.core.errors import AppError, configuration_error, validation_error
from app.modules.llm.client import LLMClient, LLMError, LLMProvider, LLMRequest
from app.modules.llm.prompt_builder import (
    STUDY_MODES,
    calculate_optimal_tokens,
    create_full_verse_prompt,
    create_study_guide_prompt,
    estimate_content_complexity,
    model_token_cap,
)
from app.modules.llm.response_parser import (
    parse_daily_verse,
    parse_json_safely,
    sanitize_study_guide,
    validate_study_guide,
)
from app.modules.llm.schemas import DailyVerseContent, LanguageConfig, StudyGuideContent, VerseTranslations

logger = logging.getLogger(__name__)

LANGUAGE_CONFIGS: Dict[str, LanguageConfig] = {
    "en": LanguageConfig(
        name="English",
        model_preference="openai",
        max_tokens=3000,
        temperature=0.3,
        language_instruction="Output only in clear, accessible English",
        complexity_instruction="Use clear, pastoral language appropriate for all education levels",
        cultural_context="Western Christian context with Protestant theological emphasis",
    ),
    "hi": LanguageConfig(
        name="Hindi",
        model_preference="anthropic",
        max_tokens=4000,
        temperature=0.2,
        language_instruction="Output only in simple, everyday Hindi (avoid complex Sanskrit words, use common spoken Hindi)",
        complexity_instruction="Use easy level language that common people can easily understand",
        cultural_context="Indian Christian context with cultural sensitivity to local traditions and practices",
    ),
    "ml": LanguageConfig(
        name="Malayalam",
        model_preference="anthropic",
        max_tokens=4000,
        temperature=0.2,
        language_instruction="Output only in simple, everyday Malayalam (avoid complex literary words, use common spoken Malayalam)",
        complexity_instruction="Use simple vocabulary accessible to Malayalam speakers across Kerala",
        cultural_context="Kerala Christian context with awareness of the strong Protestant Christian heritage in the region",
    ),
}

INPUT_TYPES = ("scripture", "topic")

# Re-prompts after an unparseable answer; each lowers temperature and raises the token budget
MAX_PARSE_RETRIES = 2

VERSE_MAX_TOKENS = 800
VERSE_TEMPERATURES = {LLMProvider.OPENAI: 0.3, LLMProvider.ANTHROPIC: 0.2}

_MOCK_VERSES = [
    DailyVerseContent(
        reference="John 3:16",
        translations=VerseTranslations(
            esv="For God so loved the world, that he gave his only Son, that whoever believes in him should not perish but have eternal life.",
            hi="क्योंकि परमेश्वर ने जगत से ऐसा प्रेम रखा कि उसने अपना एकलौता पुत्र दे दिया, ताकि जो कोई उस पर विश्वास करे वह नष्ट न हो, परन्तु अनन्त जीवन पाए।",
            ml="കാരണം ദൈവം ലോകത്തെ ഇങ്ങനെ സ്നേഹിച്ചു, തന്റെ ഏകജാതനായ പുത്രനെ നൽകി, അവനിൽ വിശ്വസിക്കുന്നവൻ നശിക്കാതെ നിത്യജീവൻ പ്രാപിക്കേണ്ടതിന്.",
        ),
    ),
    DailyVerseContent(
        reference="Philippians 4:13",
        translations=VerseTranslations(
            esv="I can do all things through him who strengthens me.",
            hi="मैं उसके द्वारा जो मुझे सामर्थ्य देता है, सब कुछ कर सकता हूँ।",
            ml="എന്നെ ബലപ്പെടുത്തുന്ന ക്രിസ്തുവിൽ എനിക്കു സകലവും ചെയ്വാൻ കഴിയും.",
        ),
    ),
    DailyVerseContent(
        reference="Psalm 23:1",
        translations=VerseTranslations(
            esv="The Lord is my shepherd; I shall not want.",
            hi="यहोवा मेरा चरवाहा है; मुझे कमी न होगी।",
            ml="യഹോവ എന്റെ ഇടയൻ ആകുന്നു; എനിക്കു മുട്ടു വരികയില്ല.",
        ),
    ),
]


class LLMService:
    """
    Generates study guides and daily verses through OpenAI or Anthropic.

    The provider for a request comes from the language's preference when that
    provider has a key configured, otherwise from the configured default. If the
    primary provider fails the other one is tried once before giving up.
    """

    def __init__(
        self,
        openai_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
        default_provider: Optional[str] = None,
        use_mock: Optional[bool] = None,
        clients: Optional[Dict[LLMProvider, LLMClient]] = None,
    ):
        self.use_mock = settings.use_mock_llm if use_mock is None else use_mock
        self._api_keys = {
            LLMProvider.OPENAI: openai_api_key if openai_api_key is not None else settings.openai_api_key,
            LLMProvider.ANTHROPIC: anthropic_api_key if anthropic_api_key is not None else settings.anthropic_api_key,
        }
        self._clients: Dict[LLMProvider, LLMClient] = dict(clients or {})

        if self.use_mock:
            self.available_providers = {LLMProvider.OPENAI, LLMProvider.ANTHROPIC}
        else:
            self.available_providers = {
                provider for provider, key in self._api_keys.items() if key and key.strip()
            } | set(self._clients)
            if not self.available_providers:
                raise configuration_error(
                    "No LLM providers available. Please configure OPENAI_API_KEY or ANTHROPIC_API_KEY"
                )

        requested = default_provider or settings.llm_provider
        try:
            provider = LLMProvider(requested)
        except ValueError:
            provider = None
        if provider not in self.available_providers:
            fallback = LLMProvider.ANTHROPIC if LLMProvider.ANTHROPIC in self.available_providers else LLMProvider.OPENAI
            if requested:
                logger.warning(f"Configured provider {requested} not available, using {fallback.value}")
            provider = fallback
        self.default_provider = provider
        logger.info(
            f"LLM service initialized with default provider {self.default_provider.value}, "
            f"available: {', '.join(sorted(p.value for p in self.available_providers))}"
        )

    def is_provider_available(self, provider: LLMProvider) -> bool:
        return provider in self.available_providers

    def select_provider(self, language: str) -> LLMProvider:
        config = LANGUAGE_CONFIGS.get(language)
        if config:
            preferred = LLMProvider(config.model_preference)
            if self.is_provider_available(preferred):
                return preferred
        return self.default_provider

    def get_fallback_provider(self, primary: LLMProvider) -> Optional[LLMProvider]:
        other = LLMProvider.ANTHROPIC if primary == LLMProvider.OPENAI else LLMProvider.OPENAI
        return other if self.is_provider_available(other) else None

    def _get_client(self, provider: LLMProvider) -> LLMClient:
        if provider not in self._clients:
            model = settings.openai_model if provider == LLMProvider.OPENAI else settings.anthropic_model
            self._clients[provider] = LLMClient(
                provider,
                self._api_keys[provider] or "",
                model,
                timeout_seconds=settings.llm_timeout_seconds,
            )
        return self._clients[provider]

    def _model_for(self, provider: LLMProvider, language: str) -> Optional[str]:
        if provider == LLMProvider.ANTHROPIC and language in ("hi", "ml"):
            return settings.anthropic_multilingual_model
        return None

    def _complete(self, language: str, request: LLMRequest) -> str:
        """Call the primary provider for the language, falling back to the other once."""
        primary = self.select_provider(language)
        try:
            return self._get_client(primary).complete(request, self._model_for(primary, language)).content
        except LLMError as e:
            fallback = self.get_fallback_provider(primary)
            logger.error(f"Primary provider {primary.value} failed for {language}: {e}")
            if fallback is None:
                raise
            logger.warning(f"Attempting fallback provider {fallback.value}")
            return self._get_client(fallback).complete(request, self._model_for(fallback, language)).content

    def _validate_params(self, input_type: str, input_value: str, language: str, study_mode: str) -> None:
        if input_type not in INPUT_TYPES:
            raise validation_error("Invalid input type", {"input_type": input_type})
        if not input_value or not isinstance(input_value, str) or not input_value.strip():
            raise validation_error("Invalid input value")
        if language not in LANGUAGE_CONFIGS:
            raise validation_error(
                f'Unsupported language: "{language}". Supported languages: {", ".join(LANGUAGE_CONFIGS)}'
            )
        if study_mode not in STUDY_MODES:
            raise validation_error("Unsupported study mode", {"study_mode": study_mode})

    def generate_study_guide(
        self,
        input_type: str,
        input_value: str,
        language: str = "en",
        study_mode: str = "standard",
    ) -> StudyGuideContent:
        self._validate_params(input_type, input_value, language, study_mode)
        logger.info(f"Generating {study_mode} study guide for {input_type}: {input_value}")

        if self.use_mock:
            return self._mock_study_guide(input_type, input_value, language)

        config = LANGUAGE_CONFIGS[language]
        prompt = create_study_guide_prompt(input_type, input_value, language, config, study_mode)
        base_tokens = calculate_optimal_tokens(language, study_mode)
        complexity = estimate_content_complexity(input_value, input_type)

        try:
            parsed = None
            for attempt in range(MAX_PARSE_RETRIES + 1):
                request = LLMRequest(
                    prompt=prompt.user_message,
                    system_prompt=prompt.system_message,
                    max_tokens=min(base_tokens + complexity + 500 * attempt, model_token_cap(study_mode)),
                    temperature=max(0.1, round(config.temperature - 0.1 * attempt, 2)),
                )
                raw = self._complete(language, request)
                try:
                    parsed = parse_json_safely(raw)
                    break
                except ValueError as e:
                    logger.error(f"JSON parse attempt {attempt + 1} failed: {e}")
                    if attempt == MAX_PARSE_RETRIES:
                        logger.error(f"Raw response that failed to parse: {raw[:500]}")
                        raise

            if not validate_study_guide(parsed):
                raise ValueError("LLM response does not match expected structure")

            guide = sanitize_study_guide(parsed)
            normalizer = get_normalizer(language)
            guide.related_verses = [normalizer.normalize_references(v) for v in guide.related_verses]
            validation = normalizer.validate_books(normalizer.extract_references(" ".join(guide.related_verses)))
            normalizer.log_validation_warnings(validation, input_value)
            logger.info("Successfully generated study guide")
            return guide
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Study guide generation failed: {e}")
            raise AppError("LLM_SERVICE_ERROR", "Failed to generate study guide. Please try again.", 503)

    def generate_daily_verse(self, excluded_references: Optional[List[str]] = None, language: str = "en") -> DailyVerseContent:
        excluded_references = excluded_references or []
        logger.info(f"Generating daily verse, excluding: {', '.join(excluded_references)}")

        if self.use_mock:
            return self._mock_daily_verse()

        try:
            prompt = create_full_verse_prompt(excluded_references, language)
            provider = self.select_provider(language)
            request = LLMRequest(
                prompt=prompt.user_message,
                system_prompt=prompt.system_message,
                max_tokens=VERSE_MAX_TOKENS,
                temperature=VERSE_TEMPERATURES[provider],
            )
            verse = parse_daily_verse(self._complete(language, request))
            verse.reference_translations = {
                lang: verse.reference_translations.get(lang) or localize_reference(verse.reference, lang)
                for lang in ("en", "hi", "ml")
            }
            logger.info(f"Successfully generated daily verse: {verse.reference}")
            return verse
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Daily verse generation failed: {e}")
            raise AppError("LLM_SERVICE_ERROR", f"Daily verse generation failed: {e}", 503)

    def _mock_daily_verse(self) -> DailyVerseContent:
        verse = _MOCK_VERSES[date.today().toordinal() % len(_MOCK_VERSES)].model_copy(deep=True)
        verse.reference_translations = {lang: localize_reference(verse.reference, lang) for lang in ("en", "hi", "ml")}
        return verse

    def _mock_study_guide(self, input_type: str, input_value: str, language: str) -> StudyGuideContent:
        subject = f"the passage {input_value}" if input_type == "scripture" else f"the topic of {input_value}"
        verses = ["John 3:16", "Romans 8:28", "Philippians 4:13"]
        return StudyGuideContent(
            summary=f"This study explores {subject} and what it reveals about God's faithful love.",
            interpretation=(
                f"{input_value} points us to the character of God. Scripture shows that God keeps his "
                "promises and calls his people to trust him.\n\nIn Christ we see this faithfulness most "
                "clearly, and we are invited to respond with faith and obedience."
            ),
            context="The original readers lived under pressure and needed assurance of God's care.",
            related_verses=[localize_reference(v, language) for v in verses],
            reflection_questions=[
                f"What does {input_value} teach you about God's character?",
                "Where do you need to trust God more this week?",
                "How can you encourage someone with this truth?",
                "What one step of obedience will you take today?",
            ],
            prayer_points=[
                "Heavenly Father, thank you for your faithful love. Help me to trust you in every "
                "circumstance and to share your love with others. In Jesus' name, Amen",
            ],
        )


@lru_cache(maxsize=1)
def get_llm_service() -> LLMService:
    """Shared service for request handlers. Raises CONFIGURATION_ERROR, uncached, when no provider is configured."""
    return LLMService()

"""Tests for provider selection and generation in LLMService."""

import json
from unittest.mock import MagicMock

import pytest

from app.config.settings import settings
from app.core.errors import AppError
from app.modules.llm.client import LLMError, LLMProvider
from app.modules.llm.service import LLMService

GUIDE = {
    "summary": "God loves the world",
    "interpretation": "God gives his Son so that we may live.",
    "context": "Jesus talks with Nicodemus at night.",
    "related_verses": ["Rom 5:8", "1 Jn 4:9"],
    "reflection_questions": ["What does this teach about God?"],
    "prayer_points": ["Father, thank you for your love. In Jesus' name, Amen"],
}

VERSE = {
    "reference": "Romans 8:28",
    "translations": {"esv": "And we know", "hi": "और हम जानते हैं", "ml": "നാം അറിയുന്നു"},
}


def _client(*contents) -> MagicMock:
    client = MagicMock()
    client.complete.side_effect = [
        c if isinstance(c, Exception) else MagicMock(content=c) for c in contents
    ]
    return client


def _service(**clients) -> LLMService:
    return LLMService(
        openai_api_key="",
        anthropic_api_key="",
        use_mock=False,
        clients={LLMProvider(name): client for name, client in clients.items()},
    )


class TestProviderSelection:
    """Tests for provider availability and selection."""

    def test_no_providers(self) -> None:
        with pytest.raises(AppError) as exc_info:
            LLMService(openai_api_key="", anthropic_api_key="", use_mock=False)
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_language_preference(self) -> None:
        service = LLMService(openai_api_key="sk-1", anthropic_api_key="sk-2", use_mock=False)
        assert service.select_provider("en") == LLMProvider.OPENAI
        assert service.select_provider("hi") == LLMProvider.ANTHROPIC

    def test_preference_unavailable_uses_default(self) -> None:
        service = LLMService(openai_api_key="sk-1", anthropic_api_key="", default_provider="anthropic", use_mock=False)
        assert service.default_provider == LLMProvider.OPENAI
        assert service.select_provider("ml") == LLMProvider.OPENAI
        assert service.get_fallback_provider(LLMProvider.OPENAI) is None

    def test_mock_mode_has_all_providers(self) -> None:
        service = LLMService(openai_api_key="", anthropic_api_key="", use_mock=True)
        assert service.is_provider_available(LLMProvider.OPENAI)
        assert service.is_provider_available(LLMProvider.ANTHROPIC)


class TestGenerateStudyGuide:
    """Tests for generate_study_guide."""

    def test_success_normalizes_verses(self) -> None:
        openai = _client(json.dumps(GUIDE))
        guide = _service(openai=openai).generate_study_guide("scripture", "John 3:16")
        assert guide.summary == "God loves the world"
        assert guide.related_verses == ["Romans 5:8", "1 John 4:9"]

    def test_reprompts_after_unparseable_answer(self) -> None:
        openai = _client("I cannot answer that", json.dumps(GUIDE))
        _service(openai=openai).generate_study_guide("scripture", "John 3:16")
        assert openai.complete.call_count == 2
        first = openai.complete.call_args_list[0].args[0]
        second = openai.complete.call_args_list[1].args[0]
        assert first.max_tokens == 16000
        assert second.max_tokens == 16384
        assert second.temperature == pytest.approx(0.2)

    def test_falls_back_to_other_provider(self) -> None:
        openai = _client(LLMError("boom", provider="openai"))
        anthropic = _client(json.dumps(GUIDE))
        guide = _service(openai=openai, anthropic=anthropic).generate_study_guide("topic", "Grace")
        assert guide.context
        anthropic.complete.assert_called_once()

    def test_multilingual_model_for_hindi(self) -> None:
        anthropic = _client(json.dumps(GUIDE))
        _service(anthropic=anthropic).generate_study_guide("topic", "प्रेम", "hi")
        assert anthropic.complete.call_args.args[1] == settings.anthropic_multilingual_model

    def test_all_providers_fail(self) -> None:
        openai = _client(LLMError("down", provider="openai"))
        with pytest.raises(AppError) as exc_info:
            _service(openai=openai).generate_study_guide("topic", "Grace")
        assert exc_info.value.code == "LLM_SERVICE_ERROR"
        assert exc_info.value.status_code == 503

    def test_invalid_structure(self) -> None:
        openai = _client(json.dumps({"summary": "only"}))
        with pytest.raises(AppError) as exc_info:
            _service(openai=openai).generate_study_guide("topic", "Grace")
        assert exc_info.value.code == "LLM_SERVICE_ERROR"

    @pytest.mark.parametrize("args", [
        ("verse", "John 3:16", "en", "standard"),
        ("topic", "   ", "en", "standard"),
        ("topic", "Grace", "fr", "standard"),
        ("topic", "Grace", "en", "marathon"),
    ])
    def test_invalid_params(self, args) -> None:
        with pytest.raises(AppError) as exc_info:
            _service(openai=_client()).generate_study_guide(*args)
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_mock_mode(self) -> None:
        service = LLMService(openai_api_key="", anthropic_api_key="", use_mock=True)
        guide = service.generate_study_guide("topic", "Hope", "ml")
        assert "Hope" in guide.summary
        assert guide.related_verses[0] == "യോഹന്നാൻ 3:16"


class TestGenerateDailyVerse:
    """Tests for generate_daily_verse."""

    def test_fills_reference_translations(self) -> None:
        openai = _client(json.dumps(VERSE))
        verse = _service(openai=openai).generate_daily_verse(["John 3:16"])
        assert verse.reference == "Romans 8:28"
        assert verse.reference_translations["hi"] == "रोमियों 8:28"
        request = openai.complete.call_args.args[0]
        assert "- John 3:16" in request.system_prompt
        assert request.max_tokens == 800

    def test_failure(self) -> None:
        openai = _client(json.dumps({"reference": "John 3:16"}))
        with pytest.raises(AppError) as exc_info:
            _service(openai=openai).generate_daily_verse()
        assert exc_info.value.code == "LLM_SERVICE_ERROR"

    def test_mock_mode(self) -> None:
        service = LLMService(openai_api_key="", anthropic_api_key="", use_mock=True)
        verse = service.generate_daily_verse()
        assert verse.translations.esv
        assert set(verse.reference_translations) == {"en", "hi", "ml"}

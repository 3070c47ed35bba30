"""
Parsing, validation and sanitization of raw LLM output.

Models are asked for bare JSON but regularly wrap it in code fences, add a
sentence of preamble, or get cut off at the token limit. Everything here
turns that text back into plain dicts or raises ValueError.
"""

import json
import logging
import re
from typing import Any, Dict

from app.modules.llm.schemas import DailyVerseContent, StudyGuideContent, VerseTranslations

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 2000
MAX_MARKDOWN_LENGTH = 10000

STRING_FIELDS = ("summary", "interpretation", "context")
LIST_FIELDS = ("related_verses", "reflection_questions", "prayer_points")

# Models trained on the older prompt answer in camelCase
_FIELD_ALIASES = {
    "relatedVerses": "related_verses",
    "reflectionQuestions": "reflection_questions",
    "prayerPoints": "prayer_points",
}

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]")


def repair_truncated_json(text: str) -> str:
    """Close a dangling string, drop a trailing comma, then close open arrays and objects."""
    repaired = text
    last_line = repaired.split("\n")[-1]
    if last_line.count('"') % 2 == 1:
        repaired += '"'
    repaired = re.sub(r",\s*$", "", repaired)
    repaired += "]" * max(0, repaired.count("[") - repaired.count("]"))
    repaired += "}" * max(0, repaired.count("{") - repaired.count("}"))
    return repaired


def clean_json_response(response: str) -> str:
    cleaned = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", response.strip()))
    try:
        json.loads(cleaned)
        return cleaned
    except json.JSONDecodeError as e:
        logger.info("Attempting to repair malformed JSON response")
        match = _JSON_OBJECT.search(cleaned)
        if match:
            cleaned = match.group(0)
        elif "{" in cleaned:
            # Truncated before the closing brace
            cleaned = cleaned[cleaned.index("{"):]
        if "Unterminated string" in e.msg or not cleaned.rstrip().endswith("}"):
            logger.info("Detected truncated JSON, attempting repair")
            cleaned = repair_truncated_json(cleaned)
        return cleaned


def parse_json_safely(raw_response: str) -> Any:
    """Parse model output as JSON, repairing it as a last resort. Raises ValueError."""
    cleaned = clean_json_response(raw_response)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        try:
            return json.loads(repair_truncated_json(cleaned))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in LLM response: {e.msg}") from e


def normalize_study_guide_keys(response: Dict[str, Any]) -> Dict[str, Any]:
    return {_FIELD_ALIASES.get(k, k): v for k, v in response.items()}


def validate_study_guide(response: Any) -> bool:
    if not isinstance(response, dict):
        logger.error("LLM response is not an object")
        return False
    response = normalize_study_guide_keys(response)

    for name in STRING_FIELDS + LIST_FIELDS:
        if name not in response:
            logger.error(f"LLM response missing required field: {name}")
            return False

    for name in LIST_FIELDS:
        value = response[name]
        if not isinstance(value, list) or not value:
            logger.error(f"LLM response field {name} is not a non-empty list")
            return False
        if not all(isinstance(item, str) and item.strip() for item in value):
            logger.error(f"LLM response field {name} contains non-string items")
            return False

    for name in STRING_FIELDS:
        value = response[name]
        if not isinstance(value, str) or not value.strip():
            logger.error(f"LLM response field {name} is not a valid string")
            return False

    return True


def sanitize_text(text: Any) -> str:
    """Trim, collapse whitespace, strip angle brackets and cap the length."""
    if not isinstance(text, str):
        return ""
    text = re.sub(r"\s+", " ", text.strip())
    return re.sub(r"[<>]", "", text)[:MAX_TEXT_LENGTH]


def sanitize_markdown_text(text: Any) -> str:
    """Like sanitize_text but keeps line structure for markdown bodies."""
    if not isinstance(text, str):
        return ""
    text = _CONTROL_CHARS.sub("", text)
    text = re.sub(r"[<>]", "", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return text.strip("\n")[:MAX_MARKDOWN_LENGTH]


def sanitize_study_guide(response: Dict[str, Any]) -> StudyGuideContent:
    response = normalize_study_guide_keys(response)
    return StudyGuideContent(
        summary=sanitize_text(response["summary"]),
        interpretation=sanitize_markdown_text(response.get("interpretation") or ""),
        context=sanitize_text(response["context"]),
        related_verses=[sanitize_text(v) for v in response["related_verses"]],
        reflection_questions=[sanitize_text(q) for q in response["reflection_questions"]],
        prayer_points=[sanitize_text(p) for p in response["prayer_points"]],
    )


def parse_daily_verse(raw_response: str) -> DailyVerseContent:
    """
    Parse a daily verse answer.

    Accepts translations keyed either ``hi``/``ml`` or ``hindi``/``malayalam``.
    ``referenceTranslations`` is optional. Raises ValueError when the reference or
    any of the three verse texts is missing.
    """
    parsed = parse_json_safely(raw_response)
    if not isinstance(parsed, dict):
        raise ValueError("Daily verse response is not an object")

    reference = parsed.get("reference")
    if not reference or not isinstance(reference, str):
        raise ValueError("Missing or invalid reference field")

    translations = parsed.get("translations")
    if not isinstance(translations, dict):
        raise ValueError("Missing or invalid translations field")

    esv = translations.get("esv") or translations.get("en")
    hindi = translations.get("hi") or translations.get("hindi")
    malayalam = translations.get("ml") or translations.get("malayalam")
    for label, value in (("ESV", esv), ("Hindi", hindi), ("Malayalam", malayalam)):
        if not value or not isinstance(value, str):
            raise ValueError(f"Missing or invalid {label} translation")

    reference_translations = parsed.get("referenceTranslations") or parsed.get("reference_translations") or {}
    if not isinstance(reference_translations, dict):
        reference_translations = {}

    return DailyVerseContent(
        reference=sanitize_text(reference),
        reference_translations={
            k: sanitize_text(v) for k, v in reference_translations.items()
            if k in ("en", "hi", "ml") and isinstance(v, str) and v.strip()
        },
        translations=VerseTranslations(
            esv=sanitize_text(esv),
            hi=sanitize_text(hindi),
            ml=sanitize_text(malayalam),
        ),
    )

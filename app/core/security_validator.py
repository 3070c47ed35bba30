"""
Input validation and sanitization applied before any user text reaches the LLM
"""

import hashlib
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 500

SUSPICIOUS_PATTERNS = [
    # Prompt injection
    re.compile(r"ignore\s+(previous|above|all)\s+(instructions?|prompts?)", re.IGNORECASE),
    re.compile(r"forget\s+(everything|all|previous)", re.IGNORECASE),
    re.compile(r"new\s+(instructions?|prompts?|rules?)", re.IGNORECASE),
    re.compile(r"system\s*:", re.IGNORECASE),
    re.compile(r"assistant\s*:", re.IGNORECASE),
    re.compile(r"\[/?INST\]", re.IGNORECASE),
    re.compile(r"<\|im_(start|end)\|>", re.IGNORECASE),
    # Code injection
    re.compile(r"<script>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"eval\s*\(", re.IGNORECASE),
    re.compile(r"function\s*\(", re.IGNORECASE),
    # SQL injection
    re.compile(r"union\s+select", re.IGNORECASE),
    re.compile(r"drop\s+table", re.IGNORECASE),
    re.compile(r"delete\s+from", re.IGNORECASE),
    # XSS
    re.compile(r"<[^>]*on\w+\s*=", re.IGNORECASE),
    re.compile(r"<(iframe|object|embed)", re.IGNORECASE),
]

# Lowercased English book names and abbreviations accepted in scripture input
KNOWN_BOOK_NAMES = frozenset([
    "genesis", "gen", "ge", "gn", "exodus", "exod", "exo", "ex",
    "leviticus", "lev", "le", "lv", "numbers", "num", "nu", "nm", "nb",
    "deuteronomy", "deut", "dt", "joshua", "josh", "jos", "jsh",
    "judges", "judg", "jdg", "jg", "jdgs", "ruth", "rth", "ru",
    "1 samuel", "1sam", "1 sam", "1 sa", "1sa", "1s",
    "2 samuel", "2sam", "2 sam", "2 sa", "2sa", "2s",
    "1 kings", "1kgs", "1 kgs", "1 ki", "1ki", "1k",
    "2 kings", "2kgs", "2 kgs", "2 ki", "2ki", "2k",
    "1 chronicles", "1chr", "1 chr", "1 ch", "1ch",
    "2 chronicles", "2chr", "2 chr", "2 ch", "2ch",
    "ezra", "ezr", "ez", "nehemiah", "neh", "ne", "esther", "esth", "es",
    "job", "jb", "psalms", "psalm", "ps", "psa", "psm", "pss",
    "proverbs", "prov", "pr", "prv", "ecclesiastes", "eccl", "ec", "ecc",
    "song of solomon", "song", "sos", "so", "isaiah", "isa", "is",
    "jeremiah", "jer", "je", "jr", "lamentations", "lam", "la",
    "ezekiel", "ezek", "eze", "ezk", "daniel", "dan", "da", "dn",
    "hosea", "hos", "ho", "joel", "joe", "jl", "amos", "am",
    "obadiah", "obad", "ob", "jonah", "jnh", "jon", "micah", "mic", "mc",
    "nahum", "nah", "na", "habakkuk", "hab", "hb",
    "zephaniah", "zeph", "zep", "zp", "haggai", "hag", "hg",
    "zechariah", "zech", "zec", "zc", "malachi", "mal", "ml",
    "matthew", "matt", "mt", "mark", "mk", "mr", "luke", "lk", "luk",
    "john", "jn", "joh", "acts", "ac", "romans", "rom", "ro", "rm",
    "1 corinthians", "1cor", "1 cor", "1 co", "1co",
    "2 corinthians", "2cor", "2 cor", "2 co", "2co",
    "galatians", "gal", "ga", "ephesians", "eph", "ep",
    "philippians", "phil", "php", "pp", "colossians", "col", "co",
    "1 thessalonians", "1thess", "1 thess", "1 th", "1th", "1ts",
    "2 thessalonians", "2thess", "2 thess", "2 th", "2th", "2ts",
    "1 timothy", "1tim", "1 tim", "1 ti", "1ti", "1tm",
    "2 timothy", "2tim", "2 tim", "2 ti", "2ti", "2tm",
    "titus", "tit", "ti", "philemon", "phlm", "phm", "pm",
    "hebrews", "heb", "he", "james", "jas", "jm",
    "1 peter", "1pet", "1 pet", "1 pe", "1pe", "1pt", "1p",
    "2 peter", "2pet", "2 pet", "2 pe", "2pe", "2pt", "2p",
    "1 john", "1jn", "1 jn", "1 jo", "1jo", "1j",
    "2 john", "2jn", "2 jn", "2 jo", "2jo", "2j",
    "3 john", "3jn", "3 jn", "3 jo", "3jo", "3j",
    "jude", "jud", "jd", "revelation", "rev", "re", "rv",
])

# Book part allows unicode letters and combining marks (Hindi, Malayalam)
_SCRIPTURE_REFERENCE = re.compile(
    r"^([1-3]?\s*(?:[^\W\d_]|[ऀ-ॿഀ-ൿ])+(?:\s+(?:[^\W\d_]|[ऀ-ॿഀ-ൿ])+)*\.?)\s+(\d+)(?::(\d+))?(?:-(\d+))?$"
)
_REPEATED_CHUNK = re.compile(r"(.{3,})\1{2,}")
_HTML_TAG = re.compile(r"<[^>]*>")
_DANGEROUS_CHARS = re.compile(r"[<>&\"']")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


@dataclass
class ValidationResult:
    is_valid: bool = True
    event_type: str = "INPUT_VALIDATION"
    risk_score: float = 0.0
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)


def _parse_scripture_reference(value: str) -> Optional[Dict[str, Any]]:
    match = _SCRIPTURE_REFERENCE.match(value)
    if not match:
        return None
    book, chapter, start_verse, end_verse = match.groups()
    return {
        "book": book.strip(),
        "chapter": int(chapter),
        "start_verse": int(start_verse) if start_verse else None,
        "end_verse": int(end_verse) if end_verse else None,
    }


def validate_scripture_reference(value: str) -> ValidationResult:
    """Check format, book name and chapter/verse ranges of a scripture reference."""
    parts = _parse_scripture_reference(value)
    if parts is None:
        return ValidationResult(
            is_valid=False,
            message="Invalid scripture reference format",
            details={
                "expected_format": 'Book Chapter[:Verse][-Verse] (e.g., "John 3:16", "Romans 8:28-30", "Ps 23")',
                "input": value,
            },
        )

    book = parts["book"]
    if book.isascii():
        normalized = " ".join(book.lower().replace(".", "").split())
        if normalized not in KNOWN_BOOK_NAMES and normalized.replace(" ", "") not in KNOWN_BOOK_NAMES:
            return ValidationResult(
                is_valid=False,
                message="Unknown Bible book",
                details={"book": book},
            )

    chapter, start, end = parts["chapter"], parts["start_verse"], parts["end_verse"]
    if not 1 <= chapter <= 150:
        return ValidationResult(is_valid=False, message="Chapter number out of reasonable range",
                                details={"chapter": chapter, "valid_range": "1-150"})
    for verse in (start, end):
        if verse is not None and not 1 <= verse <= 176:
            return ValidationResult(is_valid=False, message="Verse number out of reasonable range",
                                    details={"verse": verse, "valid_range": "1-176"})
    if start is not None and end is not None and end <= start:
        return ValidationResult(is_valid=False, message="End verse must be greater than start verse",
                                details={"start_verse": start, "end_verse": end})
    return ValidationResult(details=parts)


def validate_input(value: str, input_type: str, max_length: int = MAX_INPUT_LENGTH) -> ValidationResult:
    """Run length, pattern, format and risk checks. The first failing check wins."""
    if len(value) > max_length:
        return ValidationResult(
            is_valid=False,
            event_type="INPUT_TOO_LONG",
            risk_score=0.8,
            message=f"Input exceeds maximum length of {max_length} characters",
            details={"input_length": len(value), "max_length": max_length},
        )

    if not value.strip():
        return ValidationResult(
            is_valid=False, event_type="EMPTY_INPUT", risk_score=0.3, message="Input cannot be empty"
        )

    for pattern in SUSPICIOUS_PATTERNS:
        found = pattern.search(value)
        if found:
            return ValidationResult(
                is_valid=False,
                event_type="PROMPT_INJECTION_DETECTED",
                risk_score=0.9,
                message="Suspicious pattern detected in input",
                details={"pattern": pattern.pattern, "matched_text": found.group(0)},
            )

    if input_type == "scripture":
        scripture = validate_scripture_reference(value.strip())
        if not scripture.is_valid:
            scripture.event_type = "INVALID_SCRIPTURE_FORMAT"
            scripture.risk_score = 0.5
            return scripture

    risk_score = 0.0
    special_chars = len(re.findall(r"[^a-zA-Z0-9\s]", value))
    if special_chars > len(value) * 0.6:
        risk_score += 0.2
    uppercase = len(re.findall(r"[A-Z]", value))
    if uppercase > len(value) * 0.8:
        risk_score += 0.1
    if _REPEATED_CHUNK.search(value):
        risk_score += 0.4

    result = ValidationResult(risk_score=min(risk_score, 1.0))
    if result.risk_score > 0.8:
        result.is_valid = False
        result.event_type = "HIGH_RISK_INPUT"
        result.message = "Input flagged as high risk"
        result.details = {"risk_score": result.risk_score}
    return result


def sanitize_input(value: str, max_length: int = MAX_INPUT_LENGTH) -> str:
    cleaned = _CONTROL_CHARS.sub("", value)
    cleaned = unicodedata.normalize("NFKC", cleaned)
    cleaned = _HTML_TAG.sub("", cleaned)
    cleaned = _DANGEROUS_CHARS.sub("", cleaned)
    return cleaned.strip()[:max_length]


def hash_sensitive_data(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()

"""
Bible book name normalization for user input and LLM output
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional

from app.config.bible_books import BOOK_ALIASES, CANONICAL_BOOKS, DISPLAY_NAMES

logger = logging.getLogger(__name__)

_REFERENCE_PARTS = re.compile(r"^(.+?)\.?\s+(\d+(?::\d+(?:-\d+)?)?)$")


@dataclass
class BookValidationResult:
    is_valid: bool = True
    invalid_books: List[str] = field(default_factory=list)
    corrected_books: List[Dict[str, str]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class BibleBookNormalizer:
    def __init__(self, language: str = "en"):
        self.language = language if language in CANONICAL_BOOKS else "en"
        self.canonical_books = list(CANONICAL_BOOKS[self.language])
        self._canonical_lookup = {b.lower(): b for b in self.canonical_books}
        self._alias_lookup = {a.lower(): c for a, c in BOOK_ALIASES.get(self.language, {}).items()}
        names = set(self._canonical_lookup) | set(self._alias_lookup)
        # Longest names first so "1 John" wins over "John" and "भजन संहिता" over "भजन"
        alternation = "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True))
        self._reference_pattern = re.compile(
            rf"(?<!\w)({alternation})\s+(\d+)(?::(\d+)(?:-(\d+))?)?(?!\d)",
            re.IGNORECASE,
        )

    def normalize_book_name(self, name: str) -> Optional[str]:
        """Return the canonical book name for a canonical name, alias or misspelling."""
        key = " ".join(name.split()).lower()
        for candidate in (key, key.rstrip(".")):
            if candidate in self._canonical_lookup:
                return self._canonical_lookup[candidate]
            if candidate in self._alias_lookup:
                return self._alias_lookup[candidate]
        return None

    def _iter_references(self, text: str):
        for match in self._reference_pattern.finditer(text):
            book = match.group(1)
            # Lowercase English words ("is 5", "am 3") are prose, not book names
            if self.language == "en" and not (book[0].isupper() or book[0].isdigit()):
                continue
            canonical = self.normalize_book_name(book)
            if canonical is None:
                continue
            reference = f"{canonical} {match.group(2)}"
            if match.group(3):
                reference += f":{match.group(3)}"
                if match.group(4):
                    reference += f"-{match.group(4)}"
            yield match, reference

    def normalize_references(self, text: str) -> str:
        """Rewrite every recognised reference in text with its canonical book name."""
        if not text:
            return text
        parts = []
        last = 0
        for match, reference in self._iter_references(text):
            parts.append(text[last:match.start()])
            parts.append(reference)
            last = match.end()
        parts.append(text[last:])
        return "".join(parts)

    def extract_references(self, text: str) -> List[str]:
        """Normalized references in order of appearance, without duplicates."""
        seen = []
        for _, reference in self._iter_references(text or ""):
            if reference not in seen:
                seen.append(reference)
        return seen

    def validate_books(self, references: List[str]) -> BookValidationResult:
        result = BookValidationResult()
        for reference in references:
            match = _REFERENCE_PARTS.match(reference.strip())
            book = match.group(1).strip() if match else reference.strip()
            if book.lower() in self._canonical_lookup:
                continue
            corrected = self.normalize_book_name(book)
            if corrected:
                result.corrected_books.append({"original": book, "corrected": corrected})
                result.warnings.append(f'"{book}" should be "{corrected}"')
            else:
                result.invalid_books.append(book)
                result.is_valid = False
        return result

    def log_validation_warnings(self, validation: BookValidationResult, context_id: str) -> None:
        if not validation.is_valid or validation.warnings:
            logger.warning(
                "Book validation issues for %s: invalid=%s corrections=%s",
                context_id, validation.invalid_books, validation.corrected_books,
            )


@lru_cache(maxsize=8)
def get_normalizer(language: str = "en") -> BibleBookNormalizer:
    return BibleBookNormalizer(language)


def localize_reference(reference: str, language: str) -> str:
    """Translate the book part of an English reference into the display name for language."""
    if language not in DISPLAY_NAMES:
        return reference
    match = _REFERENCE_PARTS.match(reference.strip())
    if not match:
        return reference
    book = get_normalizer("en").normalize_book_name(match.group(1))
    display = DISPLAY_NAMES[language].get(book) if book else None
    if not display:
        return reference
    return f"{display} {match.group(2)}"

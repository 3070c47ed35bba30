"""Tests for Bible book normalization."""

from app.core.bible_book_normalizer import BibleBookNormalizer, get_normalizer, localize_reference


class TestNormalizeBookName:
    """Tests for normalize_book_name."""

    def test_canonical_and_alias(self) -> None:
        normalizer = BibleBookNormalizer("en")
        assert normalizer.normalize_book_name("john") == "John"
        assert normalizer.normalize_book_name("Rom.") == "Romans"
        assert normalizer.normalize_book_name("First Corinthians") == "1 Corinthians"

    def test_unknown(self) -> None:
        assert BibleBookNormalizer("en").normalize_book_name("Hezekiah") is None

    def test_unsupported_language_falls_back_to_english(self) -> None:
        assert BibleBookNormalizer("fr").language == "en"


class TestReferences:
    """Tests for reference extraction and rewriting."""

    def test_normalize_references_in_text(self) -> None:
        normalizer = get_normalizer("en")
        text = "Compare Rom 8:28 with Revelations 21:4."
        assert normalizer.normalize_references(text) == "Compare Romans 8:28 with Revelation 21:4."

    def test_prefers_longest_name(self) -> None:
        assert get_normalizer("en").extract_references("Read 1 John 4:8 and John 3:16") == ["1 John 4:8", "John 3:16"]

    def test_ignores_lowercase_prose(self) -> None:
        assert get_normalizer("en").extract_references("this is 5 minutes long") == []

    def test_extract_deduplicates(self) -> None:
        refs = get_normalizer("en").extract_references("Ps 23:1, Psalm 23:1 and Psalms 23:1")
        assert refs == ["Psalms 23:1"]

    def test_hindi_alias(self) -> None:
        assert get_normalizer("hi").extract_references("भजन 23:1") == ["भजन संहिता 23:1"]


class TestValidateBooks:
    """Tests for validate_books."""

    def test_corrections_and_invalid(self) -> None:
        result = get_normalizer("en").validate_books(["John 3:16", "Rom 8:28", "Hezekiah 1:1"])
        assert not result.is_valid
        assert result.invalid_books == ["Hezekiah"]
        assert result.corrected_books == [{"original": "Rom", "corrected": "Romans"}]


class TestLocalizeReference:
    """Tests for localize_reference."""

    def test_english_unchanged(self) -> None:
        assert localize_reference("John 3:16", "en") == "John 3:16"

    def test_hindi_and_malayalam(self) -> None:
        assert localize_reference("John 3:16", "hi") == "यूहन्ना 3:16"
        assert localize_reference("Psalm 23:1", "ml") == "സങ്കീർത്തനങ്ങൾ 23:1"

    def test_unknown_book_unchanged(self) -> None:
        assert localize_reference("Hezekiah 1:1", "hi") == "Hezekiah 1:1"

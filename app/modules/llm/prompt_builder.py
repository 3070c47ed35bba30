"""
Prompt construction for study guide and daily verse generation.

Every prompt is a (system, user) pair. The system message stacks the shared
theological framework, the JSON output rules and a language block; the user
message carries the task and the mode-specific output template.
"""

from dataclasses import dataclass
import logging
from typing import Dict, List

from app.modules.llm.schemas import LanguageConfig

logger = logging.getLogger(__name__)

STUDY_MODES = ("quick", "standard", "deep", "lectio", "sermon")

THEOLOGICAL_FOUNDATION = """
THEOLOGICAL FRAMEWORK - NON-NEGOTIABLE CONSTRAINTS

DOCTRINAL ORTHODOXY (Protestant Evangelical):
- Sola Scriptura: Scripture alone is the final authority
- Sola Fide: Salvation by grace alone through faith alone in Christ alone
- Penal Substitutionary Atonement: Christ bore God's wrath for sinners on the cross
- Biblical Inerrancy: Scripture is without error in the original manuscripts
- Triune God: One God in three persons (Father, Son, Holy Spirit)

HERMENEUTICAL METHOD (Historical-Grammatical):
- Interpret according to what the original author meant to the original audience
- Consider grammar, history, culture and literary genre
- Scripture interprets Scripture
- Christocentric reading: all Scripture points to and is fulfilled in Jesus Christ
- REJECT allegorical speculation, eisegesis, prosperity gospel and word-faith theology

NEVER TEACH:
- Prosperity gospel or "name it and claim it" theology
- Universalism or works-righteousness
- Extra-biblical revelation as authoritative
""".strip()

JSON_OUTPUT_RULES = """
JSON OUTPUT REQUIREMENTS - ABSOLUTE PRIORITY

1. Return ONLY the raw JSON object, starting with { and ending with }
2. NO markdown code fences and NO explanatory text before or after the JSON
3. NO trailing commas in arrays or objects
4. Use proper JSON string escaping: \\n for newlines, \\" for quotes, \\\\ for backslashes

CONTENT POLICY:
You are creating Protestant Christian Bible study materials. All biblical passages
and orthodox theological topics are legitimate educational content. If a passage is
dense or difficult, explain it with more care. Never refuse to generate.
""".strip()

PRAYER_CLOSINGS = {
    "en": "In Jesus' name, Amen",
    "hi": "येशु मसीह के नाम से, आमेन",
    "ml": "യേശുക്രിസ്തുവിന്റെ നാമത്തിൽ, ആമേൻ",
}

VERSE_REFERENCE_EXAMPLES = {
    "en": 'Examples: "John 3:16", "Romans 8:28", "Psalm 23:1"',
    "hi": 'उदाहरण: "यूहन्ना 3:16", "रोमियों 8:28", "भजन संहिता 23:1" - पुस्तक नाम हिंदी में',
    "ml": 'ഉദാഹരണം: "യോഹന്നാൻ 3:16", "റോമർ 8:28", "സങ്കീർത്തനങ്ങൾ 23:1" - പുസ്തക നാമങ്ങൾ മലയാളത്തിൽ',
}

_SCRIPT_NAMES = {"en": "English", "hi": "Devanagari script", "ml": "Malayalam script"}

_NATIVE_SCRIPT_RULES = {
    "hi": """
- ALL Hindi content MUST be in Devanagari script, no romanized Hinglish
- Use "परमेश्वर" for God, never "भगवान", "ईश्वर" or "अल्लाह"
- Use "यीशु मसीह" (Jesus Christ), "पवित्र आत्मा" (Holy Spirit), "कलीसिया" (church)
- Prefer simple spoken Hindi: प्रेम, मदद, जिंदगी, दिल""",
    "ml": """
- ALL Malayalam content MUST be in Malayalam script, no romanized Manglish
- Use "ദൈവം", "കർത്താവ്" for God and Lord, never "ഭഗവാൻ" or "അല്ലാഹു"
- Use "യേശുക്രിസ്തു" (Jesus Christ), "പരിശുദ്ധാത്മാവ്" (Holy Spirit), "സഭ" (church)
- Prefer simple spoken Malayalam: സ്നേഹം, സഹായം, ജീവിതം, മനസ്സ്""",
    "en": """
- Use clear, accessible English and avoid unnecessary theological jargon""",
}


@dataclass
class PromptPair:
    system_message: str
    user_message: str


@dataclass(frozen=True)
class StudyModeProfile:
    label: str
    persona: str
    minutes: int
    word_target: str
    field_targets: Dict[str, str]
    tone: str
    prayer_sentences: str


STUDY_MODE_PROFILES: Dict[str, StudyModeProfile] = {
    "quick": StudyModeProfile(
        label="QUICK READ",
        persona="You are a biblical scholar creating short devotional Bible studies.",
        minutes=3,
        word_target="450-600",
        field_targets={
            "summary": "50-60 words, 3-4 simple sentences",
            "context": "40-70 words, only essential background",
            "interpretation": "120-150 words, exactly 2 short paragraphs",
            "prayer_points": "one prayer of 4-5 short sentences",
        },
        tone="Simple, warm and encouraging.",
        prayer_sentences="4-5",
    ),
    "standard": StudyModeProfile(
        label="STANDARD",
        persona="You are a biblical scholar creating Bible study guides.",
        minutes=10,
        word_target="1500-1800",
        field_targets={
            "summary": "100-120 words, 6-7 clear sentences",
            "context": "50-80 words, necessary biblical background only",
            "interpretation": "900-1,200 words in 4-5 paragraphs of continuous prose",
            "prayer_points": "one first-person prayer of 6-8 sentences",
        },
        tone="Pastoral, warm, encouraging, practical for daily spiritual growth.",
        prayer_sentences="6-8",
    ),
    "deep": StudyModeProfile(
        label="DEEP DIVE",
        persona="You are a biblical scholar writing in-depth theological studies.",
        minutes=15,
        word_target="1800-2100",
        field_targets={
            "summary": "120-150 words, a theological overview",
            "context": "80-120 words of historical and theological background",
            "interpretation": "1,350-1,550 words in 5-6 paragraphs with word studies where they illuminate meaning",
            "prayer_points": "one Gospel-shaped prayer of 5-6 sentences",
        },
        tone="Scholarly yet pastoral, precise about doctrine.",
        prayer_sentences="5-6",
    ),
    "lectio": StudyModeProfile(
        label="LECTIO DIVINA",
        persona="You are a spiritual director guiding Lectio Divina (sacred reading).",
        minutes=10,
        word_target="1300-1600",
        field_targets={
            "summary": "180-220 words focused on the scripture text",
            "context": "30-50 words of simple orientation to the practice",
            "interpretation": "850-1,050 words moving through lectio, meditatio, oratio and contemplatio",
            "prayer_points": "simple prayerful movements of 60-80 words",
        },
        tone="Contemplative, gentle, inviting. Encounter, not coverage.",
        prayer_sentences="4-6",
    ),
    "sermon": StudyModeProfile(
        label="SERMON OUTLINE",
        persona="You are an experienced preacher creating sermon outlines for pastors.",
        minutes=30,
        word_target="4500-5350",
        field_targets={
            "summary": "a sermon overview with the big idea and three main points",
            "context": "historical and literary background the preacher needs",
            "interpretation": "a markdown outline: introduction, three points each with teaching, "
                              "scripture foundation, illustration and application, then a conclusion",
            "prayer_points": "a closing pastoral prayer of 6-8 sentences",
        },
        tone="Clear, theologically rich, pastorally wise, suitable for preacher preparation.",
        prayer_sentences="6-8",
    ),
}

_COMPLEXITY_TERMS = (
    "theology", "doctrine", "hermeneutics", "exegesis",
    "eschatology", "soteriology", "pneumatology",
)

_BASE_TOKENS = {"quick": 8000, "standard": 16000, "deep": 16000, "lectio": 16000, "sermon": 16000}

_LANGUAGE_TOKEN_MULTIPLIERS = {
    "en": {},
    "hi": {"deep": 1.024, "sermon": 1.024},
    "ml": {"quick": 0.44, "standard": 1.024, "deep": 1.024, "lectio": 1.024, "sermon": 1.024},
}


def create_language_block(language_config: LanguageConfig, language: str) -> str:
    return f"""LANGUAGE REQUIREMENTS - STRICT ENFORCEMENT

PRIMARY LANGUAGE: {language_config.name}
{language_config.language_instruction}
{language_config.complexity_instruction}
Cultural Context: {language_config.cultural_context}

NATIVE SCRIPT ENFORCEMENT:{_NATIVE_SCRIPT_RULES.get(language, _NATIVE_SCRIPT_RULES["en"])}
- Prayer closing: "{PRAYER_CLOSINGS.get(language, PRAYER_CLOSINGS["en"])}"

VOCABULARY: Simple, 5th-6th grade language that anyone can understand."""


def create_verse_reference_block(language: str) -> str:
    return (
        "VERSE REFERENCE FORMAT:\n"
        f"{VERSE_REFERENCE_EXAMPLES.get(language, VERSE_REFERENCE_EXAMPLES['en'])}\n"
        f"All verse references MUST use {_SCRIPT_NAMES.get(language, 'English')} book names"
    )


def get_word_count_target(study_mode: str) -> str:
    return STUDY_MODE_PROFILES.get(study_mode, STUDY_MODE_PROFILES["standard"]).word_target


def _task_description(input_type: str, input_value: str, study_mode: str) -> str:
    subject = {
        "lectio": "a Lectio Divina meditation guide",
        "sermon": "an expository sermon outline" if input_type == "scripture" else "a topical (3-point) sermon outline",
    }.get(study_mode, "a Bible study guide")
    preposition = "for" if input_type == "scripture" else "on"
    return f'Create {subject} {preposition}: "{input_value}"'


def create_study_guide_prompt(
    input_type: str,
    input_value: str,
    language: str,
    language_config: LanguageConfig,
    study_mode: str = "standard",
) -> PromptPair:
    """Build the prompt for one study guide; unknown modes fall back to standard."""
    profile = STUDY_MODE_PROFILES.get(study_mode, STUDY_MODE_PROFILES["standard"])
    closing = PRAYER_CLOSINGS.get(language, PRAYER_CLOSINGS["en"])

    system_message = f"""{profile.persona}

{THEOLOGICAL_FOUNDATION}

{JSON_OUTPUT_RULES}

{create_language_block(language_config, language)}

STUDY MODE: {profile.label} ({profile.minutes} minutes reading-with-understanding time)
Target total output: {profile.word_target} words across all fields.
Tone: {profile.tone}"""

    targets = "\n".join(f'- "{name}": {target}' for name, target in profile.field_targets.items())
    user_message = f"""{_task_description(input_type, input_value, study_mode)}

{create_verse_reference_block(language)}

TARGET LENGTHS:
{targets}
- Total target: {profile.word_target} words

PRAYER FORMAT:
First person, addressing God directly, {profile.prayer_sentences} sentences, ending with "{closing}".

REQUIRED JSON OUTPUT FORMAT (follow exactly):
{{
  "summary": "Overview capturing the main message",
  "interpretation": "Theological interpretation explaining meaning and key teachings",
  "context": "Historical and cultural background",
  "related_verses": ["3-5 relevant Bible verses with references"],
  "reflection_questions": ["4-6 practical application questions"],
  "prayer_points": ["Prayer text"]
}}

Output format: Start with {{ and end with }} - nothing else."""

    return PromptPair(system_message=system_message, user_message=user_message)


def _exclude_block(exclude_references: List[str]) -> str:
    if not exclude_references:
        return ""
    lines = "\n".join(f"- {ref}" for ref in exclude_references)
    return f"\n\nEXCLUDE these recently used references:\n{lines}"


def create_full_verse_prompt(exclude_references: List[str], language: str) -> PromptPair:
    """Ask for a complete verse with its text in English, Hindi and Malayalam."""
    system_message = f"""{THEOLOGICAL_FOUNDATION}

{JSON_OUTPUT_RULES}

DAILY VERSE GENERATION - COMPLETE TEXT

TASK: Generate ONE complete Bible verse with reference and full text in all three languages.
- Prefer well-known verses (John 3:16, Philippians 4:13, Romans 8:28, Proverbs 3:5-6)
- The verse must be meaningful when read alone
- Do NOT repeat any of the excluded references{_exclude_block(exclude_references)}

TRANSLATION ACCURACY:
- English: standard translation style (ESV equivalent)
- Hindi: accurate Devanagari text from standard Hindi Bibles
- Malayalam: accurate Malayalam script text from standard Malayalam Bibles

{create_verse_reference_block(language)}

OUTPUT FORMAT (strict JSON):
{{
  "reference": "English reference (e.g., John 3:16)",
  "referenceTranslations": {{"en": "John 3:16", "hi": "यूहन्ना 3:16", "ml": "യോഹന്നാൻ 3:16"}},
  "translations": {{"esv": "English verse text", "hi": "Hindi verse text", "ml": "Malayalam verse text"}}
}}"""
    user_message = "Generate a complete daily Bible verse with full text in all three languages. Output only valid JSON."
    return PromptPair(system_message=system_message, user_message=user_message)


def estimate_content_complexity(input_value: str, input_type: str) -> int:
    """Extra tokens to budget for long references and dense theological topics."""
    length = len(input_value)
    if input_type == "scripture":
        return 0 if length < 20 else 500
    lowered = input_value.lower()
    if any(term in lowered for term in _COMPLEXITY_TERMS) or length > 100:
        return 1000
    if length > 50:
        return 500
    return 0


def calculate_optimal_tokens(language: str, study_mode: str = "standard") -> int:
    """
    max_tokens for a generation.

    Devanagari and Malayalam script need far more tokens per word than English,
    so those languages get a multiplier per mode. Quick reads run on the smaller
    model and are capped at 8192, everything else at 16384.
    """
    base = _BASE_TOKENS.get(study_mode, 16000)
    multiplier = _LANGUAGE_TOKEN_MULTIPLIERS.get(language, {}).get(study_mode, 1.0)
    calculated = int(base * multiplier)
    model_max = model_token_cap(study_mode)
    if calculated > model_max:
        logger.warning(f"Requested {calculated} tokens exceeds model limit, capping at {model_max}")
    return min(calculated, model_max)


def model_token_cap(study_mode: str) -> int:
    return 8192 if study_mode == "quick" else 16384

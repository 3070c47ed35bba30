from pydantic import BaseModel, ConfigDict
from typing import Dict, List


class LanguageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    model_preference: str  # openai | anthropic
    max_tokens: int
    temperature: float
    language_instruction: str
    complexity_instruction: str
    cultural_context: str


class StudyGuideContent(BaseModel):
    summary: str
    interpretation: str
    context: str
    related_verses: List[str]
    reflection_questions: List[str]
    prayer_points: List[str]


class VerseTranslations(BaseModel):
    esv: str
    hi: str
    ml: str


class DailyVerseContent(BaseModel):
    reference: str
    reference_translations: Dict[str, str] = {}
    translations: VerseTranslations

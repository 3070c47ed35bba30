from pydantic import BaseModel
from typing import Dict
from app.modules.llm.schemas import VerseTranslations


class DailyVerseData(BaseModel):
    reference: str
    reference_translations: Dict[str, str] = {}
    translations: VerseTranslations
    date: str


class DailyVerseResponse(BaseModel):
    success: bool = True
    data: DailyVerseData

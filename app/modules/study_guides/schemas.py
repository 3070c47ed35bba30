from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from app.modules.rate_limit.schemas import RateLimitInfo

InputType = Literal["scripture", "topic"]
Language = Literal["en", "hi", "ml"]
StudyMode = Literal["quick", "standard", "deep", "lectio", "sermon"]


class StudyGuideGenerateRequest(BaseModel):
    input_type: InputType
    input_value: str = Field(..., min_length=1, max_length=500)
    language: Language = "en"
    study_mode: StudyMode = "standard"


class StudyGuideMetadata(BaseModel):
    cache_hit: bool = False
    generation_time_ms: Optional[int] = None
    tokens_consumed: int = 0


class StudyGuideResponse(BaseModel):
    id: str
    input_type: str
    input_value: str
    study_mode: str = "standard"
    summary: str
    interpretation: str
    context: str
    related_verses: List[str]
    reflection_questions: List[str]
    prayer_points: List[str]
    language: str
    is_saved: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    metadata: Optional[StudyGuideMetadata] = None


class StudyGuideGenerateResponse(BaseModel):
    success: bool = True
    data: StudyGuideResponse
    rate_limit: RateLimitInfo


class StudyGuideListResponse(BaseModel):
    success: bool = True
    data: List[StudyGuideResponse]
    limit: int
    offset: int


class SaveStudyGuideRequest(BaseModel):
    action: Literal["save", "unsave"]


class SaveStudyGuideResponse(BaseModel):
    success: bool = True
    message: str
    data: StudyGuideResponse


class GenerationMetrics(BaseModel):
    total_generated: int
    cache_hits: int
    cache_hit_rate: float
    average_response_time_ms: Optional[float] = None
    tokens_saved: int

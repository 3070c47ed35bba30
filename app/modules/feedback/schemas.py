from pydantic import BaseModel, Field, StrictBool, model_validator
from typing import Literal, Optional
from datetime import datetime

FeedbackCategory = Literal["general", "content", "usability", "technical", "suggestion"]

MAX_MESSAGE_LENGTH = 1000


class FeedbackRequest(BaseModel):
    was_helpful: StrictBool
    study_guide_id: Optional[str] = None
    jeff_reed_session_id: Optional[str] = None
    message: Optional[str] = Field(None, max_length=MAX_MESSAGE_LENGTH)
    category: FeedbackCategory = "general"

    @model_validator(mode="after")
    def check_target(self):
        if not self.study_guide_id and not self.jeff_reed_session_id:
            raise ValueError("Either study_guide_id or jeff_reed_session_id must be provided")
        return self


class FeedbackData(BaseModel):
    id: str
    was_helpful: bool
    message: Optional[str] = None
    category: str
    sentiment_score: Optional[float] = None
    created_at: Optional[datetime] = None


class FeedbackResponse(BaseModel):
    success: bool = True
    data: FeedbackData
    message: str = "Thank you for your feedback!"

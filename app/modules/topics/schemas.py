from pydantic import BaseModel
from typing import List, Literal

DifficultyLevel = Literal["beginner", "intermediate", "advanced"]


class Topic(BaseModel):
    id: str
    title: str
    description: str
    category: str
    difficulty_level: DifficultyLevel
    estimated_duration: str
    key_verses: List[str]
    tags: List[str]


class TopicListResponse(BaseModel):
    success: bool = True
    data: List[Topic]
    total: int
    limit: int
    offset: int


class TopicResponse(BaseModel):
    success: bool = True
    data: Topic


class CategoriesResponse(BaseModel):
    success: bool = True
    data: List[str]

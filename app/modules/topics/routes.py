from fastapi import APIRouter, Depends, Query
from app.modules.topics.schemas import CategoriesResponse, DifficultyLevel, TopicListResponse, TopicResponse
from app.modules.topics.service import TopicService
from typing import Optional

router = APIRouter(prefix="/topics", tags=["topics"])


def get_topic_service() -> TopicService:
    return TopicService()


@router.get("", response_model=TopicListResponse)
async def list_topics(
    category: Optional[str] = None,
    difficulty: Optional[DifficultyLevel] = None,
    language: str = Query("en"),
    limit: int = Query(20),
    offset: int = Query(0),
    service: TopicService = Depends(get_topic_service)
):
    """Recommended study topics, optionally filtered by category and difficulty"""
    return service.get_topics(category=category, difficulty=difficulty, language=language, limit=limit, offset=offset)


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(
    language: str = Query("en"),
    service: TopicService = Depends(get_topic_service)
):
    return CategoriesResponse(data=service.get_categories(language))


@router.get("/search", response_model=TopicListResponse)
async def search_topics(
    q: str = Query(..., min_length=1, max_length=100),
    language: str = Query("en"),
    service: TopicService = Depends(get_topic_service)
):
    """Search topics by title, description and tags"""
    results = service.search_topics(q, language)
    return TopicListResponse(data=results, total=len(results), limit=len(results), offset=0)


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(
    topic_id: str,
    language: str = Query("en"),
    service: TopicService = Depends(get_topic_service)
):
    return TopicResponse(data=service.get_topic(topic_id, language))

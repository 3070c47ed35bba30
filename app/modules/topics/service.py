import logging
from typing import List, Optional
from app.config.recommended_topics import RECOMMENDED_TOPICS
from app.core.errors import not_found_error
from app.modules.topics.schemas import Topic, TopicListResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class TopicService:
    """Read-only access to the curated study topics."""

    def get_topics_by_language(self, language: str = "en") -> List[Topic]:
        return [Topic(**t) for t in RECOMMENDED_TOPICS.get(language, [])]

    def get_topics(
        self,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        language: str = "en",
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0
    ) -> TopicListResponse:
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        offset = max(0, offset)
        topics = self.get_topics_by_language(language)
        if category:
            topics = [t for t in topics if t.category.lower() == category.lower()]
        if difficulty:
            topics = [t for t in topics if t.difficulty_level == difficulty]
        return TopicListResponse(
            data=topics[offset:offset + limit],
            total=len(topics),
            limit=limit,
            offset=offset,
        )

    def get_topic(self, topic_id: str, language: str = "en") -> Topic:
        for topic in self.get_topics_by_language(language):
            if topic.id == topic_id:
                return topic
        raise not_found_error("Topic")

    def get_categories(self, language: str = "en") -> List[str]:
        categories: List[str] = []
        for topic in self.get_topics_by_language(language):
            if topic.category not in categories:
                categories.append(topic.category)
        return categories

    def search_topics(self, query: str, language: str = "en") -> List[Topic]:
        """Case-insensitive match on title, description or any tag."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            t for t in self.get_topics_by_language(language)
            if needle in t.title.lower()
            or needle in t.description.lower()
            or any(needle in tag.lower() for tag in t.tags)
        ]

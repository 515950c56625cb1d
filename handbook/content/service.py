"""Read access to content catalogs and their markdown bodies."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.exceptions import NotFoundError
from handbook.progress.domain import ProgressScope

from .models import Blog, Question, Topic
from .schemas import (
    ArticleContent,
    BlogContent,
    BlogSummary,
    Difficulty,
    QuestionResponse,
    SnippetContent,
    TopicDetailsResponse,
)
from .storage import ContentFileNotFoundError, MarkdownStorage, markdown_key
from .store import SqlCatalogStore


logger = logging.getLogger(__name__)


class ContentService:
    """Service for catalog lookups that do not involve progress."""

    def __init__(self, session: AsyncSession, storage: MarkdownStorage) -> None:
        self.session = session
        self.storage = storage

    async def _read_markdown(self, folder: str, name: str, resource_type: str, resource_id: int) -> str:
        try:
            return await self.storage.read(markdown_key(folder, name))
        except ContentFileNotFoundError as e:
            logger.warning(f"Missing markdown for {resource_type} {resource_id}: {e}")
            raise NotFoundError(f"{resource_type} content", resource_id) from e

    async def get_topic_details(self, topic_id: int) -> TopicDetailsResponse:
        topic = await self.session.get(Topic, topic_id)
        if topic is None:
            raise NotFoundError("Topic", topic_id)
        return TopicDetailsResponse.model_validate(topic)

    async def get_library_article(self, topic_id: int) -> ArticleContent:
        entry = await SqlCatalogStore.for_scope(self.session, ProgressScope.LIBRARY).get_item(topic_id)
        if entry is None:
            raise NotFoundError("Library topic", topic_id)

        content = await self._read_markdown("library", entry.attributes["file_name"], "Library topic", topic_id)
        return ArticleContent(topic_id=entry.item_id, title=entry.title, content=content)

    async def get_snippet_content(self, snippet_id: int) -> SnippetContent:
        snippet = await SqlCatalogStore.for_scope(self.session, ProgressScope.SNIPPET).get_item(snippet_id)
        if snippet is None:
            raise NotFoundError("Snippet", snippet_id)

        content = await self._read_markdown("snippets", snippet.attributes["filename"], "Snippet", snippet_id)
        return SnippetContent(snippet_id=snippet.item_id, label=snippet.title, content=content)

    async def list_blogs(self) -> list[BlogSummary]:
        result = await self.session.execute(select(Blog).order_by(Blog.blog_id))
        return [BlogSummary.model_validate(blog) for blog in result.scalars().all()]

    async def get_blog(self, blog_id: int) -> BlogContent:
        blog = await self.session.get(Blog, blog_id)
        if blog is None:
            raise NotFoundError("Blog", blog_id)

        content = await self._read_markdown("blogs", blog.filename, "Blog", blog_id)
        return BlogContent(blog_id=blog.blog_id, title=blog.title, content=content)

    async def list_questions(
        self, topic: str | None = None, difficulty: Difficulty | None = None
    ) -> list[QuestionResponse]:
        """Return the question bank, optionally narrowed by topic and difficulty."""
        query = select(Question).order_by(Question.question_id)
        if topic:
            query = query.where(Question.topic == topic)
        if difficulty:
            query = query.where(Question.difficulty == difficulty.value)

        result = await self.session.execute(query)
        return [QuestionResponse.model_validate(q) for q in result.scalars().all()]

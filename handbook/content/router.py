"""Content catalog API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from handbook.core.response import ApiResponse, success_response
from handbook.database.session import DbSession
from handbook.progress.dependencies import build_reconciler
from handbook.progress.domain import ProgressScope
from handbook.progress.schemas import ProgressView

from .schemas import (
    ArticleContent,
    BlogContent,
    BlogSummary,
    Difficulty,
    QuestionResponse,
    SnippetContent,
    TopicDetailsResponse,
)
from .service import ContentService
from .storage import MarkdownStorage, get_markdown_storage


logger = logging.getLogger(__name__)

Storage = Annotated[MarkdownStorage, Depends(get_markdown_storage)]

topics_router = APIRouter(prefix="/api/topics", tags=["topics"])
library_router = APIRouter(prefix="/api/library", tags=["library"])
snippets_router = APIRouter(prefix="/api/snippets", tags=["snippets"])
blogs_router = APIRouter(prefix="/api/blogs", tags=["blogs"])
questions_router = APIRouter(prefix="/api/questions", tags=["questions"])


async def _catalog_view(db: DbSession, scope: ProgressScope, user_id: str | None) -> ProgressView:
    view = await build_reconciler(db, scope).get_progress_view(user_id)
    return [item.to_dict() for item in view]


# === Topics ===


@topics_router.get("/list")
@topics_router.get("/list/{user_id}")
async def list_topics(db: DbSession, user_id: str | None = None) -> ApiResponse[ProgressView]:
    """Topic list with the user's status per topic."""
    return success_response(await _catalog_view(db, ProgressScope.TOPIC, user_id), "Topics fetched successfully")


@topics_router.get("/details/{topic_id}")
async def get_topic_details(topic_id: int, db: DbSession, storage: Storage) -> ApiResponse[TopicDetailsResponse]:
    details = await ContentService(db, storage).get_topic_details(topic_id)
    return success_response(details, "Topic details fetched successfully")


# === Library ===


@library_router.get("")
@library_router.get("/{user_id}")
async def list_library(db: DbSession, user_id: str | None = None) -> ApiResponse[ProgressView]:
    """Library topics with the user's status per topic."""
    return success_response(await _catalog_view(db, ProgressScope.LIBRARY, user_id), "Topics fetched successfully")


@library_router.get("/topic/{topic_id}")
async def get_library_article(topic_id: int, db: DbSession, storage: Storage) -> ApiResponse[ArticleContent]:
    article = await ContentService(db, storage).get_library_article(topic_id)
    return success_response(article, "Topic content fetched successfully")


# === Snippets ===


@snippets_router.get("")
@snippets_router.get("/{user_id}")
async def list_snippets(db: DbSession, user_id: str | None = None) -> ApiResponse[ProgressView]:
    """Snippets in display order with the user's status per snippet."""
    return success_response(await _catalog_view(db, ProgressScope.SNIPPET, user_id), "Snippets fetched successfully")


@snippets_router.get("/snippet/{snippet_id}")
async def get_snippet(snippet_id: int, db: DbSession, storage: Storage) -> ApiResponse[SnippetContent]:
    snippet = await ContentService(db, storage).get_snippet_content(snippet_id)
    return success_response(snippet, "Snippet fetched successfully")


# === Blogs ===


@blogs_router.get("")
async def list_blogs(db: DbSession, storage: Storage) -> ApiResponse[list[BlogSummary]]:
    blogs = await ContentService(db, storage).list_blogs()
    return success_response(blogs, "Blogs fetched successfully")


@blogs_router.get("/{blog_id}")
async def get_blog(blog_id: int, db: DbSession, storage: Storage) -> ApiResponse[BlogContent]:
    blog = await ContentService(db, storage).get_blog(blog_id)
    return success_response(blog, "Blog fetched successfully")


# === Questions ===


@questions_router.get("")
async def list_questions(
    db: DbSession,
    storage: Storage,
    topic: str | None = None,
    difficulty: Difficulty | None = None,
) -> ApiResponse[list[QuestionResponse]]:
    questions = await ContentService(db, storage).list_questions(topic, difficulty)
    return success_response(questions, "Questions fetched successfully")


routers = [topics_router, library_router, snippets_router, blogs_router, questions_router]

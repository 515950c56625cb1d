"""Shared fixtures.

Tests run against an in-memory SQLite database (aiosqlite) that is created
fresh for every test, and against in-memory fakes of the store protocols.
"""

import os


os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTH_DISABLED"] = "true"
os.environ["SECRET_KEY"] = "test-secret"  # noqa: S105

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from handbook.config.settings import get_settings
from handbook.content.models import Blog, LibraryEntry, Question, Snippet, Topic
from handbook.content.storage import LocalMarkdownStorage, get_markdown_storage
from handbook.database.engine import create_app_engine
from handbook.database.init import init_database
from handbook.database.session import get_db_session
from handbook.main import create_app


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    test_engine = create_app_engine("sqlite+aiosqlite:///:memory:")
    await init_database(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Markdown tree mirroring the production content folder."""
    (tmp_path / "library").mkdir()
    (tmp_path / "snippets").mkdir()
    (tmp_path / "blogs").mkdir()
    (tmp_path / "library" / "vars.md").write_text("# Variables\n\nlet, const and var.", encoding="utf-8")
    (tmp_path / "snippets" / "debounce.md").write_text("# Debounce\n\n```js\nfunction debounce() {}\n```")
    (tmp_path / "blogs" / "event-loop.md").write_text("# The event loop", encoding="utf-8")
    return tmp_path


@pytest.fixture
def app(session_maker: async_sessionmaker[AsyncSession], content_dir: Path) -> FastAPI:
    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db_session] = _override_session
    application.dependency_overrides[get_markdown_storage] = lambda: LocalMarkdownStorage(content_dir)
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def auth_enabled(monkeypatch: pytest.MonkeyPatch):
    """Turn bearer token checks on for one test."""
    monkeypatch.setenv("AUTH_DISABLED", "false")
    get_settings.cache_clear()
    yield
    monkeypatch.setenv("AUTH_DISABLED", "true")
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def seeded_catalogs(db_session: AsyncSession) -> None:
    """Two library topics, three snippets, a topic, a blog and two questions."""
    db_session.add_all(
        [
            LibraryEntry(topic_id=1, title="Vars", file_name="vars"),
            LibraryEntry(topic_id=2, title="Closures", file_name="closures"),
            Snippet(
                snippet_id=10, label="Throttle", filename="throttle", difficulty="MEDIUM", is_locked=False, order=2
            ),
            Snippet(
                snippet_id=11, label="Debounce", filename="debounce", difficulty="EASY", is_locked=False, order=1
            ),
            Snippet(
                snippet_id=12, label="Promise.all", filename="promise_all", difficulty="HARD", is_locked=True, order=3
            ),
            Topic(
                topic_id=1,
                title="Hoisting",
                file_name="hoisting",
                explanation="Declarations move to the top of their scope.",
                code_example="console.log(x); var x = 1;",
                key_points=["var is hoisted", "let has a temporal dead zone"],
            ),
            Blog(
                blog_id=1,
                title="Event loop",
                description="How tasks are scheduled",
                filename="event-loop",
                tags=["runtime"],
            ),
            Question(
                question_id=1,
                type="true-false",
                topic="closures",
                difficulty="BEGINNER",
                question="A closure captures variables by reference.",
                options=["true", "false"],
                answer="true",
                explanation="Closures keep a live binding.",
            ),
            Question(
                question_id=2,
                type="match-pairs",
                topic="types",
                difficulty="ADVANCED",
                question="Match each value to its typeof result.",
                answer={"null": "object"},
                explanation="typeof null is a historical quirk.",
                pairs=[{"left": "null", "right": "object"}],
            ),
        ]
    )
    await db_session.commit()

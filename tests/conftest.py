"""
Test infrastructure for the article API.

Strategy
--------
- SQLite via aiosqlite removes the need for a running PostgreSQL instance.
- The database lives in a temporary *file* with ``NullPool`` rather than
  an in-memory ``StaticPool``: author enrichment opens one session per
  lookup, concurrently, and those sessions must not share (and roll back)
  the request session's connection.
- The app's ``get_db`` and ``get_session_factory`` dependencies are
  overridden so every test-time request uses the test session factory.
- All tables are created fresh before each test and dropped after.
- Usecase and enrichment tests run against the in-memory fakes below,
  which record every call and can delay or fail individual lookups.
"""
import asyncio
import os
import tempfile
from dataclasses import replace
from datetime import datetime, timedelta, timezone

TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"bulletin-test-{os.getpid()}.db")
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

# Must be set before ``bulletin.config`` is imported.
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["DEBUG"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool

from bulletin.database import Base, get_db, get_session_factory
from bulletin.domain import Article, Author
from bulletin.exceptions import UnexpectedRowCountError
from bulletin.main import app
from bulletin.repositories.base import ArticleRepository, AuthorRepository
from bulletin.repositories.cursor import decode_cursor, encode_cursor

# ---------------------------------------------------------------------------
# Test database engine — SQLite file with aiosqlite
# ---------------------------------------------------------------------------

engine_test = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency overrides — replace production sessions with the test factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def override_get_session_factory():
    return async_session_test


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_session_factory] = override_get_session_factory


# ---------------------------------------------------------------------------
# In-memory fakes
# ---------------------------------------------------------------------------

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_article(article_id: int, author_id: int, title: str | None = None) -> Article:
    """An article as the store returns it: author reference only."""
    created = BASE_TIME + timedelta(minutes=article_id)
    return Article(
        id=article_id,
        title=title or f"Article {article_id}",
        content=f"Content {article_id}",
        author=Author(id=author_id),
        created_at=created,
        updated_at=created,
    )


class FakeAuthorRepository(AuthorRepository):
    """
    Author store that records lookups. ``delays`` holds per-id sleep times;
    ``failures`` holds per-id exceptions raised after the delay.
    """

    def __init__(self, authors=(), delays=None, failures=None):
        self.authors = {a.id: a for a in authors}
        self.delays = delays or {}
        self.failures = failures or {}
        self.calls: list[int] = []
        self.completed: list[int] = []
        self.cancelled: list[int] = []

    async def get_by_id(self, author_id: int) -> Author | None:
        self.calls.append(author_id)
        try:
            await asyncio.sleep(self.delays.get(author_id, 0))
        except asyncio.CancelledError:
            self.cancelled.append(author_id)
            raise
        if author_id in self.failures:
            raise self.failures[author_id]
        self.completed.append(author_id)
        return self.authors.get(author_id)


class FakeArticleRepository(ArticleRepository):
    """In-memory article store ordered by ``created_at``."""

    def __init__(self, articles=(), delay: float = 0):
        self.articles = {a.id: replace(a) for a in articles}
        self._next_id = max(self.articles, default=0) + 1
        self.delay = delay
        self.fetch_calls: list[tuple[str, int]] = []
        self.stored: list[Article] = []
        self.updated: list[Article] = []
        self.deleted: list[int] = []

    async def fetch(self, cursor: str, num: int) -> tuple[list[Article], str]:
        self.fetch_calls.append((cursor, num))
        await asyncio.sleep(self.delay)
        rows = sorted(self.articles.values(), key=lambda a: a.created_at)
        if cursor:
            boundary = decode_cursor(cursor)
            rows = [a for a in rows if a.created_at > boundary]
        page = [replace(a, author=Author(id=a.author.id)) for a in rows[:num]]
        next_cursor = encode_cursor(page[-1].created_at) if page and len(page) == num else ""
        return page, next_cursor

    async def get_by_id(self, article_id: int) -> Article | None:
        await asyncio.sleep(self.delay)
        article = self.articles.get(article_id)
        return replace(article) if article else None

    async def get_by_title(self, title: str) -> Article | None:
        await asyncio.sleep(self.delay)
        for article in self.articles.values():
            if article.title == title:
                return replace(article)
        return None

    async def store(self, article: Article) -> None:
        await asyncio.sleep(self.delay)
        article.id = self._next_id
        self._next_id += 1
        self.articles[article.id] = replace(article)
        self.stored.append(article)

    async def update(self, article: Article) -> None:
        await asyncio.sleep(self.delay)
        if article.id not in self.articles:
            raise UnexpectedRowCountError(0)
        self.articles[article.id] = replace(article)
        self.updated.append(article)

    async def delete(self, article_id: int) -> None:
        await asyncio.sleep(self.delay)
        if article_id not in self.articles:
            raise UnexpectedRowCountError(0)
        del self.articles[article_id]
        self.deleted.append(article_id)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="session", autouse=True)
def remove_test_database():
    yield
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that seed rows or exercise the
    SQLAlchemy repositories directly.
    """
    async with async_session_test() as session:
        yield session


@pytest.fixture
def session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_test


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

"""
Article usecase — orchestrates the article and author stores.

Design notes
------------
- Every public operation runs under a single time budget
  (``asyncio.timeout``); expiry surfaces as ``OperationTimeoutError`` no
  matter which store call or lookup was in flight.
- The usecase holds no state between calls; each call only touches the
  repositories it was constructed with.
- Store and lookup errors propagate unchanged. The usecase adds only the
  conflict (duplicate title) and not-found rules on top.
- ``fetch`` is the one operation allowed to partially succeed: when the
  author enrichment fails, ``EnrichmentError`` carries the fetched page so
  the caller can still serve it, minus the continuation cursor.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace

from bulletin.domain import Article, utcnow
from bulletin.exceptions import (
    ConflictError,
    EnrichmentError,
    NotFoundError,
    OperationTimeoutError,
)
from bulletin.repositories.base import ArticleRepository, AuthorRepository
from bulletin.services.enrichment import AuthorEnricher

logger = logging.getLogger(__name__)

DEFAULT_FETCH_SIZE = 10


class ArticleUsecase:
    def __init__(
        self,
        article_repository: ArticleRepository,
        author_repository: AuthorRepository,
        timeout: float,
        default_num: int = DEFAULT_FETCH_SIZE,
    ):
        self._article_repository = article_repository
        self._author_repository = author_repository
        self._enricher = AuthorEnricher(author_repository)
        self._timeout = timeout
        self._default_num = default_num

    @asynccontextmanager
    async def _deadline(self, operation: str):
        try:
            async with asyncio.timeout(self._timeout):
                yield
        except TimeoutError as exc:
            logger.warning("Article %s exceeded its %.2fs budget", operation, self._timeout)
            raise OperationTimeoutError(f"{operation} timed out") from exc

    async def _with_author(self, article: Article) -> Article:
        author = await self._author_repository.get_by_id(article.author.id)
        if author is None:
            raise NotFoundError()
        return replace(article, author=author)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch(self, cursor: str = "", num: int = 0) -> tuple[list[Article], str]:
        """
        Return one page of articles with authors resolved, plus the cursor
        for the next page ("" at the end).

        *num* of 0 means the usecase's default page size.
        """
        if num == 0:
            num = self._default_num

        async with self._deadline("fetch"):
            articles, next_cursor = await self._article_repository.fetch(cursor, num)
            try:
                articles = await self._enricher.fill_author_details(articles)
            except Exception as exc:
                logger.error("Author enrichment failed for a page of %d article(s)", len(articles))
                raise EnrichmentError(articles, str(exc)) from exc
        return articles, next_cursor

    async def get_by_id(self, article_id: int) -> Article:
        async with self._deadline("get_by_id"):
            article = await self._article_repository.get_by_id(article_id)
            if article is None:
                raise NotFoundError()
            return await self._with_author(article)

    async def get_by_title(self, title: str) -> Article:
        async with self._deadline("get_by_title"):
            article = await self._article_repository.get_by_title(title)
            if article is None:
                raise NotFoundError()
            return await self._with_author(article)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def store(self, article: Article) -> None:
        """Persist *article*; its ``id`` is filled in on success."""
        async with self._deadline("store"):
            existing = await self._article_repository.get_by_title(article.title)
            if existing is not None:
                raise ConflictError()
            await self._article_repository.store(article)

    async def update(self, article: Article) -> None:
        async with self._deadline("update"):
            article.updated_at = utcnow()
            await self._article_repository.update(article)

    async def delete(self, article_id: int) -> None:
        async with self._deadline("delete"):
            existing = await self._article_repository.get_by_id(article_id)
            if existing is None:
                raise NotFoundError()
            await self._article_repository.delete(article_id)

"""
Article store backed by SQLAlchemy.

Design notes
------------
- Pagination is keyset-based on ``created_at`` (ascending). A next cursor is
  handed out only when the page came back full; a short page means the end
  of the sequence was reached.
- The repository flushes but does not commit; the transaction boundary is
  owned by the ``get_db`` dependency.
- ``update`` and ``delete`` must touch exactly one row. Anything else is a
  store-level failure (``UnexpectedRowCountError``), not a "not found".
- The unique title constraint backs the usecase's title check: an
  ``IntegrityError`` on insert or update (e.g. two writers racing for the
  same title) surfaces as ``ConflictError``.
"""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.domain import Article, Author
from bulletin.exceptions import ConflictError, UnexpectedRowCountError
from bulletin.models import ArticleModel
from bulletin.repositories.base import ArticleRepository
from bulletin.repositories.cursor import decode_cursor, encode_cursor

logger = logging.getLogger(__name__)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port on an ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM row → domain entity. The author carries its id only."""
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            author=Author(id=model.author_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _fetch(self, stmt) -> list[Article]:
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def fetch(self, cursor: str, num: int) -> tuple[list[Article], str]:
        stmt = select(ArticleModel).order_by(ArticleModel.created_at).limit(num)
        if cursor:
            stmt = stmt.where(ArticleModel.created_at > decode_cursor(cursor))

        articles = await self._fetch(stmt)

        next_cursor = ""
        if articles and len(articles) == num:
            next_cursor = encode_cursor(articles[-1].created_at)
        return articles, next_cursor

    async def get_by_id(self, article_id: int) -> Article | None:
        articles = await self._fetch(select(ArticleModel).where(ArticleModel.id == article_id))
        return articles[0] if articles else None

    async def get_by_title(self, title: str) -> Article | None:
        articles = await self._fetch(select(ArticleModel).where(ArticleModel.title == title))
        return articles[0] if articles else None

    async def store(self, article: Article) -> None:
        model = ArticleModel(
            title=article.title,
            content=article.content,
            author_id=article.author.id,
            created_at=article.created_at,
            updated_at=article.updated_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            logger.warning("Article insert rejected for title=%r: %s", article.title, exc.orig)
            raise ConflictError() from exc
        article.id = model.id

    async def update(self, article: Article) -> None:
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(
                title=article.title,
                content=article.content,
                author_id=article.author.id,
                updated_at=article.updated_at,
            )
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            logger.warning("Article update rejected for id=%s: %s", article.id, exc.orig)
            raise ConflictError() from exc
        self._check_single_row(result.rowcount, "update", article.id)

    async def delete(self, article_id: int) -> None:
        result = await self._session.execute(
            delete(ArticleModel).where(ArticleModel.id == article_id)
        )
        self._check_single_row(result.rowcount, "delete", article_id)

    @staticmethod
    def _check_single_row(affected: int, operation: str, article_id: int) -> None:
        if affected != 1:
            logger.error(
                "Article %s affected %d row(s) for id=%s", operation, affected, article_id
            )
            raise UnexpectedRowCountError(affected)

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulletin.config import settings
from bulletin.database import get_db, get_session_factory
from bulletin.repositories import SQLAlchemyArticleRepository, SQLAlchemyAuthorRepository
from bulletin.services.article_usecase import ArticleUsecase


class CursorParams:
    """
    Reusable FastAPI dependency that parses cursor pagination query
    parameters.

    Attributes
    ----------
    num:
        Page size. ``0`` (the default) lets the usecase pick its default
        page size; anything above ``settings.MAX_PAGE_SIZE`` is clamped.
    cursor:
        Opaque cursor returned in the ``X-Cursor`` header of the previous
        page. Empty means "start from the beginning".
    """

    def __init__(
        self,
        num: int = Query(
            0,
            ge=0,
            description="Number of articles per page (0 = server default).",
        ),
        cursor: str = Query(
            "",
            description="Cursor from the previous page's X-Cursor header.",
        ),
    ) -> None:
        self.num = min(num, settings.MAX_PAGE_SIZE)
        self.cursor = cursor


def get_article_usecase(
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ArticleUsecase:
    return ArticleUsecase(
        SQLAlchemyArticleRepository(db),
        SQLAlchemyAuthorRepository(session_factory),
        timeout=settings.CONTEXT_TIMEOUT,
        default_num=settings.DEFAULT_PAGE_SIZE,
    )

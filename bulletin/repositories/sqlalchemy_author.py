"""Read-only author store backed by SQLAlchemy."""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulletin.domain import Author
from bulletin.models import AuthorModel
from bulletin.repositories.base import AuthorRepository


class SQLAlchemyAuthorRepository(AuthorRepository):
    """
    Implements the AuthorRepository port.

    Takes a session *factory* rather than a session: the enrichment pass
    issues lookups concurrently, so each one checks out its own pooled
    connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_by_id(self, author_id: int) -> Author | None:
        async with self._session_factory() as session:
            model = await session.get(AuthorModel, author_id)
            if model is None:
                return None
            return Author(
                id=model.id,
                name=model.name,
                created_at=model.created_at,
                updated_at=model.updated_at,
            )

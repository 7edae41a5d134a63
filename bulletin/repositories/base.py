"""Abstract store interfaces (ports) consumed by the article usecase."""

from abc import ABC, abstractmethod

from bulletin.domain import Article, Author


class ArticleRepository(ABC):
    """Port for article persistence."""

    @abstractmethod
    async def fetch(self, cursor: str, num: int) -> tuple[list[Article], str]:
        """
        Return up to *num* articles after *cursor* plus the cursor of the
        next page ("" when there is none). An empty *cursor* starts from the
        beginning; an undecodable one raises ``BadParamInputError``.
        """
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        ...

    @abstractmethod
    async def get_by_title(self, title: str) -> Article | None:
        ...

    @abstractmethod
    async def store(self, article: Article) -> None:
        """Persist a new article and write the generated id back into it."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> None:
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> None:
        ...


class AuthorRepository(ABC):
    """Port for read-only author lookups. Must be safe for concurrent calls."""

    @abstractmethod
    async def get_by_id(self, author_id: int) -> Author | None:
        ...

"""
Author enrichment — replaces the id-only author reference on each article
with the full author record.

One lookup is issued per *distinct* author id, all of them concurrently in
an ``asyncio.TaskGroup``. The first failing lookup cancels its siblings and
the whole pass fails; results are merged only after every lookup succeeded,
in the order the articles came in.
"""
import asyncio
import logging
from dataclasses import replace

from bulletin.domain import Article, Author
from bulletin.repositories.base import AuthorRepository

logger = logging.getLogger(__name__)


class AuthorEnricher:
    def __init__(self, author_repository: AuthorRepository):
        self._author_repository = author_repository

    async def _lookup_all(self, author_ids: list[int]) -> dict[int, Author]:
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = {
                    author_id: tg.create_task(self._author_repository.get_by_id(author_id))
                    for author_id in author_ids
                }
        except ExceptionGroup as group:
            # Siblings were cancelled by the group; report the first failure.
            logger.error("Author lookup failed: %s", group.exceptions[0])
            raise group.exceptions[0] from None

        found: dict[int, Author] = {}
        for author_id, task in tasks.items():
            author = task.result()
            if author is not None:
                found[author_id] = author
        return found

    async def fill_author_details(self, articles: list[Article]) -> list[Article]:
        """
        Return *articles* in the same order with their authors resolved.

        Articles whose author could not be found keep their id-only
        reference. The input objects are never modified.
        """
        if not articles:
            return []

        author_ids = list(dict.fromkeys(article.author.id for article in articles))
        authors = await self._lookup_all(author_ids)

        return [
            replace(article, author=authors[article.author.id])
            if article.author.id in authors
            else article
            for article in articles
        ]

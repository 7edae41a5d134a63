"""Error taxonomy surfaced by the stores and the article usecase.

Each class carries the HTTP status the delivery layer answers with. The
``message`` is what callers get to see; backend failures always expose the
same opaque text regardless of what went wrong underneath.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulletin.domain import Article


class DomainError(Exception):
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Raised when a requested article or author does not exist."""

    status_code = 404
    default_message = "Your requested Item is not found"


class ConflictError(DomainError):
    """Raised when storing an article whose title is already taken."""

    status_code = 409
    default_message = "Your Item already exist"


class BadParamInputError(DomainError):
    """Raised for malformed input, e.g. an undecodable pagination cursor."""

    status_code = 400
    default_message = "Given Param is not valid"


class InternalServerError(DomainError):
    status_code = 500

    def __init__(self, detail: str | None = None):
        # ``detail`` is kept for logs only; the public message stays opaque.
        self.detail = detail
        super().__init__(None)


class OperationTimeoutError(InternalServerError):
    """The per-call time budget elapsed before the operation finished."""


class UnexpectedRowCountError(InternalServerError):
    """A single-row write touched zero or several rows."""

    def __init__(self, affected: int):
        self.affected = affected
        super().__init__(f"Weird behavior. Total affected: {affected}")


class EnrichmentError(InternalServerError):
    """
    Author enrichment failed for a fetched page.

    ``articles`` holds the page exactly as the article store returned it
    (authors carry ids only), so a caller may still serve the data without
    a continuation cursor.
    """

    def __init__(self, articles: list[Article], detail: str | None = None):
        self.articles = articles
        super().__init__(detail)

# Repositories package.
#
# ``base`` declares the store ports the article usecase depends on; the
# ``sqlalchemy_*`` modules implement them on top of the async engine:
#
#   sqlalchemy_article  — cursor-paginated article storage (request session)
#   sqlalchemy_author   — read-only author lookups (one session per lookup)
#
# Absent rows come back as ``None``; only genuine backend failures raise.
from bulletin.repositories.base import ArticleRepository, AuthorRepository
from bulletin.repositories.sqlalchemy_article import SQLAlchemyArticleRepository
from bulletin.repositories.sqlalchemy_author import SQLAlchemyAuthorRepository

__all__ = [
    "ArticleRepository",
    "AuthorRepository",
    "SQLAlchemyArticleRepository",
    "SQLAlchemyAuthorRepository",
]

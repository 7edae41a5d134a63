"""Domain entities — plain dataclasses shared by the usecase and its stores.

Absence is always expressed as ``None`` at store boundaries; an entity with
default field values is a real (if sparse) entity, never a "not found" marker.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Author:
    id: int
    name: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Article:
    """
    An article as seen by the usecase layer.

    Straight out of the article store, ``author`` only carries the
    referenced id; the enrichment pass swaps in the full record.
    ``id == 0`` means the article has not been stored yet.
    """

    title: str
    content: str
    author: Author
    id: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

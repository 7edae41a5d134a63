from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from bulletin.domain import Article, Author


# --- Author ---

class AuthorResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Article ---

class ArticleBase(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str
    author_id: int = Field(gt=0)

    def to_entity(self, article_id: int = 0) -> Article:
        return Article(
            id=article_id,
            title=self.title,
            content=self.content,
            author=Author(id=self.author_id),
        )


class ArticleCreate(ArticleBase):
    pass


class ArticleUpdate(ArticleBase):
    pass


class ArticleResponse(BaseModel):
    id: int
    title: str
    content: str
    author: AuthorResponse
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

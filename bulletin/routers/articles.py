import logging

from fastapi import APIRouter, Depends, Response

from bulletin.dependencies import CursorParams, get_article_usecase
from bulletin.exceptions import EnrichmentError
from bulletin.schemas import ArticleCreate, ArticleResponse, ArticleUpdate
from bulletin.services.article_usecase import ArticleUsecase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])

@router.get("", response_model=list[ArticleResponse])
async def fetch_articles(
    response: Response,
    page: CursorParams = Depends(),
    usecase: ArticleUsecase = Depends(get_article_usecase),
):
    try:
        articles, next_cursor = await usecase.fetch(page.cursor, page.num)
    except EnrichmentError as exc:
        # Serve the page as stored, without a way to continue from it.
        logger.warning("Serving %d article(s) without author details", len(exc.articles))
        articles, next_cursor = exc.articles, ""
    if next_cursor:
        response.headers["X-Cursor"] = next_cursor
    return articles

@router.get("/title/{title}", response_model=ArticleResponse)
async def get_article_by_title(title: str, usecase: ArticleUsecase = Depends(get_article_usecase)):
    return await usecase.get_by_title(title)

@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: int, usecase: ArticleUsecase = Depends(get_article_usecase)):
    return await usecase.get_by_id(article_id)

@router.post("", status_code=201, response_model=ArticleResponse)
async def store_article(data: ArticleCreate, usecase: ArticleUsecase = Depends(get_article_usecase)):
    article = data.to_entity()
    await usecase.store(article)
    return article

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int, data: ArticleUpdate, usecase: ArticleUsecase = Depends(get_article_usecase)
):
    await usecase.update(data.to_entity(article_id))
    return await usecase.get_by_id(article_id)

@router.delete("/{article_id}", status_code=204)
async def delete_article(article_id: int, usecase: ArticleUsecase = Depends(get_article_usecase)):
    await usecase.delete(article_id)

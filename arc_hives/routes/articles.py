"""Article routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from arc_hives.dependencies import get_file_storage, get_store
from arc_hives.schemas.article import ArticleCreate, ArticleList, ArticleOut, ArticlePublished
from arc_hives.schemas.comment import CommentOut
from arc_hives.services.articles import publish_article
from arc_hives.services.file_storage import FileStorage
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])

# Single-article lookup by query string, kept for existing frontends
legacy_router = APIRouter(tags=["articles"])


def _published(article) -> ArticlePublished:
    return ArticlePublished(
        article_id=article.id,
        fingerprint=article.fingerprint,
        article=ArticleOut.model_validate(article),
    )


@router.post("", response_model=ArticlePublished)
def create_article(
    data: ArticleCreate,
    store: ArticleStore = Depends(get_store),
):
    """Publish an article from inline text."""
    article = publish_article(
        store,
        title=data.title,
        content=data.content,
        authors=data.authors,
        original_link=data.original_link,
        bibliography=data.bibliography,
    )
    return _published(article)


@router.post("/upload", response_model=ArticlePublished)
async def upload_article(
    file: UploadFile = File(...),
    title: str = Form(...),
    authors: Optional[str] = Form(None),
    original_link: Optional[str] = Form(None),
    bibliography: Optional[str] = Form(None),
    store: ArticleStore = Depends(get_store),
    file_storage: FileStorage = Depends(get_file_storage),
):
    """
    Publish an article from an uploaded file.

    Args:
        file: Uploaded article file (PDF, text or any other format)
        title: Article title
        authors: Author names (optional)
        original_link: Link to the original publication (optional)
        bibliography: JSON-encoded bibliography (optional)

    Returns:
        ArticlePublished with the article id and its fingerprint
    """
    file_data = await file.read()
    logger.info(f"Received upload {file.filename} ({len(file_data)} bytes)")

    article = publish_article(
        store,
        title=title,
        file_data=file_data,
        filename=file.filename,
        content_type=file.content_type,
        file_storage=file_storage,
        authors=authors,
        original_link=original_link,
        bibliography=bibliography,
    )
    return _published(article)


@router.get("", response_model=ArticleList)
def list_articles(store: ArticleStore = Depends(get_store)):
    """List all articles, newest first."""
    articles = store.list_articles()
    return ArticleList(articles=[ArticleOut.model_validate(a) for a in articles])


@router.get("/{article_id}", response_model=ArticleOut)
def get_article(article_id: int, store: ArticleStore = Depends(get_store)):
    return ArticleOut.model_validate(store.get_by_id(article_id))


@router.get("/{article_id}/comments", response_model=List[CommentOut])
def list_article_comments(article_id: int, store: ArticleStore = Depends(get_store)):
    """Comments for an article, oldest first."""
    return [CommentOut.model_validate(c) for c in store.list_comments(article_id)]


@legacy_router.get("/article", response_model=ArticleOut)
def get_article_by_query(id: int, store: ArticleStore = Depends(get_store)):
    return ArticleOut.model_validate(store.get_by_id(id))

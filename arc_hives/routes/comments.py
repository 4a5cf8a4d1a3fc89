"""Comment routes."""

import logging

from fastapi import APIRouter, Depends

from arc_hives.dependencies import get_store
from arc_hives.schemas.comment import CommentCreate, CommentOut, CommentSubmitted
from arc_hives.services.comments import submit_comment
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["comments"])


@router.post("/comments", response_model=CommentSubmitted)
@router.post("/add-comment", response_model=CommentSubmitted, include_in_schema=False)
def add_comment(
    data: CommentCreate,
    store: ArticleStore = Depends(get_store),
):
    """Submit a scored comment, optionally spending points on the article."""
    result = submit_comment(store, data)
    return CommentSubmitted(
        points=result.score,
        spend_applied=result.spend_applied,
        article_points=result.article_points,
        comment=CommentOut.model_validate(result.comment),
    )

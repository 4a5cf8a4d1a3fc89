"""Comment submission: scoring, optional point spend and article totals."""

import logging
from dataclasses import dataclass
from typing import Optional

from arc_hives.errors import ArcHivesError, ValidationError
from arc_hives.models.comment import ANONYMOUS, Comment
from arc_hives.schemas.comment import CommentCreate
from arc_hives.services.scoring import ScoringEngine, parse_spend, round2, score_comment
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)


@dataclass
class CommentResult:
    score: float
    spend_applied: float
    article_points: Optional[float]
    comment: Comment


def submit_comment(store: ArticleStore, data: CommentCreate) -> CommentResult:
    """
    Store a scored comment and fold its score into the article total.

    Spends backed by a member are checked against and deducted from that
    member's balance together with the comment insert. Spends without a
    member are applied to the article total unbacked.

    Updating the article total happens after the comment is committed and is
    not fatal: on failure the error is logged and article_points is None.

    Raises:
        ValidationError: On missing fields or an invalid spend, before any store access
        NotFound: If the article or the spending member does not exist
        InsufficientBalance: If the member cannot cover the spend
        StoreUnavailable: If the comment cannot be stored
    """
    if data.article_id is None or not data.body:
        raise ValidationError("article_id and body are required")
    spend = parse_spend(data.spend_points, data.spend_direction, data.member_id)

    article_id = store.get_by_id(data.article_id).id

    citations = max(0, data.citation_count or 0)
    score = score_comment(len(data.body), citations, data.discloses_identity)

    comment = Comment(
        article_id=article_id,
        commenter_name=data.commenter_name or ANONYMOUS,
        body=data.body,
        citation_count=citations,
        discloses_identity=bool(data.discloses_identity),
        score=score,
    )
    comment = store.add_comment(
        comment,
        spender_id=data.member_id if spend else None,
        spend_amount=spend.amount if spend else 0.0,
    )

    spend_applied = spend.signed_amount if spend else 0.0
    if spend and data.member_id is None:
        logger.warning(f"Anonymous spend of {spend_applied:+} on article {article_id}")

    article_points = None
    try:
        article_points = ScoringEngine(store).apply(article_id, round2(score + spend_applied))
    except ArcHivesError as e:
        logger.error(f"Non-fatal error updating points for article {article_id}: {e.message}")

    return CommentResult(
        score=score,
        spend_applied=spend_applied,
        article_points=article_points,
        comment=comment,
    )

"""SQLAlchemy-backed store adapter for articles, comments and member balances."""

import functools
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_random

from arc_hives.config import settings
from arc_hives.errors import ArcHivesError, Conflict, InsufficientBalance, NotFound, StoreUnavailable
from arc_hives.models.article import Article
from arc_hives.models.comment import Comment
from arc_hives.models.member import Member
from arc_hives.services.file_storage import FileStorage
from arc_hives.services.scoring import round2

logger = logging.getLogger(__name__)


class StaleWrite(Exception):
    """A compare-and-set lost to a concurrent writer."""


def store_operation(name: str):
    """Roll back on failure and surface database errors as StoreUnavailable."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except ArcHivesError:
                self.db.rollback()
                raise
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Store operation {name} failed: {e}")
                raise StoreUnavailable(f"Database error during {name}", operation=name) from e

        return wrapper

    return decorator


class ArticleStore:
    """Persistence boundary used by the certificate issuer and scoring engine."""

    def __init__(self, db: Session, file_storage: Optional[FileStorage] = None):
        self.db = db
        self.file_storage = file_storage
        self.max_cas_attempts = settings.POINTS_CAS_MAX_ATTEMPTS

    # Articles

    @store_operation("create")
    def create(self, article: Article) -> Article:
        """
        Insert a new article.

        Raises:
            Conflict: If an article with the same fingerprint already exists
            StoreUnavailable: On any other database error
        """
        self.db.add(article)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Duplicate fingerprint rejected: {article.fingerprint[:16]}")
            raise Conflict("This exact content was already published", operation="create") from e
        self.db.refresh(article)
        logger.info(f"Created article {article.id}")
        return article

    @store_operation("get_by_id")
    def get_by_id(self, article_id: int) -> Article:
        article = self.db.query(Article).filter(Article.id == article_id).first()
        if not article:
            raise NotFound(f"Article {article_id} not found", operation="get_by_id")
        if self._normalize_file_reference(article):
            self.db.commit()
        return article

    @store_operation("get_by_fingerprint")
    def get_by_fingerprint(self, fingerprint: str) -> Optional[Article]:
        return self.db.query(Article).filter(Article.fingerprint == fingerprint).first()

    @store_operation("list_articles")
    def list_articles(self) -> List[Article]:
        articles = self.db.query(Article).order_by(Article.created_at.desc(), Article.id.desc()).all()
        fixed = [a for a in articles if self._normalize_file_reference(a)]
        if fixed:
            self.db.commit()
        return articles

    @store_operation("set_certificate_id")
    def set_certificate_id(self, article_id: int, certificate_id: str) -> str:
        """
        Attach a certificate id unless one is already set.

        Returns:
            The certificate id actually stored on the article, which is the
            one written by a concurrent caller if that caller got there first
        """
        updated = (
            self.db.query(Article)
            .filter(Article.id == article_id, Article.certificate_id.is_(None))
            .update({Article.certificate_id: certificate_id}, synchronize_session=False)
        )
        self.db.commit()
        if updated:
            return certificate_id

        current = self.db.query(Article.certificate_id).filter(Article.id == article_id).scalar()
        if current is None:
            raise NotFound(f"Article {article_id} not found", operation="set_certificate_id")
        logger.info(f"Article {article_id} was certified concurrently, keeping {current}")
        return current

    @store_operation("add_points")
    def add_points(self, article_id: int, delta: float) -> float:
        """Add delta to the article total with compare-and-set, flooring at zero."""
        try:
            for attempt in self._cas_attempts():
                with attempt:
                    new_total = self._try_add_points(article_id, delta)
        except StaleWrite as e:
            raise StoreUnavailable(
                f"Article {article_id} points kept changing underneath the update",
                operation="add_points",
            ) from e
        self.db.commit()
        return new_total

    def _try_add_points(self, article_id: int, delta: float) -> float:
        row = self.db.query(Article.points).filter(Article.id == article_id).first()
        if row is None:
            raise NotFound(f"Article {article_id} not found", operation="add_points")

        current = row.points if row.points is not None else 0.0
        new_total = max(0.0, round2(current + delta))

        unchanged = Article.points.is_(None) if row.points is None else Article.points == row.points
        updated = (
            self.db.query(Article)
            .filter(Article.id == article_id, unchanged)
            .update({Article.points: new_total}, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            raise StaleWrite(f"article {article_id}")
        return new_total

    # Comments

    @store_operation("add_comment")
    def add_comment(
        self,
        comment: Comment,
        spender_id: Optional[int] = None,
        spend_amount: float = 0.0,
    ) -> Comment:
        """
        Insert a comment, deducting spend_amount from the spender in the same transaction.

        Raises:
            NotFound: If the spender does not exist
            InsufficientBalance: If the spender's balance is below spend_amount
        """
        if spender_id is not None:
            try:
                for attempt in self._cas_attempts():
                    with attempt:
                        new_balance = self._try_deduct(spender_id, spend_amount)
            except StaleWrite as e:
                raise StoreUnavailable(
                    f"Member {spender_id} balance kept changing underneath the update",
                    operation="add_comment",
                ) from e
            logger.info(f"Member {spender_id} spent {spend_amount}, balance now {new_balance}")

        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(f"Stored comment {comment.id} on article {comment.article_id}")
        return comment

    def _try_deduct(self, member_id: int, amount: float) -> float:
        row = self.db.query(Member.points).filter(Member.id == member_id).first()
        if row is None:
            raise NotFound(f"Member {member_id} not found", operation="add_comment")

        balance = row.points if row.points is not None else 0.0
        if balance < amount:
            raise InsufficientBalance(
                f"Member {member_id} has {balance} points, cannot spend {amount}",
                operation="add_comment",
            )

        new_balance = max(0.0, round2(balance - amount))
        unchanged = Member.points.is_(None) if row.points is None else Member.points == row.points
        updated = (
            self.db.query(Member)
            .filter(Member.id == member_id, unchanged)
            .update({Member.points: new_balance}, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            raise StaleWrite(f"member {member_id}")
        return new_balance

    @store_operation("list_comments")
    def list_comments(self, article_id: int) -> List[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.article_id == article_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )

    def _cas_attempts(self) -> Retrying:
        return Retrying(
            retry=retry_if_exception_type(StaleWrite),
            stop=stop_after_attempt(self.max_cas_attempts),
            wait=wait_random(0, 0.05),
            before_sleep=lambda state: logger.warning(
                f"Compare-and-set conflict, retrying (attempt {state.attempt_number})"
            ),
            reraise=True,
        )

    def _normalize_file_reference(self, article: Article) -> bool:
        """Rewrite a stored file reference that is not a usable absolute URL."""
        if not article.file_url or self.file_storage is None:
            return False
        resolved = self.file_storage.public_url(article.file_url)
        if resolved == article.file_url:
            return False
        logger.info(f"Normalized file reference for article {article.id}")
        article.file_url = resolved
        return True

"""SQLAlchemy ORM models."""

from arc_hives.models.article import Article
from arc_hives.models.comment import Comment
from arc_hives.models.member import Member

__all__ = [
    "Article",
    "Comment",
    "Member",
]

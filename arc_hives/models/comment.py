"""Comment model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from arc_hives.database import Base

ANONYMOUS = "Anonymous"


class Comment(Base):
    """Scored comment on an article. Immutable once stored."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    commenter_name = Column(Text, nullable=False, default=ANONYMOUS)
    body = Column(Text, nullable=False)
    citation_count = Column(Integer, nullable=False, default=0)
    discloses_identity = Column(Boolean, nullable=False, default=False)
    score = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

    article = relationship("Article", back_populates="comments")

    __table_args__ = (
        Index("idx_comments_article_id", "article_id"),
    )

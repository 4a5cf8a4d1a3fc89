"""Article model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship

from arc_hives.database import Base


class Article(Base):
    """Published article with its content fingerprint."""

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    authors = Column(Text)
    original_link = Column(Text)
    bibliography = Column(JSON, default=list)
    content = Column(Text)
    file_url = Column(Text)
    fingerprint = Column(String(64), nullable=False, unique=True)
    certificate_id = Column(String(36), unique=True)
    points = Column(Float, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    comments = relationship("Comment", back_populates="article", cascade="all, delete-orphan")

"""Article-related Pydantic schemas."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ArticleCreate(BaseModel):
    """Schema for publishing an article from inline text."""

    title: str
    content: str
    authors: Optional[str] = None
    original_link: Optional[str] = None
    bibliography: Optional[Any] = None


class ArticleOut(BaseModel):
    """Public article fields. The fingerprint is never exposed here."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    authors: Optional[str] = None
    original_link: Optional[str] = None
    bibliography: List[Any] = []
    file_url: Optional[str] = None
    content: Optional[str] = None
    points: float = 0.0
    certificate_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("points", mode="before")
    @classmethod
    def _missing_points_are_zero(cls, value):
        return 0.0 if value is None else value

    @field_validator("bibliography", mode="before")
    @classmethod
    def _missing_bibliography_is_empty(cls, value):
        return [] if value is None else value


class ArticlePublished(BaseModel):
    """Response after publishing an article."""

    success: bool = True
    article_id: int
    fingerprint: str
    article: ArticleOut


class ArticleList(BaseModel):
    success: bool = True
    articles: List[ArticleOut]

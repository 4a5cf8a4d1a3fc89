"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for submitting a comment, with an optional point spend.

    The older field names (comment, citations_count, has_identifying_info)
    are still accepted.
    """

    article_id: Optional[int] = None
    body: Optional[str] = Field(None, validation_alias=AliasChoices("body", "comment"))
    commenter_name: Optional[str] = None
    citation_count: int = Field(0, validation_alias=AliasChoices("citation_count", "citations_count"))
    discloses_identity: bool = Field(
        False, validation_alias=AliasChoices("discloses_identity", "has_identifying_info")
    )
    member_id: Optional[int] = None
    spend_points: Optional[float] = None
    spend_direction: Optional[str] = None


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    article_id: int
    commenter_name: str
    body: str
    citation_count: int
    discloses_identity: bool
    score: float
    created_at: Optional[datetime] = None


class CommentSubmitted(BaseModel):
    """Response after submitting a comment.

    article_points is None when the article total could not be updated;
    the comment itself is stored regardless.
    """

    success: bool = True
    points: float
    spend_applied: float
    article_points: Optional[float] = None
    comment: CommentOut

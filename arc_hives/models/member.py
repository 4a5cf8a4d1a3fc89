"""Member model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, Text

from arc_hives.database import Base


class Member(Base):
    """Member holding a spendable point balance. Provisioned outside this service."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text)
    points = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

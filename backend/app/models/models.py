"""
Database models using SQLAlchemy
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Document(Base):
    """Documentation pages fetched by the ingestion job"""
    __tablename__ = 'wxo_docs'

    id = Column(Integer, primary_key=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    url = Column(String(1000), nullable=False, unique=True)

    # Timestamps
    created_at = Column(DateTime, default=_utcnow)


class Feedback(Base):
    """User feedback about agent replies"""
    __tablename__ = 'feedback'

    id = Column(Integer, primary_key=True)
    session_id = Column(String(200), nullable=False, index=True)
    message_id = Column(String(100))
    rating = Column(Integer, nullable=False)
    comment = Column(Text)

    # Timestamps
    created_at = Column(DateTime, default=_utcnow)

    # Constraints
    __table_args__ = (
        CheckConstraint('rating BETWEEN 1 AND 5', name='check_rating_range'),
    )

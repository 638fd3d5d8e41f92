"""
Documentation store and feedback log backed by SQLAlchemy
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.models import Document, Feedback

logger = logging.getLogger(__name__)


def upsert_document(db: Session, title: str, content: str, category: str, url: str) -> Document:
    """Insert a documentation page, replacing any existing row with the same url"""
    document = db.query(Document).filter_by(url=url).first()
    if document is None:
        document = Document(url=url)
        db.add(document)

    document.title = title
    document.content = content
    document.category = category
    db.commit()
    db.refresh(document)
    return document


def list_documents(db: Session, category: Optional[str] = None) -> List[Document]:
    query = db.query(Document)
    if category:
        query = query.filter(Document.category == category)
    return query.order_by(Document.category, Document.title).all()


def save_feedback(
    db: Session,
    session_id: str,
    rating: int,
    message_id: Optional[str] = None,
    comment: Optional[str] = None,
) -> Feedback:
    feedback = Feedback(session_id=session_id, rating=rating, message_id=message_id, comment=comment)
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback

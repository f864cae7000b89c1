"""
Memory and comment services: search, nested comment aggregation and creation.
"""
import datetime as dt
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from memorial import messages
from memorial.models.comment import Comment
from memorial.models.memory import Memory
from memorial.schemas.comment import CommentOut
from memorial.schemas.memory import MemoryOut


# Largest integer SQLite can bind; ids above it cannot exist
MAX_ID = 2**63 - 1


class InvalidInput(Exception):
    """Raised when a create request is missing data or carries malformed values."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MemoryNotFound(Exception):
    def __init__(self, memory_id: int):
        super().__init__(f"Memory {memory_id} not found")
        self.memory_id = memory_id


def require_text(*values: Optional[str]) -> List[str]:
    """Strip each value, raising InvalidInput if any of them ends up empty."""
    cleaned = [(value or "").strip() for value in values]
    if not all(cleaned):
        raise InvalidInput(messages.MISSING_FIELDS)
    return cleaned


def parse_date(value: Optional[str]) -> Optional[dt.date]:
    """Parse an ISO ``YYYY-MM-DD`` date; blank means no date."""
    if value is None or not value.strip():
        return None
    try:
        return dt.date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidInput(messages.INVALID_DATE)


def _to_memory_out(memory: Memory, comments: Iterable[Comment]) -> MemoryOut:
    return MemoryOut(
        id=memory.id,
        title=memory.title,
        story=memory.story,
        author=memory.author,
        date=memory.date,
        image_url=memory.image_url,
        created_at=memory.created_at,
        comments=[CommentOut.model_validate(c) for c in comments],
    )


def _comments_by_memory(db: Session, memory_ids: List[int]) -> Dict[int, List[Comment]]:
    grouped: Dict[int, List[Comment]] = defaultdict(list)
    if not memory_ids:
        return grouped

    rows = db.query(Comment).filter(
        Comment.memory_id.in_(memory_ids)
    ).order_by(
        Comment.created_at.asc(),
        Comment.id.asc()
    ).all()

    for comment in rows:
        grouped[comment.memory_id].append(comment)
    return grouped


def list_memories(db: Session, search: Optional[str] = None) -> List[MemoryOut]:
    """
    Get memories newest first, each with its comments oldest first.

    Args:
        db: Database session
        search: Optional term matched case-insensitively as a substring of
            the title, story or author

    Returns:
        List of memories with nested comments
    """
    query = db.query(Memory)
    if search:
        query = query.filter(or_(
            Memory.title.icontains(search, autoescape=True),
            Memory.story.icontains(search, autoescape=True),
            Memory.author.icontains(search, autoescape=True),
        ))

    memories = query.order_by(Memory.created_at.desc(), Memory.id.desc()).all()
    comments = _comments_by_memory(db, [m.id for m in memories])

    return [_to_memory_out(m, comments.get(m.id, [])) for m in memories]


def create_memory(
    db: Session,
    title: str,
    story: str,
    author: str,
    date: Optional[dt.date] = None,
    image_url: Optional[str] = None,
) -> MemoryOut:
    memory = Memory(
        title=title,
        story=story,
        author=author,
        date=date,
        image_url=image_url,
    )
    db.add(memory)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(memory)
    return _to_memory_out(memory, [])


def create_comment(db: Session, memory_id: int, author: str, text: str) -> CommentOut:
    """
    Attach a comment to an existing memory.

    Raises:
        MemoryNotFound: If no memory has the given id
    """
    if not 1 <= memory_id <= MAX_ID or db.get(Memory, memory_id) is None:
        raise MemoryNotFound(memory_id)

    comment = Comment(memory_id=memory_id, author=author, text=text)
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(comment)
    return CommentOut.model_validate(comment)

from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from memorial.database import Base


class Memory(Base):
    __tablename__ = "memories"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    story = Column(Text, nullable=False)
    author = Column(String(100), nullable=False)
    date = Column(Date, nullable=True)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    comments = relationship(
        "Comment",
        back_populates="memory",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

from pydantic import BaseModel
from typing import List, Optional
import datetime as dt

from memorial.schemas.comment import CommentOut


class MemoryOut(BaseModel):
    id: int
    title: str
    story: str
    author: str
    date: Optional[dt.date] = None
    image_url: Optional[str] = None
    created_at: dt.datetime
    comments: List[CommentOut] = []

    class Config:
        from_attributes = True

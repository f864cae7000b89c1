from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional

from memorial import messages
from memorial.database import get_db
from memorial.memorial_logger import logger
from memorial.schemas.comment import CommentCreate, CommentOut
from memorial.schemas.memory import MemoryOut
from memorial.services import memory_service, upload_service
from memorial.services.memory_service import InvalidInput, MemoryNotFound
from memorial.services.upload_service import UploadRejected

router = APIRouter(prefix="/api/memories", tags=["Memories"])


@router.get("", response_model=List[MemoryOut], summary="List memories")
def get_memories(
    search: Optional[str] = Query(None, description="Case-insensitive text to look for in title, story or author"),
    db: Session = Depends(get_db)
):
    """
    Get all memories, newest first, each with its comments in the order they were written.
    """
    try:
        return memory_service.list_memories(db, search)
    except SQLAlchemyError:
        logger.exception("Failed to load memories")
        raise HTTPException(status_code=500, detail=messages.LOAD_MEMORIES_FAILED)


@router.post("", response_model=MemoryOut, summary="Create a memory")
def create_memory(
    request: Request,
    title: Optional[str] = Form(None),
    story: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db)
):
    """
    Create a memory from a multipart form, with an optional image.

    Nothing is stored unless the fields and the image are all valid.
    """
    try:
        title, story, author = memory_service.require_text(title, story, author)
        memory_date = memory_service.parse_date(date)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=e.message)

    upload_dir = request.app.state.settings.UPLOAD_DIR
    image_url = None
    if image and image.filename:
        try:
            image_url = upload_service.save_image(image.file, image.content_type, image.filename, upload_dir)
        except UploadRejected as e:
            logger.info(f"Rejected upload {image.filename}: {e.message}")
            raise HTTPException(status_code=400, detail=e.message)
        except OSError:
            logger.exception("Failed to store uploaded image")
            raise HTTPException(status_code=500, detail=messages.ADD_MEMORY_FAILED)

    try:
        return memory_service.create_memory(db, title, story, author, memory_date, image_url)
    except SQLAlchemyError:
        logger.exception("Failed to create memory")
        upload_service.remove_image(image_url, upload_dir)
        raise HTTPException(status_code=500, detail=messages.ADD_MEMORY_FAILED)


@router.post("/{memory_id}/comments", response_model=CommentOut, summary="Comment on a memory")
def create_comment(memory_id: int, comment: CommentCreate, db: Session = Depends(get_db)):
    try:
        author, text = memory_service.require_text(comment.author, comment.text)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=e.message)

    try:
        return memory_service.create_comment(db, memory_id, author, text)
    except MemoryNotFound:
        raise HTTPException(status_code=404, detail=messages.MEMORY_NOT_FOUND)
    except SQLAlchemyError:
        logger.exception(f"Failed to add comment to memory {memory_id}")
        raise HTTPException(status_code=500, detail=messages.ADD_COMMENT_FAILED)

import mimetypes

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

from memorial import messages

router = APIRouter(tags=["Media"])


@router.get("/uploads/{filename}")
async def get_uploaded_image(filename: str, request: Request):
    """Serve an image stored by the upload handler."""
    upload_dir = request.app.state.settings.UPLOAD_DIR
    file_path = upload_dir / filename

    # Keep requests inside the upload directory
    try:
        file_path.resolve().relative_to(upload_dir.resolve())
    except ValueError:
        raise HTTPException(status_code=403, detail=messages.ACCESS_DENIED)

    if not file_path.exists() or not file_path.is_file():
        raise HTTPException(status_code=404, detail=messages.FILE_NOT_FOUND)

    mime_type, _ = mimetypes.guess_type(str(file_path))
    if mime_type is None:
        mime_type = "application/octet-stream"

    return FileResponse(path=str(file_path), media_type=mime_type)

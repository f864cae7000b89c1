"""
Serves the built single-page client.

Any GET that no other route handles returns a file from the build directory
when one exists at that path, and the client's ``index.html`` otherwise, so
client-side routes survive a page reload.
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

from memorial import messages

router = APIRouter(tags=["Client"])


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str, request: Request):
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    build_dir = request.app.state.settings.CLIENT_BUILD_DIR.resolve()

    if full_path:
        file_path = (build_dir / full_path).resolve()
        try:
            file_path.relative_to(build_dir)
        except ValueError:
            raise HTTPException(status_code=403, detail=messages.ACCESS_DENIED)
        if file_path.is_file():
            return FileResponse(path=str(file_path))

    index_path = build_dir / "index.html"
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path=str(index_path), media_type="text/html")

"""MemoryRepository backed by the memorial HTTP API."""

import datetime as dt
from typing import Any, Dict, List, Optional, Union

import requests

from memorial.client.repository import ImageFile, MemoryRepository, RepositoryError
from memorial.memorial_logger import logger

REQUEST_TIMEOUT = 30


class ApiMemoryRepository(MemoryRepository):
    """Talks to ``/api/memories`` over HTTP.

    ``session`` defaults to a ``requests.Session``; anything with the same
    ``get``/``post`` surface can stand in for it.
    """

    def __init__(self, base_url: str, session=None, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _handle(self, response) -> Any:
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning(f"API call failed with {response.status_code}: {message}")
            raise RepositoryError(message or f"HTTP {response.status_code}", response.status_code)
        return response.json()

    def list_memories(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        response = self.session.get(self._url("/api/memories"), params=params, timeout=self.timeout)
        return self._handle(response)

    def create_memory(
        self,
        title: str,
        story: str,
        author: str,
        date: Union[str, dt.date, None] = None,
        image: Optional[ImageFile] = None,
    ) -> Dict[str, Any]:
        if isinstance(date, dt.date):
            date = date.isoformat()
        form = {"title": title, "story": story, "author": author, "date": date or ""}
        files = None
        if image is not None:
            files = {"image": (image.filename, image.content, image.content_type)}

        response = self.session.post(self._url("/api/memories"), data=form, files=files, timeout=self.timeout)
        return self._handle(response)

    def add_comment(self, memory_id: int, author: str, text: str) -> Dict[str, Any]:
        response = self.session.post(
            self._url(f"/api/memories/{memory_id}/comments"),
            json={"author": author, "text": text},
            timeout=self.timeout,
        )
        return self._handle(response)

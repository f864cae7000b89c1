"""In-memory implementation of MemoryRepository for demo mode."""

import copy
import datetime as dt
from typing import Any, Dict, List, Optional, Union

from memorial import messages
from memorial.client.repository import ImageFile, MemoryRepository, RepositoryError
from memorial.services import upload_service

SAMPLE_MEMORIES = [
    {
        "id": 1,
        "title": "יום הגיוס",
        "date": "2022-07-15",
        "story": "היום שבו התחיל את שירותו הצבאי. היה כל כך גאה ונחוש לשרת את המדינה. זכור אותו עומד בגאווה עם המדים החדשים.",
        "author": "אמא",
        "image_url": None,
        "created_at": "2024-01-14T09:00:00",
        "comments": [
            {"id": 1, "memory_id": 1, "author": "אבא", "text": "זכור אותו כל כך נרגש באותו יום", "created_at": "2024-01-15T09:00:00"},
            {"id": 2, "memory_id": 1, "author": "אחות", "text": "תמיד הסתכלתי עליו בהערצה", "created_at": "2024-01-16T09:00:00"},
        ],
    },
    {
        "id": 2,
        "title": "חופשה בצפון",
        "date": "2023-03-20",
        "story": "הטיול המשפחתי האחרון שלנו לכנרת. איך הוא אהב את הטבע ואת הזמן המשותף. שם ליד המים, צוחק עם כולנו.",
        "author": "דוד",
        "image_url": None,
        "created_at": "2024-01-13T09:00:00",
        "comments": [
            {"id": 3, "memory_id": 2, "author": "דודה", "text": "איך הוא צחק כל הזמן באותו טיול", "created_at": "2024-01-17T09:00:00"},
        ],
    },
]


def _now() -> str:
    return dt.datetime.now().isoformat()


class InMemoryMemoryRepository(MemoryRepository):
    """Keeps memories in a list, newest first, for use without a backend.

    Applies the same validation and search rules as the API. Results are
    copies; changing them does not change the stored state.
    """

    def __init__(self, memories: Optional[List[Dict[str, Any]]] = None):
        seed = SAMPLE_MEMORIES if memories is None else memories
        self._memories: List[Dict[str, Any]] = sorted(
            copy.deepcopy(seed), key=lambda m: (m["created_at"], m["id"]), reverse=True
        )
        for memory in self._memories:
            memory["comments"].sort(key=lambda c: (c["created_at"], c["id"]))
        self._images: Dict[str, bytes] = {}
        self._next_memory_id = max((m["id"] for m in self._memories), default=0) + 1
        self._next_comment_id = max(
            (c["id"] for m in self._memories for c in m["comments"]), default=0
        ) + 1

    @staticmethod
    def _matches(memory: Dict[str, Any], term: str) -> bool:
        term = term.casefold()
        return any(term in memory[field].casefold() for field in ("title", "story", "author"))

    def list_memories(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        found = [m for m in self._memories if not search or self._matches(m, search)]
        return copy.deepcopy(found)

    def create_memory(
        self,
        title: str,
        story: str,
        author: str,
        date: Union[str, dt.date, None] = None,
        image: Optional[ImageFile] = None,
    ) -> Dict[str, Any]:
        title, story, author = [(value or "").strip() for value in (title, story, author)]
        if not (title and story and author):
            raise RepositoryError(messages.MISSING_FIELDS, 400)

        if isinstance(date, str):
            try:
                date = dt.date.fromisoformat(date) if date.strip() else None
            except ValueError:
                raise RepositoryError(messages.INVALID_DATE, 400)

        image_url = None
        if image is not None:
            try:
                upload_service.check_content_type(image.content_type)
                upload_service.check_size(len(image.content))
            except upload_service.UploadRejected as e:
                raise RepositoryError(e.message, 400)
            image_url = upload_service.URL_PREFIX + upload_service.build_filename(image.filename)
            self._images[image_url] = image.content

        memory = {
            "id": self._next_memory_id,
            "title": title,
            "story": story,
            "author": author,
            "date": date.isoformat() if date else None,
            "image_url": image_url,
            "created_at": _now(),
            "comments": [],
        }
        self._next_memory_id += 1
        self._memories.insert(0, memory)
        return copy.deepcopy(memory)

    def add_comment(self, memory_id: int, author: str, text: str) -> Dict[str, Any]:
        author, text = (author or "").strip(), (text or "").strip()
        if not (author and text):
            raise RepositoryError(messages.MISSING_FIELDS, 400)

        memory = next((m for m in self._memories if m["id"] == memory_id), None)
        if memory is None:
            raise RepositoryError(messages.MEMORY_NOT_FOUND, 404)

        comment = {
            "id": self._next_comment_id,
            "memory_id": memory_id,
            "author": author,
            "text": text,
            "created_at": _now(),
        }
        self._next_comment_id += 1
        memory["comments"].append(comment)
        return copy.deepcopy(comment)

    def get_image(self, image_url: str) -> Optional[bytes]:
        """Bytes of an image added in this session, by its reference URL."""
        return self._images.get(image_url)

"""MemoryRepository abstract interface used by the client view."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import datetime as dt
from typing import Any, Dict, List, Optional, Union


@dataclass
class ImageFile:
    """An image picked in the client, before it is uploaded."""

    filename: str
    content: bytes
    content_type: str


class RepositoryError(Exception):
    """A rejected or failed repository call, with the message to show the user."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MemoryRepository(ABC):
    """Abstract access to memories and their comments.

    Memories and comments are plain dicts shaped like the API's JSON.
    """

    @abstractmethod
    def list_memories(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get memories newest first, optionally filtered by a search term."""
        pass

    @abstractmethod
    def create_memory(
        self,
        title: str,
        story: str,
        author: str,
        date: Union[str, dt.date, None] = None,
        image: Optional[ImageFile] = None,
    ) -> Dict[str, Any]:
        """Create a memory, returning it with its id and an empty comment list."""
        pass

    @abstractmethod
    def add_comment(self, memory_id: int, author: str, text: str) -> Dict[str, Any]:
        """Add a comment to a memory, returning the stored comment."""
        pass

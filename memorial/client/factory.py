from memorial.client.api import ApiMemoryRepository
from memorial.client.inmemory import InMemoryMemoryRepository
from memorial.client.repository import MemoryRepository
from memorial.config import Settings, settings as default_settings
from memorial.memorial_logger import logger


def get_repository(settings: Settings = None) -> MemoryRepository:
    """Pick the repository named by MEMORIAL_BACKEND: ``api`` or ``memory``."""
    settings = settings or default_settings
    backend = settings.MEMORIAL_BACKEND.lower()

    if backend == "api":
        logger.info(f"Using API repository at {settings.MEMORIAL_API_URL}")
        return ApiMemoryRepository(settings.MEMORIAL_API_URL)
    if backend == "memory":
        logger.info("Using in-memory demo repository")
        return InMemoryMemoryRepository()
    raise ValueError(f"Unknown MEMORIAL_BACKEND: {settings.MEMORIAL_BACKEND!r}")

"""Repository layer for data access.

This layer abstracts external dependencies (Ollama, Redis, the file system)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (file → Redis, Ollama → another runtime)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from interview_agent.config import settings
from interview_agent.protocols import BlobStore, TextGenerator

from .file_blob_store import JsonFileBlobStore
from .memory_blob_store import InMemoryBlobStore
from .ollama_text_generator import OllamaTextGenerator
from .redis_blob_store import RedisBlobStore


def create_blob_store(backend: str | None = None) -> BlobStore:
    """Create the snapshot store selected by configuration.

    Args:
        backend: "memory", "file" or "redis". Defaults to settings.storage_backend.

    Returns:
        A BlobStore implementation

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = backend or settings.storage_backend
    if backend == "memory":
        return InMemoryBlobStore()
    if backend == "file":
        return JsonFileBlobStore.create()
    if backend == "redis":
        return RedisBlobStore.create()
    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "BlobStore",
    "TextGenerator",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "OllamaTextGenerator",
    "RedisBlobStore",
    "create_blob_store",
]

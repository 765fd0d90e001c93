"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Ollama → another runtime, file → Redis, etc.)
- Unit testing with scripted fakes
- Clear separation of concerns

Usage:
    ```python
    from interview_agent.protocols import BlobStore, TextGenerator

    # Type hints work with any implementation
    store: BlobStore = JsonFileBlobStore(".interview_cache")  # works
    store: BlobStore = RedisBlobStore.create()                # also works
    ```
"""

from .blob_store import BlobStore
from .text_generator import TextGenerator

__all__ = [
    "BlobStore",
    "TextGenerator",
]

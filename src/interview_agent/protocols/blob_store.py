"""Blob storage protocol.

Defines the interface for the durable key-value store that holds the response
cache snapshot. A store maps a slot name to one serialized text blob.

Implementations can include:
- JSON files on disk (default)
- Redis
- An in-memory dict (tests, throwaway sessions)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for durable key-value blob stores.

    Example:
        ```python
        from interview_agent.protocols import BlobStore

        store: BlobStore = JsonFileBlobStore(".interview_cache")
        store: BlobStore = RedisBlobStore.create()
        ```
    """

    def store_blob(self, slot_name: str, text: str) -> None:
        """Write a blob, replacing any previous content of the slot.

        Args:
            slot_name: Name of the slot
            text: Serialized content

        Raises:
            StorageError: If the store cannot be written
        """
        ...

    def load_blob(self, slot_name: str) -> str | None:
        """Read a blob.

        Args:
            slot_name: Name of the slot

        Returns:
            The stored text, or None if the slot is empty

        Raises:
            StorageError: If the store cannot be read
        """
        ...

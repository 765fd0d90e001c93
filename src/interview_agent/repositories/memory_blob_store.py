"""In-memory implementation of BlobStore."""


class InMemoryBlobStore:
    """Dict-backed blob store; contents vanish with the process."""

    def __init__(self, blobs: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(blobs or {})

    def store_blob(self, slot_name: str, text: str) -> None:
        self._blobs[slot_name] = text

    def load_blob(self, slot_name: str) -> str | None:
        return self._blobs.get(slot_name)

    def slots(self) -> list[str]:
        """Names of the slots holding a blob."""
        return sorted(self._blobs)

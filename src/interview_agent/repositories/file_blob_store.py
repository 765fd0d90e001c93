"""JSON file implementation of BlobStore.

Each slot is one ``<slot>.json`` file under a root directory. Writes go to a
temporary file first and are moved into place with ``os.replace``, so a crash
mid-write never leaves a truncated snapshot behind.
"""

import os
import re
from pathlib import Path
from uuid import uuid4

from interview_agent.config import settings
from interview_agent.errors import StorageError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileBlobStore:
    """File-system blob store.

    This class satisfies the BlobStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        """Initialize the file blob store.

        Args:
            root: Directory holding the slot files. Defaults to settings.storage_path.
                The directory is created on first write.
        """
        self._root = Path(root or settings.storage_path).resolve()

    @classmethod
    def create(cls, root: str | Path | None = None) -> "JsonFileBlobStore":
        """Factory method to create JsonFileBlobStore with defaults."""
        return cls(root=root)

    @property
    def root(self) -> Path:
        return self._root

    def _slot_path(self, slot_name: str) -> Path:
        return self._root / f"{_UNSAFE_CHARS.sub('_', slot_name)}.json"

    def store_blob(self, slot_name: str, text: str) -> None:
        path = self._slot_path(slot_name)
        tmp_path = path.with_name(f"{path.stem}.{uuid4().hex}.tmp")
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write slot {slot_name!r}: {e}") from e

    def load_blob(self, slot_name: str) -> str | None:
        path = self._slot_path(slot_name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read slot {slot_name!r}: {e}") from e

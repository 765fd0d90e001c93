"""Bounded LRU response cache.

Sits in front of the response generator: repeated or near-repeated
utterances are answered from here instead of calling the model again.
Keys are normalized (case-folded, trimmed, truncated) so phrasing that only
differs in case or surrounding whitespace, or only after the first
``key_length`` characters, lands in the same slot.
"""

import logging
import threading
from collections import OrderedDict

from pydantic import ValidationError

from interview_agent.config import settings
from interview_agent.entities import CacheEntryEntity
from interview_agent.errors import StorageError
from interview_agent.models import CacheSnapshot, CacheStats
from interview_agent.protocols import BlobStore

logger = logging.getLogger(__name__)


def normalize_key(text: str, length: int | None = None) -> str:
    """Derive the lookup key for an utterance.

    Args:
        text: Raw utterance text
        length: Prefix length to keep. Defaults to settings.cache_key_length.

    Returns:
        The case-folded, trimmed, prefix-truncated key
    """
    length = length or settings.cache_key_length
    return text.casefold().strip()[:length]


class ResponseCache:
    """Fixed-capacity LRU cache keyed by normalized utterance.

    Recency is refreshed by both ``get`` and ``set``; ``has`` is a read-only
    probe. When a new key is inserted at capacity, the least recently used
    entry is evicted. Updating an existing key never evicts.

    Example:
        ```python
        cache = ResponseCache(max_size=50, store=JsonFileBlobStore())
        cache.restore_snapshot()

        response = cache.get(utterance)
        if response is None:
            response = await generator.generate(utterance)
            cache.set(utterance, response)
            cache.persist_snapshot()
        ```
    """

    def __init__(
        self,
        max_size: int | None = None,
        key_length: int | None = None,
        store: BlobStore | None = None,
        slot_name: str | None = None,
    ) -> None:
        """Initialize the response cache.

        Args:
            max_size: Maximum number of entries. Defaults to settings.max_cache_size.
            key_length: Normalized key prefix length. Defaults to settings.cache_key_length.
            store: Durable store for snapshots. Without one, snapshots are only
                returned to the caller.
            slot_name: Store slot holding the snapshot. Defaults to settings.cache_slot_name.
        """
        self._max_size = max_size if max_size is not None else settings.max_cache_size
        if self._max_size < 1:
            raise ValueError("max_size must be at least 1")

        self._key_length = key_length or settings.cache_key_length
        self._store = store
        self._slot_name = slot_name or settings.cache_slot_name
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def _normalize(self, raw_key: str) -> str:
        return normalize_key(raw_key, self._key_length)

    def get(self, raw_key: str) -> str | None:
        """Look up a response and mark it most recently used.

        Args:
            raw_key: The raw utterance

        Returns:
            The cached response, or None on a miss
        """
        key = self._normalize(raw_key)
        with self._lock:
            if key in self._entries:
                self._hits += 1
                self._entries.move_to_end(key)
                logger.debug("Cache hit for %r", key[:40])
                return self._entries[key]

            self._misses += 1
            logger.debug("Cache miss for %r", key[:40])
            return None

    def set(self, raw_key: str, value: str) -> None:
        """Insert or update a response as the most recently used entry.

        Args:
            raw_key: The raw utterance
            value: The response to cache
        """
        key = self._normalize(raw_key)
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted least recently used entry %r", evicted[:40])

            self._entries[key] = value
            self._entries.move_to_end(key)

    def has(self, raw_key: str) -> bool:
        """Check for an entry without touching recency or counters."""
        key = self._normalize(raw_key)
        with self._lock:
            return key in self._entries

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def entries(self) -> list[CacheEntryEntity]:
        """Return all entries, least recently used first."""
        with self._lock:
            return [
                CacheEntryEntity(normalized_key=key, value=value)
                for key, value in self._entries.items()
            ]

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with size, hits, misses and hit_rate (a percentage
            string such as "66.67%", or "0%" before any lookup)
        """
        with self._lock:
            stats = CacheStats.from_counters(
                size=len(self._entries),
                hits=self._hits,
                misses=self._misses,
            )
        return stats.model_dump()

    def clear(self) -> None:
        """Remove all entries and reset the hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def persist_snapshot(self) -> str:
        """Serialize the cache and write it to the store, if one is configured.

        A store failure is logged and otherwise ignored.

        Returns:
            The serialized snapshot
        """
        with self._lock:
            snapshot = CacheSnapshot(entries=list(self._entries.items()))
        blob = snapshot.model_dump_json()

        if self._store is not None:
            try:
                self._store.store_blob(self._slot_name, blob)
            except StorageError as e:
                logger.warning("Failed to persist cache: %s", e)
            except Exception as e:
                logger.warning("Failed to persist cache (unexpected store error): %s", e)

        return blob

    def restore_snapshot(self, blob: str | None = None) -> bool:
        """Replace the cache contents with a snapshot.

        Args:
            blob: Serialized snapshot. If None, it is loaded from the store.

        Returns:
            True if a snapshot was restored. False if there was none or it
            could not be read; the cache is left empty in that case. Hit and miss
            counters are reset either way.
        """
        if blob is None:
            blob = self._load_from_store()

        restored: OrderedDict[str, str] = OrderedDict()
        if blob is not None:
            try:
                snapshot = CacheSnapshot.model_validate_json(blob)
            except ValidationError as e:
                logger.warning("Failed to restore cache, ignoring snapshot: %s", e)
                blob = None
            else:
                for raw_key, value in snapshot.entries:
                    # Keys written under another key length are re-derived
                    key = self._normalize(raw_key)
                    restored[key] = value
                    restored.move_to_end(key)
                while len(restored) > self._max_size:
                    restored.popitem(last=False)

        with self._lock:
            self._entries = restored
            self._hits = 0
            self._misses = 0

        if blob is not None:
            logger.info("Restored %d cached responses", len(restored))
        return blob is not None

    def _load_from_store(self) -> str | None:
        if self._store is None:
            return None
        try:
            return self._store.load_blob(self._slot_name)
        except StorageError as e:
            logger.warning("Failed to restore cache: %s", e)
        except Exception as e:
            logger.warning("Failed to restore cache (unexpected store error): %s", e)
        return None

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def store(self) -> BlobStore | None:
        """Get the underlying store (for testing)."""
        return self._store

"""Redis implementation of BlobStore.

Each slot is stored as a plain string value under ``<key_prefix><slot>``.
"""

import redis

from interview_agent.config import get_redis_client, settings
from interview_agent.errors import StorageError


class RedisBlobStore:
    """Redis blob store.

    This class satisfies the BlobStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis blob store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for slot keys. Defaults to settings.storage_key_prefix.
        """
        self._client = redis_client or get_redis_client()
        self._key_prefix = key_prefix if key_prefix is not None else settings.storage_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisBlobStore":
        """Factory method to create RedisBlobStore with defaults.

        Args:
            key_prefix: Slot key prefix. If None, uses settings.

        Returns:
            Configured RedisBlobStore
        """
        return cls(key_prefix=key_prefix)

    def _key(self, slot_name: str) -> str:
        return f"{self._key_prefix}{slot_name}"

    def store_blob(self, slot_name: str, text: str) -> None:
        try:
            self._client.set(self._key(slot_name), text.encode("utf-8"))
        except redis.RedisError as e:
            raise StorageError(f"Failed to write slot {slot_name!r}: {e}") from e

    def load_blob(self, slot_name: str) -> str | None:
        try:
            value = self._client.get(self._key(slot_name))
        except redis.RedisError as e:
            raise StorageError(f"Failed to read slot {slot_name!r}: {e}") from e

        if value is None:
            return None
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise StorageError(f"Slot {slot_name!r} is not valid UTF-8: {e}") from e
        return str(value)

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client

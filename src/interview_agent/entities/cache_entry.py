"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached utterance-response pair.

    Attributes:
        normalized_key: Case-folded, trimmed, prefix-truncated utterance. Used
            only as a lookup key, never displayed.
        value: The cached interviewer response
    """

    normalized_key: str
    value: str

"""Domain entities for internal representation.

These are plain dataclasses used internally by services and repositories.
Serialization to snapshot blobs and export documents lives in ``models``.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity
from .conversation import ConversationHistory, ConversationTurn, Role
from .generation import (
    GenerationAttempt,
    GenerationResult,
    ResponseSource,
    SamplingParams,
    ValidationResult,
)
from .session import SessionContext, TurnResult

__all__ = [
    "CacheEntryEntity",
    "ConversationHistory",
    "ConversationTurn",
    "GenerationAttempt",
    "GenerationResult",
    "ResponseSource",
    "Role",
    "SamplingParams",
    "SessionContext",
    "TurnResult",
    "ValidationResult",
]

"""Session domain entities."""

from dataclasses import dataclass, field

from .conversation import ConversationHistory
from .generation import ResponseSource


@dataclass
class SessionContext:
    """State owned by one interview session and passed to its collaborators.

    Attributes:
        history: The conversation so far, shared with the response generator
        is_active: True between ``start()`` and ``stop()``
        is_processing: True while one utterance-to-response cycle is running
        epoch: Incremented on stop and on clear; a generation that started
            under an older epoch is discarded when it resolves
    """

    history: ConversationHistory = field(default_factory=ConversationHistory)
    is_active: bool = False
    is_processing: bool = False
    epoch: int = 0

    def invalidate(self) -> int:
        """Advance the epoch so in-flight results become stale."""
        self.epoch += 1
        return self.epoch


@dataclass(frozen=True)
class TurnResult:
    """Response produced for one user utterance.

    Attributes:
        utterance: The user's input text
        response: The interviewer reply
        source: "cache", "model" or "fallback"
        response_time_ms: Wall time from input to response
    """

    utterance: str
    response: str
    source: ResponseSource | str
    response_time_ms: float

    @property
    def from_cache(self) -> bool:
        return self.source == "cache"

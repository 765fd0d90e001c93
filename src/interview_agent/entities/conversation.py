"""Conversation domain entities."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    AGENT = "agent"


@dataclass(frozen=True)
class ConversationTurn:
    """One utterance in the interview.

    Attributes:
        role: Who spoke (the candidate or the interviewer agent)
        text: The transcribed or generated text
    """

    role: Role
    text: str


class ConversationHistory:
    """Append-only, ordered sequence of conversation turns.

    Turns are never edited or removed one by one; the only way to shrink the
    history is ``clear()``, which resets it to empty.
    """

    def __init__(self, turns: list[ConversationTurn] | None = None) -> None:
        self._turns: list[ConversationTurn] = list(turns or [])

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    def clear(self) -> None:
        self._turns = []

    def recent(self, count: int) -> list[ConversationTurn]:
        """Return the last ``count`` turns, oldest first."""
        if count <= 0:
            return []
        return self._turns[-count:]

    def snapshot(self) -> list[ConversationTurn]:
        """Return an ordered copy of all turns."""
        return list(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(list(self._turns))

"""Heuristic fallback questions.

Used when every generation attempt failed validation. Keyword rules are
checked in order; the first match wins. Without a match, one of the generic
follow-ups is drawn from the injected random source.
"""

import random

KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("experience", "worked"),
        "Can you tell me more about the challenges you faced in that role?",
    ),
    (
        ("project", "built"),
        "What technologies did you use and why did you choose them?",
    ),
    (
        ("team", "collaborate"),
        "How do you handle disagreements within a team?",
    ),
    (
        ("skill", "learn"),
        "What's the most challenging skill you've had to learn recently?",
    ),
    (
        ("problem", "solve"),
        "Can you walk me through your problem-solving approach?",
    ),
)

GENERIC_QUESTIONS: tuple[str, ...] = (
    "That's interesting. Can you elaborate on that?",
    "What made you choose that particular approach?",
    "How did that experience shape your career goals?",
    "What would you do differently if you could do it again?",
    "What did you learn from that experience?",
)


class FallbackSelector:
    """Picks a fallback question for an utterance. Never fails."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def select(self, utterance: str) -> str:
        lowered = utterance.lower()
        for keywords, question in KEYWORD_RULES:
            if any(keyword in lowered for keyword in keywords):
                return question
        return self._rng.choice(GENERIC_QUESTIONS)

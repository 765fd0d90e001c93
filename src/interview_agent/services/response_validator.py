"""Cleanup and quality gate for generated interviewer questions.

Small models often echo their instructions, answer instead of asking, run
on past the question, or parrot the candidate. ``clean_response`` trims the
usual artifacts and ``ResponseValidator`` rejects whatever is still unusable,
which sends the generator into another attempt.
"""

import logging
import re

from interview_agent.config import settings
from interview_agent.entities import ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_DENYLIST = (
    "professional job interviewer",
    "i am a",
    "my name is",
    "i'm here to",
    "let me introduce",
)

MIN_OVERLAP_WORD_LENGTH = 5

_ROLE_LABEL = re.compile(r"^(Interviewer:|Question:|Ask:|Response:)\s*", re.IGNORECASE)
_LEADING_QUOTE = re.compile(r"^[\"']\s*")
_TRAILING_QUOTE = re.compile(r"\s*[\"']$")
_WORD = re.compile(r"[\w']+")


def clean_response(text: str) -> str:
    """Strip generation artifacts from a candidate response.

    - Drops a leading role label and surrounding quotes.
    - If the text does not end in ., ! or ?, cuts back to the last full
      stop, but only when that stop lies past the midpoint.
    - If the text contains a question mark, drops everything after the last one.
    """
    cleaned = _ROLE_LABEL.sub("", text.strip(), count=1)
    cleaned = _LEADING_QUOTE.sub("", cleaned, count=1)
    cleaned = _TRAILING_QUOTE.sub("", cleaned, count=1).strip()

    if cleaned and cleaned[-1] not in ".!?":
        last_stop = cleaned.rfind(".")
        if last_stop > len(cleaned) / 2:
            cleaned = cleaned[: last_stop + 1]

    if "?" in cleaned and not cleaned.endswith("?"):
        cleaned = cleaned[: cleaned.rfind("?") + 1]

    return cleaned


def _words(text: str) -> list[str]:
    return _WORD.findall(text.lower())


def lexical_overlap(candidate: str, utterance: str) -> float:
    """Fraction of the utterance's long words that reappear in the candidate.

    Only words of at least five characters count. Repeated words in the
    utterance are counted each time. Returns 0.0 when the utterance has no
    qualifying words.
    """
    qualifying = [word for word in _words(utterance) if len(word) >= MIN_OVERLAP_WORD_LENGTH]
    if not qualifying:
        return 0.0
    candidate_words = set(_words(candidate))
    shared = sum(1 for word in qualifying if word in candidate_words)
    return shared / len(qualifying)


class ResponseValidator:
    """Quality gate for cleaned candidate responses.

    A candidate is accepted only if it passes all four checks:
    no denylisted phrase, contains a question mark, length within bounds, and
    lexical overlap with the utterance not above the threshold.
    """

    def __init__(
        self,
        min_length: int | None = None,
        max_length: int | None = None,
        overlap_threshold: float | None = None,
        denylist: tuple[str, ...] = DEFAULT_DENYLIST,
    ) -> None:
        """Initialize the validator.

        Args:
            min_length: Shortest accepted response. Defaults to settings.validation_min_length.
            max_length: Longest accepted response. Defaults to settings.validation_max_length.
            overlap_threshold: Highest accepted overlap ratio. Defaults to settings.
            denylist: Lower-case phrases that disqualify a response.
        """
        self._min_length = min_length if min_length is not None else settings.validation_min_length
        self._max_length = max_length if max_length is not None else settings.validation_max_length
        self._overlap_threshold = (
            overlap_threshold if overlap_threshold is not None else settings.overlap_threshold
        )
        self._denylist = tuple(phrase.lower() for phrase in denylist)

        if not 0 < self._min_length <= self._max_length:
            raise ValueError("Length bounds must satisfy 0 < min_length <= max_length")

    def validate(self, candidate: str, utterance: str) -> ValidationResult:
        """Run the candidate through the gate.

        Args:
            candidate: The cleaned model output
            utterance: The user utterance it responds to

        Returns:
            ValidationResult naming the first failed check, if any
        """
        lowered = candidate.lower()

        for phrase in self._denylist:
            if phrase in lowered:
                return self._reject(f"contains generic phrase {phrase!r}")

        if "?" not in candidate:
            return self._reject("not a question")

        if not self._min_length <= len(candidate) <= self._max_length:
            return self._reject(f"length {len(candidate)} outside bounds")

        overlap = lexical_overlap(candidate, utterance)
        if overlap > self._overlap_threshold:
            return self._reject(f"too similar to input (overlap {overlap:.2f})")

        return ValidationResult.ok()

    @staticmethod
    def _reject(reason: str) -> ValidationResult:
        logger.info("Response rejected: %s", reason)
        return ValidationResult.rejected(reason)

    @property
    def length_bounds(self) -> tuple[int, int]:
        return self._min_length, self._max_length

    @property
    def overlap_threshold(self) -> float:
        return self._overlap_threshold

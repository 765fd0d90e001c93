"""Generation domain entities.

These records only live for the duration of a single generation call; none
of them are persisted.
"""

from dataclasses import dataclass, field, replace
from typing import Literal

ResponseSource = Literal["model", "fallback"]


@dataclass(frozen=True)
class SamplingParams:
    """Sampling parameters passed to the text-generation backend.

    Attributes:
        temperature: Randomness of sampling, raised on every retry
        max_new_tokens: Upper bound on generated tokens
        top_k: Top-k sampling cutoff
        top_p: Nucleus sampling cutoff
        repetition_penalty: Penalty applied to repeated tokens
        beam_count: Beam search width (ignored by backends without beams)
    """

    temperature: float
    max_new_tokens: int = 80
    top_k: int = 50
    top_p: float = 0.92
    repetition_penalty: float = 1.5
    beam_count: int = 2

    def with_temperature(self, temperature: float) -> "SamplingParams":
        """Return a copy with a different temperature."""
        return replace(self, temperature=temperature)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of running a candidate through the validation gate."""

    accepted: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: str) -> "ValidationResult":
        return cls(accepted=False, reason=reason)


@dataclass(frozen=True)
class GenerationAttempt:
    """Record of one cycle of the retry loop.

    Attributes:
        prompt_text: Prompt sent to the backend
        sampling_temperature: Temperature used for this attempt
        raw_output: Backend output before cleanup, None if the call raised
        validation_result: Why the candidate was accepted or rejected
    """

    prompt_text: str
    sampling_temperature: float
    raw_output: str | None
    validation_result: ValidationResult


@dataclass(frozen=True)
class GenerationResult:
    """Final outcome of a generation call.

    Attributes:
        text: The response to speak and display
        source: "model" if a candidate passed validation, "fallback" otherwise
        attempts: Every attempt made, in order
    """

    text: str
    source: ResponseSource
    attempts: list[GenerationAttempt] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"

"""Response generation with a quality-gated retry loop.

Per call:

    BUILD_PROMPT -> INVOKE -> clean -> VALIDATE -> accept
                                          |
                               rejected or backend raised
                                          |
                  retry with temperature + step, up to max_retries attempts
                                          |
                                 exhausted -> fallback question

The caller only ever sees a response string or ``GeneratorNotReadyError``.
"""

import logging
import random

from interview_agent.config import settings
from interview_agent.entities import (
    ConversationHistory,
    ConversationTurn,
    GenerationAttempt,
    GenerationResult,
    Role,
    SamplingParams,
    ValidationResult,
)
from interview_agent.errors import GeneratorNotReadyError
from interview_agent.protocols import TextGenerator

from .fallback import FallbackSelector
from .prompt_builder import PromptBuilder
from .response_validator import ResponseValidator, clean_response

logger = logging.getLogger(__name__)


def default_sampling_params() -> SamplingParams:
    """Sampling parameters from settings, at the base temperature."""
    return SamplingParams(
        temperature=settings.base_temperature,
        max_new_tokens=settings.max_new_tokens,
        top_k=settings.top_k,
        top_p=settings.top_p,
        repetition_penalty=settings.repetition_penalty,
        beam_count=settings.beam_count,
    )


class ResponseGenerator:
    """Produces one follow-up interview question per user utterance.

    The generator depends on the TextGenerator PROTOCOL, not a concrete
    backend, and works on a ConversationHistory owned by the caller.

    Example:
        ```python
        generator = ResponseGenerator(
            text_generator=OllamaTextGenerator.create(),
            history=context.history,
        )
        question = await generator.generate("I built a payments service in Go")
        ```
    """

    def __init__(
        self,
        text_generator: TextGenerator,
        history: ConversationHistory | None = None,
        validator: ResponseValidator | None = None,
        prompt_builder: PromptBuilder | None = None,
        fallback: FallbackSelector | None = None,
        max_retries: int | None = None,
        base_temperature: float | None = None,
        temperature_step: float | None = None,
        sampling: SamplingParams | None = None,
    ) -> None:
        """Initialize the response generator.

        Args:
            text_generator: Backend that turns prompts into text (required).
            history: Conversation used when ``generate`` is called without one.
                A fresh, empty history is created if omitted.
            validator: Quality gate. Defaults to settings-driven bounds.
            prompt_builder: Prompt templates.
            fallback: Fallback question picker. Inject one with a seeded
                ``random.Random`` for deterministic tests.
            max_retries: Maximum attempts per call. Defaults to settings.max_retries.
            base_temperature: Temperature of the first attempt. Defaults to settings.
            temperature_step: Temperature added per retry. Defaults to settings.
            sampling: Other sampling parameters. Defaults to settings.
        """
        self._text_generator = text_generator
        self._history = history if history is not None else ConversationHistory()
        self._validator = validator or ResponseValidator()
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._fallback = fallback or FallbackSelector()
        self._max_retries = max_retries if max_retries is not None else settings.max_retries
        self._base_temperature = (
            base_temperature if base_temperature is not None else settings.base_temperature
        )
        self._temperature_step = (
            temperature_step if temperature_step is not None else settings.temperature_step
        )
        self._sampling = sampling or default_sampling_params()

        if self._max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    @classmethod
    def create(
        cls,
        text_generator: TextGenerator,
        history: ConversationHistory | None = None,
        rng: random.Random | None = None,
    ) -> "ResponseGenerator":
        """Factory method to create ResponseGenerator with settings defaults.

        Args:
            text_generator: Backend that turns prompts into text (required).
            history: Shared conversation history.
            rng: Random source for generic fallback questions.

        Returns:
            Configured ResponseGenerator
        """
        return cls(
            text_generator=text_generator,
            history=history,
            fallback=FallbackSelector(rng=rng),
        )

    def temperature_for_attempt(self, attempt: int) -> float:
        """Sampling temperature for a 0-based attempt index."""
        return self._base_temperature + attempt * self._temperature_step

    async def generate_detailed(
        self,
        utterance: str,
        history: ConversationHistory | None = None,
    ) -> GenerationResult:
        """Run the retry loop without touching the history.

        Args:
            utterance: The candidate's latest utterance
            history: Prior turns. Defaults to the generator's own history.

        Returns:
            GenerationResult with the response text, its source and every attempt

        Raises:
            GeneratorNotReadyError: If the backend is not initialized
        """
        if not self._text_generator.is_ready():
            raise GeneratorNotReadyError("Model not loaded. Call initialize() first.")

        history = history if history is not None else self._history
        attempts: list[GenerationAttempt] = []

        for attempt in range(self._max_retries):
            prompt = self._prompt_builder.build(utterance, history)
            params = self._sampling.with_temperature(self.temperature_for_attempt(attempt))

            try:
                raw_output = await self._text_generator.invoke(prompt, params)
            except GeneratorNotReadyError:
                raise
            except Exception as e:
                logger.warning(
                    "Generation attempt %d/%d failed: %s", attempt + 1, self._max_retries, e
                )
                attempts.append(
                    GenerationAttempt(
                        prompt_text=prompt,
                        sampling_temperature=params.temperature,
                        raw_output=None,
                        validation_result=ValidationResult.rejected(f"backend error: {e}"),
                    )
                )
                continue

            candidate = clean_response(raw_output)
            result = self._validator.validate(candidate, utterance)
            attempts.append(
                GenerationAttempt(
                    prompt_text=prompt,
                    sampling_temperature=params.temperature,
                    raw_output=raw_output,
                    validation_result=result,
                )
            )

            if result.accepted:
                return GenerationResult(text=candidate, source="model", attempts=attempts)

            logger.info(
                "Response validation failed, retry %d/%d", attempt + 1, self._max_retries
            )

        logger.info("All %d attempts failed, using fallback question", self._max_retries)
        return GenerationResult(
            text=self._fallback.select(utterance),
            source="fallback",
            attempts=attempts,
        )

    def record_exchange(
        self,
        utterance: str,
        response: str,
        history: ConversationHistory | None = None,
    ) -> None:
        """Append the user utterance, then the agent response, to the history."""
        history = history if history is not None else self._history
        history.append(ConversationTurn(role=Role.USER, text=utterance))
        history.append(ConversationTurn(role=Role.AGENT, text=response))

    async def generate(
        self,
        utterance: str,
        history: ConversationHistory | None = None,
    ) -> str:
        """Generate a follow-up question and record the exchange.

        Args:
            utterance: The candidate's latest utterance
            history: Conversation to read and append to. Defaults to the
                generator's own history.

        Returns:
            A model-produced question, or a fallback question

        Raises:
            GeneratorNotReadyError: If the backend is not initialized
        """
        result = await self.generate_detailed(utterance, history)
        self.record_exchange(utterance, result.text, history)
        return result.text

    def clear_history(self) -> None:
        self._history.clear()

    def get_history(self) -> list[ConversationTurn]:
        """Return an ordered copy of the generator's history."""
        return self._history.snapshot()

    @property
    def history(self) -> ConversationHistory:
        return self._history

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def text_generator(self) -> TextGenerator:
        """Get the underlying backend (for testing)."""
        return self._text_generator

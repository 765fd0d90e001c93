"""Interview session orchestration.

This service ties the response cache and the response generator together
for one interview:

    utterance -> cache.get -> hit: cached response
                           -> miss: generator -> cache.set -> persist

Only one utterance is handled at a time. Input that arrives while a response
is being produced, or while the session is not running, is ignored.
"""

import logging
import random
import time

from interview_agent.entities import SessionContext, TurnResult
from interview_agent.models import PerformanceMetrics
from interview_agent.protocols import BlobStore, TextGenerator

from .interaction_tracker import ExportFormat, InteractionTracker
from .response_cache import ResponseCache
from .response_generator import ResponseGenerator

logger = logging.getLogger(__name__)


class InterviewSession:
    """One running interview.

    The session owns a SessionContext and hands its history to the generator,
    so there is no module-level conversation state.

    Example:
        ```python
        backend = OllamaTextGenerator.create()
        await backend.initialize()

        session = InterviewSession.create(backend, store=JsonFileBlobStore())
        session.start()
        result = await session.handle_utterance("I have five years of backend experience")
        print(result.response)
        session.stop()
        ```
    """

    def __init__(
        self,
        generator: ResponseGenerator,
        cache: ResponseCache,
        context: SessionContext | None = None,
        tracker: InteractionTracker | None = None,
        persist_on_store: bool = True,
    ) -> None:
        """Initialize the session.

        Args:
            generator: Response generator (required).
            cache: Response cache (required).
            context: Session state. Defaults to a context sharing the
                generator's history.
            tracker: Progress tracker.
            persist_on_store: Persist the cache snapshot after every new response.
        """
        self._generator = generator
        self._cache = cache
        self._context = context or SessionContext(history=generator.history)
        self._tracker = tracker or InteractionTracker()
        self._persist_on_store = persist_on_store
        self._metrics = PerformanceMetrics()

    @classmethod
    def create(
        cls,
        text_generator: TextGenerator,
        store: BlobStore | None = None,
        rng: random.Random | None = None,
    ) -> "InterviewSession":
        """Factory method wiring a session with settings defaults.

        Args:
            text_generator: Backend that turns prompts into text (required).
            store: Durable store for the cache snapshot.
            rng: Random source for generic fallback questions.

        Returns:
            Configured InterviewSession
        """
        context = SessionContext()
        generator = ResponseGenerator.create(
            text_generator=text_generator,
            history=context.history,
            rng=rng,
        )
        cache = ResponseCache(store=store)
        return cls(generator=generator, cache=cache, context=context)

    def start(self) -> None:
        """Restore the cached responses and accept input."""
        self._cache.restore_snapshot()
        self._context.is_active = True
        logger.info("Interview started (cache: %s)", self._cache.stats())

    def stop(self) -> None:
        """Stop accepting input and persist the cache.

        A generation still in flight is not interrupted; its result is
        discarded when it resolves.
        """
        self._context.is_active = False
        self._context.invalidate()
        self._cache.persist_snapshot()
        logger.info("Interview stopped")

    def clear_conversation(self) -> None:
        """Reset the conversation history and progress."""
        self._context.invalidate()
        self._context.history.clear()
        self._tracker.reset()

    async def handle_utterance(self, text: str) -> TurnResult | None:
        """Produce the interviewer's reply to one utterance.

        Args:
            text: The transcribed user utterance

        Returns:
            TurnResult, or None if the input was ignored or the session was
            stopped or cleared before the response was ready

        Raises:
            GeneratorNotReadyError: If the backend is not initialized
        """
        if not text or not text.strip():
            logger.debug("Ignoring empty utterance")
            return None
        if not self._context.is_active:
            logger.debug("Ignoring utterance: interview not active")
            return None
        if self._context.is_processing:
            logger.debug("Ignoring utterance: still processing previous input")
            return None

        self._context.is_processing = True
        epoch = self._context.epoch
        start_time = time.perf_counter()

        try:
            cached = self._cache.get(text)
            if cached is not None:
                response_time_ms = (time.perf_counter() - start_time) * 1000
                self._metrics.record_hit(response_time_ms)
                self._tracker.track_progress(text, cached)
                logger.info("Cache hit (%.2fms)", response_time_ms)
                return TurnResult(
                    utterance=text,
                    response=cached,
                    source="cache",
                    response_time_ms=response_time_ms,
                )

            result = await self._generator.generate_detailed(text, self._context.history)

            if epoch != self._context.epoch:
                logger.info("Discarding response generated for a stopped or cleared session")
                return None

            self._generator.record_exchange(text, result.text, self._context.history)
            self._cache.set(text, result.text)
            if self._persist_on_store:
                self._cache.persist_snapshot()

            response_time_ms = (time.perf_counter() - start_time) * 1000
            self._metrics.record_miss(response_time_ms, used_fallback=result.used_fallback)
            self._tracker.track_progress(text, result.text)
            logger.info(
                "Generated %s response in %.2fms after %d attempt(s)",
                result.source,
                response_time_ms,
                len(result.attempts),
            )
            return TurnResult(
                utterance=text,
                response=result.text,
                source=result.source,
                response_time_ms=response_time_ms,
            )
        finally:
            self._context.is_processing = False

    def metrics(self) -> dict:
        return self._metrics.to_dict()

    def cache_stats(self) -> dict:
        return self._cache.stats()

    def export(self, fmt: ExportFormat = "txt") -> str:
        """Export the conversation as a transcript or JSON document."""
        return self._tracker.export_conversation(self._context.history.snapshot(), fmt)

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def is_active(self) -> bool:
        return self._context.is_active

    @property
    def is_processing(self) -> bool:
        return self._context.is_processing

    @property
    def tracker(self) -> InteractionTracker:
        return self._tracker

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def generator(self) -> ResponseGenerator:
        return self._generator

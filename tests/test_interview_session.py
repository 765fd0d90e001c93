"""
Tests for the interview session: cache read-through, input gating and
discarding stale results.
"""

import asyncio
import json

import pytest

from interview_agent.errors import GeneratorNotReadyError
from interview_agent.models import CacheSnapshot
from interview_agent.services import InterviewSession, ResponseCache

from tests.conftest import VALID_QUESTION, GatedTextGenerator, ScriptedTextGenerator


@pytest.fixture
def make_session(make_generator, cache):
    def _make(text_gen) -> InterviewSession:
        return InterviewSession(generator=make_generator(text_gen), cache=cache)

    return _make


@pytest.mark.asyncio
async def test_input_ignored_before_start(make_session, text_generator):
    session = make_session(text_generator)

    assert await session.handle_utterance("hello there") is None
    assert text_generator.calls == []


@pytest.mark.asyncio
async def test_empty_input_ignored(make_session, text_generator):
    session = make_session(text_generator)
    session.start()

    assert await session.handle_utterance("   ") is None
    assert text_generator.calls == []


@pytest.mark.asyncio
async def test_miss_then_hit(make_session, text_generator):
    """A repeated utterance is answered from the cache without the model."""
    session = make_session(text_generator)
    session.start()

    first = await session.handle_utterance("I wrote a billing service")
    second = await session.handle_utterance("  I WROTE a billing service ")

    assert first.source == "model"
    assert first.response == VALID_QUESTION
    assert second.from_cache is True
    assert second.response == VALID_QUESTION
    assert len(text_generator.calls) == 1
    # Cache hits are not added to the conversation history.
    assert len(session.context.history) == 2


@pytest.mark.asyncio
async def test_new_response_is_persisted(make_session, text_generator, blob_store):
    session = make_session(text_generator)
    session.start()

    await session.handle_utterance("I wrote a billing service")

    snapshot = CacheSnapshot.model_validate_json(blob_store.load_blob("test_cache"))
    assert snapshot.entries == [("i wrote a billing service", VALID_QUESTION)]


@pytest.mark.asyncio
async def test_start_restores_previous_cache(make_generator, blob_store, text_generator):
    """A new session answers from the cache persisted by an earlier one."""
    blob_store.store_blob(
        "test_cache",
        CacheSnapshot(entries=[("tell me about yourself", "What do you build?")]).model_dump_json(),
    )
    cache = ResponseCache(max_size=10, store=blob_store, slot_name="test_cache")
    session = InterviewSession(generator=make_generator(text_generator), cache=cache)

    session.start()
    result = await session.handle_utterance("Tell me about yourself")

    assert result.from_cache is True
    assert result.response == "What do you build?"
    assert text_generator.calls == []


@pytest.mark.asyncio
async def test_input_ignored_while_processing(make_session):
    """Only one utterance is handled at a time."""
    backend = GatedTextGenerator()
    session = make_session(backend)
    session.start()

    task = asyncio.create_task(session.handle_utterance("I wrote a billing service"))
    await backend.started.wait()

    assert session.is_processing is True
    assert await session.handle_utterance("Another thought") is None

    backend.release.set()
    result = await task

    assert result.response == VALID_QUESTION
    assert session.is_processing is False
    assert len(backend.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("interrupt", ["stop", "clear_conversation"])
async def test_in_flight_result_discarded(make_session, interrupt):
    """Stopping or clearing mid-generation drops the late response."""
    backend = GatedTextGenerator()
    session = make_session(backend)
    session.start()

    task = asyncio.create_task(session.handle_utterance("I wrote a billing service"))
    await backend.started.wait()
    getattr(session, interrupt)()

    backend.release.set()
    result = await task

    assert result is None
    assert len(session.context.history) == 0
    assert session.cache.size() == 0
    assert session.is_processing is False


@pytest.mark.asyncio
async def test_stop_deactivates_and_persists(make_session, text_generator, blob_store):
    session = make_session(text_generator)
    session.start()
    session.cache.set("warm", "Why did you pick it?")

    session.stop()

    assert session.is_active is False
    assert await session.handle_utterance("hello") is None
    assert "warm" in blob_store.load_blob("test_cache")


@pytest.mark.asyncio
async def test_metrics(make_session):
    backend = ScriptedTextGenerator(outputs=[VALID_QUESTION, "no question", "no", "nope"])
    session = make_session(backend)
    session.start()

    await session.handle_utterance("I wrote a billing service")
    await session.handle_utterance("I wrote a billing service")
    await session.handle_utterance("Hello there")

    metrics = session.metrics()
    assert metrics["total_requests"] == 3
    assert metrics["cache_hits"] == 1
    assert metrics["cache_misses"] == 2
    assert metrics["fallback_responses"] == 1
    assert metrics["hit_rate"] == pytest.approx(1 / 3)
    assert session.cache_stats()["hits"] == 1


@pytest.mark.asyncio
async def test_not_ready_propagates_and_releases(make_session):
    session = make_session(ScriptedTextGenerator(ready=False))
    session.start()

    with pytest.raises(GeneratorNotReadyError):
        await session.handle_utterance("hello")

    assert session.is_processing is False
    assert session.cache.size() == 0


@pytest.mark.asyncio
async def test_progress_and_export(make_session, text_generator):
    session = make_session(text_generator)
    session.start()

    await session.handle_utterance("My last project was a search engine")
    document = json.loads(session.export("json"))

    assert document["progress"]["question_count"] == 1
    assert "project" in document["progress"]["topics_covered"]
    assert document["conversation"] == [
        {"role": "user", "content": "My last project was a search engine"},
        {"role": "agent", "content": VALID_QUESTION},
    ]


@pytest.mark.asyncio
async def test_clear_conversation_resets_history_and_progress(make_session, text_generator):
    session = make_session(text_generator)
    session.start()
    await session.handle_utterance("I wrote a billing service")

    session.clear_conversation()

    assert len(session.context.history) == 0
    assert session.tracker.question_count == 0
    # Cached responses survive a conversation reset.
    assert session.cache.size() == 1

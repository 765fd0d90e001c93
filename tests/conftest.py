"""Shared fixtures and test doubles.

The doubles satisfy the package protocols structurally, so services can be
exercised without Ollama, Redis or the file system.
"""

import asyncio
import random
from dataclasses import dataclass, field

import pytest

from interview_agent.entities import ConversationHistory, SamplingParams
from interview_agent.errors import StorageError
from interview_agent.repositories import InMemoryBlobStore
from interview_agent.services import (
    FallbackSelector,
    ResponseCache,
    ResponseGenerator,
    ResponseValidator,
)

VALID_QUESTION = "How did you decide between a queue and a direct RPC call there?"


@dataclass
class ScriptedTextGenerator:
    """TextGenerator double replaying scripted outputs.

    Each item is returned in turn; an Exception instance is raised instead.
    The last item repeats once the script runs out.
    """

    outputs: list = field(default_factory=lambda: [VALID_QUESTION])
    ready: bool = True
    calls: list[tuple[str, SamplingParams]] = field(default_factory=list)

    def is_ready(self) -> bool:
        return self.ready

    async def invoke(self, prompt: str, params: SamplingParams) -> str:
        self.calls.append((prompt, params))
        index = min(len(self.calls) - 1, len(self.outputs) - 1)
        output = self.outputs[index]
        if isinstance(output, Exception):
            raise output
        return output

    @property
    def temperatures(self) -> list[float]:
        return [params.temperature for _, params in self.calls]


class GatedTextGenerator(ScriptedTextGenerator):
    """ScriptedTextGenerator that blocks inside ``invoke`` until released."""

    def __init__(self, outputs: list | None = None) -> None:
        super().__init__(outputs=outputs or [VALID_QUESTION])
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def invoke(self, prompt: str, params: SamplingParams) -> str:
        self.started.set()
        await self.release.wait()
        return await super().invoke(prompt, params)


class FailingBlobStore:
    """BlobStore double whose every operation fails."""

    def __init__(self, error: Exception | None = None) -> None:
        self._error = error or StorageError("storage unavailable")

    def store_blob(self, slot_name: str, text: str) -> None:
        raise self._error

    def load_blob(self, slot_name: str) -> str | None:
        raise self._error


@pytest.fixture
def text_generator() -> ScriptedTextGenerator:
    return ScriptedTextGenerator()


@pytest.fixture
def history() -> ConversationHistory:
    return ConversationHistory()


@pytest.fixture
def validator() -> ResponseValidator:
    return ResponseValidator(min_length=10, max_length=300, overlap_threshold=0.7)


@pytest.fixture
def make_generator(validator):
    """Build a ResponseGenerator with explicit parameters and a seeded fallback."""

    def _make(text_gen, history: ConversationHistory | None = None, **kwargs) -> ResponseGenerator:
        params = {
            "validator": validator,
            "fallback": FallbackSelector(rng=random.Random(7)),
            "max_retries": 3,
            "base_temperature": 0.8,
            "temperature_step": 0.15,
        }
        params.update(kwargs)
        return ResponseGenerator(text_generator=text_gen, history=history, **params)

    return _make


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def cache(blob_store) -> ResponseCache:
    return ResponseCache(max_size=50, key_length=100, store=blob_store, slot_name="test_cache")

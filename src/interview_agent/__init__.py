"""Interview Agent - follow-up question generation for simulated job interviews.

This package provides a layered architecture for the conversational core of a
mock-interview agent:

Layers:
    - protocols: Interface contracts (TextGenerator, BlobStore)
    - repositories: Backend implementations (Ollama, file, Redis, memory)
    - services: Business logic (ResponseCache, ResponseGenerator, InterviewSession)
    - entities: Domain models (internal)
    - models: Serialized forms (cache snapshot, stats, conversation export)

Usage:
    ```python
    from interview_agent.repositories import JsonFileBlobStore, OllamaTextGenerator
    from interview_agent.services import InterviewSession

    backend = OllamaTextGenerator.create()
    await backend.initialize()

    session = InterviewSession.create(backend, store=JsonFileBlobStore.create())
    session.start()
    result = await session.handle_utterance("I built a data pipeline in Python")
    ```
"""

import logging

from interview_agent.config import get_redis_client, settings
from interview_agent.entities import ConversationHistory, ConversationTurn, Role
from interview_agent.errors import (
    GenerationBackendError,
    GeneratorNotReadyError,
    InterviewAgentError,
    StorageError,
)
from interview_agent.protocols import BlobStore, TextGenerator
from interview_agent.repositories import (
    InMemoryBlobStore,
    JsonFileBlobStore,
    OllamaTextGenerator,
    RedisBlobStore,
)
from interview_agent.services import InterviewSession, ResponseCache, ResponseGenerator

logging.getLogger("interview_agent").addHandler(logging.NullHandler())

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "BlobStore",
    "TextGenerator",
    # Services (business logic)
    "InterviewSession",
    "ResponseCache",
    "ResponseGenerator",
    # Repositories (backends)
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "OllamaTextGenerator",
    "RedisBlobStore",
    # Entities (domain models)
    "ConversationHistory",
    "ConversationTurn",
    "Role",
    # Errors
    "InterviewAgentError",
    "GeneratorNotReadyError",
    "GenerationBackendError",
    "StorageError",
]

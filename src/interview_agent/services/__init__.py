"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Session -> Cache / Generator -> Protocol implementations
    (Caller) -> (Business)        -> (Data access / model backend)

Usage:
    ```python
    from interview_agent.services import InterviewSession

    # Using factory method (recommended)
    session = InterviewSession.create(text_generator=backend, store=store)

    # Or manual creation
    session = InterviewSession(generator=generator, cache=cache)
    ```
"""

from .fallback import FallbackSelector
from .interaction_tracker import InteractionTracker
from .interview_session import InterviewSession
from .prompt_builder import PromptBuilder
from .response_cache import ResponseCache, normalize_key
from .response_generator import ResponseGenerator
from .response_validator import ResponseValidator, clean_response, lexical_overlap

__all__ = [
    "FallbackSelector",
    "InteractionTracker",
    "InterviewSession",
    "PromptBuilder",
    "ResponseCache",
    "ResponseGenerator",
    "ResponseValidator",
    "clean_response",
    "lexical_overlap",
    "normalize_key",
]

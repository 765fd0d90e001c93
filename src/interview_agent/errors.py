"""Error taxonomy for the interview agent.

Only ``GeneratorNotReadyError`` ever reaches the caller of the session or the
generator. Backend and storage errors are absorbed by the retry/fallback loop
and by the response cache respectively, and show up as log records.
"""


class InterviewAgentError(Exception):
    """Base class for all package errors."""


class GeneratorNotReadyError(InterviewAgentError, RuntimeError):
    """Generation was requested before the text-generation backend was ready."""


class GenerationBackendError(InterviewAgentError):
    """A text-generation call failed (network, HTTP status, bad payload)."""


class StorageError(InterviewAgentError):
    """A blob store could not read or write a snapshot slot."""

"""Text generation protocol.

Defines the interface for the language-model backend the response generator
talks to. The backend is treated as an opaque capability: prompt in, text out.

Implementations can include:
- Ollama serving a local model (default)
- An in-process model runtime
- Scripted fakes for tests
"""

from typing import Protocol, runtime_checkable

from interview_agent.entities import SamplingParams


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for text-generation backends.

    Any type that implements these methods satisfies the protocol, no explicit
    inheritance needed.

    Example:
        ```python
        from interview_agent.protocols import TextGenerator

        backend: TextGenerator = OllamaTextGenerator.create()
        ```
    """

    def is_ready(self) -> bool:
        """Check whether the backend has been initialized.

        Returns:
            True if ``invoke`` may be called, False otherwise
        """
        ...

    async def invoke(self, prompt: str, params: SamplingParams) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full prompt text
            params: Sampling parameters for this call

        Returns:
            The generated text

        Raises:
            GeneratorNotReadyError: If the backend is not initialized
            Exception: Any other failure is treated as a failed attempt
        """
        ...

"""Ollama-based text generation backend.

Uses Ollama's local API to generate interviewer questions. Ollama serves
models locally without any hosted API.

Requirements:
    - Ollama installed: https://ollama.com
    - Ollama running: `ollama serve` (usually runs automatically)
    - Model pulled, either manually (`ollama pull llama3.2:1b`) or through
      ``initialize()``

Sampling parameter mapping:
    temperature        -> options.temperature
    max_new_tokens     -> options.num_predict
    top_k              -> options.top_k
    top_p              -> options.top_p
    repetition_penalty -> options.repeat_penalty
    beam_count         -> not supported by Ollama, not sent
"""

import json
import logging
from collections.abc import Callable

import httpx

from interview_agent.config import settings
from interview_agent.entities import SamplingParams
from interview_agent.errors import GenerationBackendError, GeneratorNotReadyError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]


class OllamaTextGenerator:
    """Ollama-based implementation of TextGenerator protocol.

    This class satisfies the TextGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = OllamaTextGenerator.create(model_name="llama3.2:1b")
        await generator.initialize(on_progress=lambda pct, msg: print(pct, msg))

        text = await generator.invoke(prompt, SamplingParams(temperature=0.8))
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama text generator.

        Args:
            model_name: Name of the Ollama model.
                       Defaults to settings.generation_model.
            base_url: Ollama API base URL.
                     Defaults to settings.ollama_base_url.
            timeout: Request timeout in seconds. Defaults to settings.ollama_timeout.
            client: Preconfigured HTTP client (mainly for tests).
        """
        self._model_name = model_name or settings.generation_model
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._timeout = timeout or settings.ollama_timeout
        self._client = client
        self._ready = False

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OllamaTextGenerator":
        """Factory method to create OllamaTextGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.

        Returns:
            Configured OllamaTextGenerator
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    def is_ready(self) -> bool:
        return self._ready

    async def initialize(
        self,
        on_progress: ProgressCallback | None = None,
        pull: bool = True,
    ) -> None:
        """Make the model available and mark the backend ready.

        Args:
            on_progress: Called zero or more times with (percent, message)
                while the model is being pulled. No cadence is guaranteed.
            pull: Pull the model through Ollama before marking ready. When
                False the model is assumed to be present already.

        Raises:
            GenerationBackendError: If the pull fails
        """
        if on_progress:
            on_progress(0.0, "Starting model load...")

        if pull:
            await self._pull_model(on_progress)

        self._ready = True
        logger.info("Ollama model %s ready", self._model_name)

        if on_progress:
            on_progress(100.0, "Model loaded successfully!")

    async def _pull_model(self, on_progress: ProgressCallback | None) -> None:
        url = f"{self._base_url}/api/pull"
        payload = {"model": self._model_name, "stream": True}

        try:
            async with self.client.stream("POST", url, json=payload) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    event = json.loads(line)
                    if "error" in event:
                        raise GenerationBackendError(
                            f"Ollama pull failed: {event['error']}"
                            f"\n  → Check the model name: {self._model_name}"
                        )
                    if on_progress:
                        on_progress(*self._pull_progress(event))

        except httpx.HTTPError as e:
            raise GenerationBackendError(self._describe_http_error(e)) from e
        except json.JSONDecodeError as e:
            raise GenerationBackendError(f"Unexpected pull stream line: {e}") from e

    @staticmethod
    def _pull_progress(event: dict) -> tuple[float, str]:
        """Map one pull stream event onto the 0-100 progress scale.

        Downloading occupies the 10-90 band; everything before and after is
        reported at the band edges.
        """
        status = str(event.get("status", ""))
        total = event.get("total")
        completed = event.get("completed")
        if total and completed is not None:
            fraction = min(max(completed / total, 0.0), 1.0)
            return 10.0 + fraction * 80.0, f"Loading model: {round(fraction * 100)}%"
        if status == "success":
            return 90.0, "Model downloaded"
        return 10.0, status or "Pulling model..."

    async def invoke(self, prompt: str, params: SamplingParams) -> str:
        """Generate a completion for the prompt.

        Args:
            prompt: The full prompt text
            params: Sampling parameters for this call

        Returns:
            The generated text, stripped

        Raises:
            GeneratorNotReadyError: If ``initialize()`` has not completed
            GenerationBackendError: If the Ollama API request fails
        """
        if not self._ready:
            raise GeneratorNotReadyError("Model not loaded. Call initialize() first.")

        url = f"{self._base_url}/api/generate"
        payload = {
            "model": self._model_name,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": params.temperature,
                "num_predict": params.max_new_tokens,
                "top_k": params.top_k,
                "top_p": params.top_p,
                "repeat_penalty": params.repetition_penalty,
            },
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise GenerationBackendError(self._describe_http_error(e)) from e
        except ValueError as e:
            raise GenerationBackendError(f"Invalid JSON from Ollama: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            raise GenerationBackendError(f"Unexpected response format: {data}")

        return data["response"].strip()

    def _describe_http_error(self, error: httpx.HTTPError) -> str:
        error_msg = f"Ollama API error: {error}"
        if "connection refused" in str(error).lower() or isinstance(error, httpx.ConnectError):
            error_msg += "\n  → Is Ollama running? Try: ollama serve"
        elif "model" in str(error).lower() and "not found" in str(error).lower():
            error_msg += f"\n  → Model not found. Try: ollama pull {self._model_name}"
        return error_msg

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._ready = False

import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Response cache
    max_cache_size: int = int(os.getenv("MAX_CACHE_SIZE", "50"))
    cache_key_length: int = int(os.getenv("CACHE_KEY_LENGTH", "100"))
    cache_slot_name: str = os.getenv("CACHE_SLOT_NAME", "ai_interview_cache")

    # Response generation
    max_retries: int = int(os.getenv("MAX_RETRIES", "3"))
    base_temperature: float = float(os.getenv("BASE_TEMPERATURE", "0.8"))
    temperature_step: float = float(os.getenv("TEMPERATURE_STEP", "0.15"))
    validation_min_length: int = int(os.getenv("VALIDATION_MIN_LENGTH", "10"))
    validation_max_length: int = int(os.getenv("VALIDATION_MAX_LENGTH", "300"))
    overlap_threshold: float = float(os.getenv("OVERLAP_THRESHOLD", "0.7"))

    # Sampling parameters sent to the text-generation backend
    max_new_tokens: int = int(os.getenv("MAX_NEW_TOKENS", "80"))
    top_k: int = int(os.getenv("TOP_K", "50"))
    top_p: float = float(os.getenv("TOP_P", "0.92"))
    repetition_penalty: float = float(os.getenv("REPETITION_PENALTY", "1.5"))
    beam_count: int = int(os.getenv("BEAM_COUNT", "2"))

    # Snapshot storage
    storage_backend: str = os.getenv("STORAGE_BACKEND", "file")
    storage_path: str = os.getenv("STORAGE_PATH", ".interview_cache")
    storage_key_prefix: str = os.getenv("STORAGE_KEY_PREFIX", "interview_agent:")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    generation_model: str = os.getenv("GENERATION_MODEL", "llama3.2:1b")
    ollama_timeout: float = float(os.getenv("OLLAMA_TIMEOUT", "60.0"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def validation_length_bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) character bounds for an accepted response."""
        return self.validation_min_length, self.validation_max_length

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.max_cache_size < 1:
            raise ValueError("MAX_CACHE_SIZE must be at least 1")

        if self.cache_key_length < 1:
            raise ValueError("CACHE_KEY_LENGTH must be at least 1")

        if self.max_retries < 1:
            raise ValueError("MAX_RETRIES must be at least 1")

        if self.base_temperature < 0 or self.temperature_step < 0:
            raise ValueError("BASE_TEMPERATURE and TEMPERATURE_STEP must not be negative")

        if not 0 < self.validation_min_length <= self.validation_max_length:
            raise ValueError(
                f"Validation length bounds must satisfy 0 < min <= max, "
                f"got [{self.validation_min_length}, {self.validation_max_length}]"
            )

        if not 0 <= self.overlap_threshold <= 1:
            raise ValueError("OVERLAP_THRESHOLD must be between 0 and 1")

        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {list(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

SNAPSHOT_VERSION = 1


class CacheSnapshot(BaseModel):
    """Serialized form of the response cache, least recently used first."""

    version: int = SNAPSHOT_VERSION
    entries: list[tuple[str, str]] = Field(default_factory=list)


class CacheStats(BaseModel):
    """Cache statistics."""

    size: int = Field(..., ge=0)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    hit_rate: str

    @classmethod
    def from_counters(cls, size: int, hits: int, misses: int) -> "CacheStats":
        """Build stats, formatting the hit rate as a percentage string."""
        total = hits + misses
        hit_rate = f"{hits / total * 100:.2f}%" if total > 0 else "0%"
        return cls(size=size, hits=hits, misses=misses, hit_rate=hit_rate)


class ExportedTurn(BaseModel):
    """One turn in an exported conversation."""

    role: str
    content: str


class InterviewProgress(BaseModel):
    """Progress summary of the current interview."""

    question_count: int = 0
    topics_covered: list[str] = Field(default_factory=list)
    interview_type: str = "general"
    personality: str = "professional"


class ConversationExport(BaseModel):
    """JSON export document for a finished or ongoing interview."""

    timestamp: str
    interview_type: str
    personality: str = "professional"
    progress: InterviewProgress
    conversation: list[ExportedTurn]

    model_config = {"extra": "allow"}


@dataclass
class PerformanceMetrics:
    """Track performance metrics for utterance handling."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    fallback_responses: int = 0
    avg_response_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    def record_hit(self, response_time_ms: float) -> None:
        """Record a request answered from the cache."""
        self.cache_hits += 1
        self._record_request(response_time_ms)

    def record_miss(self, response_time_ms: float, used_fallback: bool = False) -> None:
        """Record a request answered by the generator."""
        self.cache_misses += 1
        if used_fallback:
            self.fallback_responses += 1
        self._record_request(response_time_ms)

    def _record_request(self, response_time_ms: float) -> None:
        self.total_requests += 1
        # Running mean
        self.avg_response_time_ms += (
            response_time_ms - self.avg_response_time_ms
        ) / self.total_requests

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "fallback_responses": self.fallback_responses,
            "hit_rate": self.hit_rate,
            "avg_response_time_ms": self.avg_response_time_ms,
        }

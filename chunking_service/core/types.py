"""Domain models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Strategy(str, Enum):
    """Strategy requested by the caller."""

    SIMPLE = "simple"
    INTELLIGENT = "intelligent"


class UsedStrategy(str, Enum):
    """Path that actually produced a result."""

    SIMPLE = "simple"
    INTELLIGENT = "intelligent"
    FALLBACK = "fallback"
    SINGLE_CHUNK = "single_chunk"


class DegradationReason(str, Enum):
    """Why the intelligent path handed over to the paragraph splitter."""

    NONE = "none"
    TIMEOUT = "timeout"
    INVALID_RESPONSE = "invalid_response"
    EMPTY_RESPONSE = "empty_response"
    REQUEST_FAILED = "request_failed"
    NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class ChunkResult:
    """Ordered chunks plus a record of how they were produced."""

    chunks: tuple[str, ...]
    used_strategy: UsedStrategy
    degradation_reason: DegradationReason = DegradationReason.NONE

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @property
    def degraded(self) -> bool:
        return self.degradation_reason is not DegradationReason.NONE

"""Chunking exceptions."""

from __future__ import annotations

from chunking_service.core.types import DegradationReason


class ChunkingError(Exception):
    """Base exception for all chunking errors."""


class ValidationError(ChunkingError):
    """Request content is missing or empty."""

    def __init__(self, message: str = "Content is required") -> None:
        super().__init__(message)


class DelegationFailure(ChunkingError):
    """The completion service could not produce usable chunks.

    Always recovered inside the delegated splitter; never reaches callers.
    """

    def __init__(self, reason: DegradationReason, message: str) -> None:
        self.reason = reason
        super().__init__(f"{reason.value}: {message}")


__all__ = [
    "ChunkingError",
    "ValidationError",
    "DelegationFailure",
]

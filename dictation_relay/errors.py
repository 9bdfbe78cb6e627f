"""Shared error types for the dictation relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


@dataclass(slots=True)
class AudioLimitExceededError(Exception):
    """Raised when appending a chunk would push a session buffer over its cap."""

    attempted_bytes: int
    max_bytes: int


@dataclass(slots=True)
class TranscriptionError(Exception):
    """A transcription request that did not produce a transcript.

    `kind` is one of: too_large, not_configured, timeout, upstream, network, malformed.
    """

    kind: str
    message: str

    def __str__(self) -> str:
        return self.message


class IdentityLookupError(Exception):
    """Raised when the identity store cannot be queried."""


__all__ = [
    "AudioLimitExceededError",
    "IdentityLookupError",
    "RateLimitError",
    "TranscriptionError",
]

"""Transcription results and provider status (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranscriptResult:
    """Outcome of a successful provider round trip.

    An empty `transcript` is a valid result ("no speech"), not an error.
    """

    transcript: str
    confidence: float | None = None
    language: str | None = None
    message: str | None = None


@dataclass(frozen=True, slots=True)
class ProviderStatus:
    configured: bool
    reachable: bool
    detail: str = ""


__all__ = ["ProviderStatus", "TranscriptResult"]

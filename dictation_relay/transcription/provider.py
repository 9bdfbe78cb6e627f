"""Interface the broker expects from a speech-to-text backend."""

from __future__ import annotations

from typing import Protocol

from dictation_relay.state.transcript import ProviderStatus, TranscriptResult


class TranscriptionProvider(Protocol):
    @property
    def configured(self) -> bool: ...

    async def transcribe(self, audio: bytes, *, language_tag: str, mime_type: str | None) -> TranscriptResult: ...

    async def check(self) -> ProviderStatus: ...


__all__ = ["TranscriptionProvider"]

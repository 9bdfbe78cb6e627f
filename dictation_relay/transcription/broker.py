"""Translate a finished audio payload into one provider request and back."""

from __future__ import annotations

import asyncio
import logging

from dictation_relay.errors import TranscriptionError
from dictation_relay.state.transcript import ProviderStatus, TranscriptResult

from .formats import provider_language
from .provider import TranscriptionProvider

logger = logging.getLogger(__name__)

TOO_SHORT_MESSAGE = "Audio too short or empty"
NO_SPEECH_MESSAGE = "No speech detected in audio"


class TranscriptionBroker:
    """Stateless: every call is parameterized by the caller's audio and language.

    Local checks (size cap, minimum size, provider configured) run before any
    network call. Failures raise TranscriptionError and are never retried.
    """

    def __init__(
        self,
        provider: TranscriptionProvider,
        *,
        max_audio_bytes: int,
        min_audio_bytes: int,
        timeout_s: float,
    ) -> None:
        self._provider = provider
        self._max_audio_bytes = max(0, int(max_audio_bytes))
        self._min_audio_bytes = max(0, int(min_audio_bytes))
        self._timeout_s = float(timeout_s)

    async def transcribe(self, audio: bytes, *, language: str, mime_type: str | None) -> TranscriptResult:
        size = len(audio)
        if self._max_audio_bytes and size > self._max_audio_bytes:
            raise TranscriptionError(
                kind="too_large",
                message=f"Audio size limit exceeded ({size} > {self._max_audio_bytes} bytes)",
            )
        if size < self._min_audio_bytes:
            return TranscriptResult(transcript="", message=TOO_SHORT_MESSAGE)
        if not self._provider.configured:
            logger.error("transcription: provider API key not configured")
            raise TranscriptionError(kind="not_configured", message="Transcription service not configured")

        language_tag = provider_language(language)
        try:
            result = await asyncio.wait_for(
                self._provider.transcribe(audio, language_tag=language_tag, mime_type=mime_type),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise TranscriptionError(kind="timeout", message="Transcription timed out") from exc

        if not result.transcript:
            logger.warning("transcription: empty transcript returned for %s bytes", size)
            return TranscriptResult(transcript="", language=language_tag, message=NO_SPEECH_MESSAGE)
        return result

    async def check(self) -> ProviderStatus:
        return await self._provider.check()


__all__ = ["NO_SPEECH_MESSAGE", "TOO_SHORT_MESSAGE", "TranscriptionBroker"]

"""Inbound client messages, one dataclass per `type`."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthMessage:
    email: str
    activation_code: str
    client_type: str | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateLanguageMessage:
    language: str | None = None


@dataclass(frozen=True, slots=True)
class StartTranscriptionMessage:
    language: str | None = None
    audio_format: str | None = None
    client_type: str | None = None


@dataclass(frozen=True, slots=True)
class AudioChunkMessage:
    audio: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True, slots=True)
class AudioCompleteMessage:
    audio: str | None = None
    mime_type: str | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class StopTranscriptionMessage:
    pass


@dataclass(frozen=True, slots=True)
class PingMessage:
    pass


ClientMessage = (
    AuthMessage
    | UpdateLanguageMessage
    | StartTranscriptionMessage
    | AudioChunkMessage
    | AudioCompleteMessage
    | StopTranscriptionMessage
    | PingMessage
)

__all__ = [
    "AudioChunkMessage",
    "AudioCompleteMessage",
    "AuthMessage",
    "ClientMessage",
    "PingMessage",
    "StartTranscriptionMessage",
    "StopTranscriptionMessage",
    "UpdateLanguageMessage",
]

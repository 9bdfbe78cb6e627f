"""Dispatch handlers for typed client messages."""

from __future__ import annotations

import base64
import logging
import binascii
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocket

from dictation_relay.state.session import Session
from dictation_relay.state.runtime import RuntimeDeps
from dictation_relay.state.transcript import TranscriptResult
from dictation_relay.errors import TranscriptionError, AudioLimitExceededError
from dictation_relay.state.messages import (
    PingMessage,
    AuthMessage,
    ClientMessage,
    AudioChunkMessage,
    AudioCompleteMessage,
    UpdateLanguageMessage,
    StopTranscriptionMessage,
    StartTranscriptionMessage,
)
from dictation_relay.config.websocket import (
    MSG_PONG,
    SOURCE_SERVER,
    SOURCE_PROVIDER,
    WS_ERROR_AUDIO_LIMIT,
    MSG_LANGUAGE_UPDATED,
    WS_ERROR_INVALID_PAYLOAD,
    MSG_AUDIO_CHUNK_RECEIVED,
    MSG_TRANSCRIPTION_RESULT,
    WS_ERROR_INVALID_LANGUAGE,
    MSG_TRANSCRIPTION_STARTED,
    MSG_TRANSCRIPTION_STOPPED,
    NOT_AUTHENTICATED_MESSAGE,
    WS_ERROR_NOT_AUTHENTICATED,
)

from .auth import authenticate_session
from .errors import send_error, safe_send_json, send_transcription_error

logger = logging.getLogger(__name__)

HandlerFn = Callable[[WebSocket, RuntimeDeps, Session, Any], Awaitable[None]]

# Failures raised before any request leaves the server.
_LOCAL_FAILURE_KINDS = frozenset({"too_large", "not_configured"})


def decode_audio(audio: str | None) -> bytes | None:
    """Strict base64 decode; None when absent or not valid base64."""
    if not audio:
        return None
    try:
        return base64.b64decode(audio, validate=True)
    except (binascii.Error, ValueError):
        return None


def build_transcription_result(result: TranscriptResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": MSG_TRANSCRIPTION_RESULT,
        "transcript": result.transcript,
        "isFinal": True,
        "source": SOURCE_PROVIDER,
    }
    if result.language is not None:
        payload["language"] = result.language
        payload["confidence"] = result.confidence
    if result.message:
        payload["message"] = result.message
    return payload


async def relay_transcription(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    session: Session,
    audio: bytes,
    *,
    mime_type: str | None,
) -> bool:
    """Send `audio` through the broker and reply with exactly one result or error."""
    try:
        result = await runtime_deps.broker.transcribe(audio, language=session.language, mime_type=mime_type)
    except TranscriptionError as exc:
        logger.warning(
            "transcription failed session_id=%s kind=%s: %s",
            session.session_id,
            exc.kind,
            exc.message,
        )
        if exc.kind in _LOCAL_FAILURE_KINDS:
            await send_transcription_error(ws, exc.message, source=SOURCE_SERVER)
        else:
            await send_transcription_error(ws, f"Transcription failed: {exc.message}", source=SOURCE_PROVIDER)
        return False

    if result.transcript:
        logger.info("transcription ok session_id=%s chars=%s", session.session_id, len(result.transcript))
    await safe_send_json(ws, build_transcription_result(result))
    return True


async def _handle_auth(ws: WebSocket, runtime_deps: RuntimeDeps, session: Session, message: AuthMessage) -> None:
    await authenticate_session(ws, session, message, runtime_deps.identities)


async def _handle_ping(ws: WebSocket, _runtime_deps: RuntimeDeps, _session: Session, _message: PingMessage) -> None:
    await safe_send_json(ws, {"type": MSG_PONG})


async def _handle_update_language(
    ws: WebSocket,
    _runtime_deps: RuntimeDeps,
    session: Session,
    message: UpdateLanguageMessage,
) -> None:
    if not message.language or not session.set_language(message.language):
        await send_error(ws, "Invalid language specified", code=WS_ERROR_INVALID_LANGUAGE)
        return
    await safe_send_json(ws, {"type": MSG_LANGUAGE_UPDATED, "language": session.language})


async def _handle_start(
    ws: WebSocket,
    _runtime_deps: RuntimeDeps,
    session: Session,
    message: StartTranscriptionMessage,
) -> None:
    # An unsupported override is ignored; the session keeps its language.
    if message.language:
        session.set_language(message.language)
    if message.client_type:
        session.set_client_kind(message.client_type)
    session.set_audio_format(message.audio_format)
    session.clear_audio()
    await safe_send_json(
        ws,
        {"type": MSG_TRANSCRIPTION_STARTED, "language": session.language, "clientType": session.client_kind},
    )


async def _handle_chunk(
    ws: WebSocket,
    _runtime_deps: RuntimeDeps,
    session: Session,
    message: AudioChunkMessage,
) -> None:
    chunk = decode_audio(message.audio)
    if chunk is None:
        await send_error(ws, "audio (base64) is required", code=WS_ERROR_INVALID_PAYLOAD)
        return
    if message.mime_type and session.audio_format is None:
        session.set_audio_format(message.mime_type)

    try:
        total = session.append_audio(chunk)
    except AudioLimitExceededError as exc:
        logger.warning(
            "audio buffer cap exceeded session_id=%s attempted=%s max=%s",
            session.session_id,
            exc.attempted_bytes,
            exc.max_bytes,
        )
        await send_error(ws, "Audio size limit exceeded", code=WS_ERROR_AUDIO_LIMIT)
        return

    await safe_send_json(
        ws,
        {"type": MSG_AUDIO_CHUNK_RECEIVED, "chunkIndex": session.chunk_count - 1, "totalSize": total},
    )


async def _handle_complete(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    session: Session,
    message: AudioCompleteMessage,
) -> None:
    if message.language:
        session.set_language(message.language)
    # A missing or empty payload is "no speech", answered by the broker without a provider call.
    audio = decode_audio(message.audio) if message.audio else b""
    if audio is None:
        await send_transcription_error(ws, "Invalid audio data")
        return

    logger.info(
        "audio received session_id=%s bytes=%s mime_type=%s language=%s",
        session.session_id,
        len(audio),
        message.mime_type,
        session.language,
    )
    await relay_transcription(ws, runtime_deps, session, audio, mime_type=message.mime_type)


async def _handle_stop(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    session: Session,
    _message: StopTranscriptionMessage,
) -> None:
    # Snapshot first: the live buffer is empty before the provider call starts.
    audio = session.take_audio()
    if audio and len(audio) >= runtime_deps.settings.limits.min_audio_bytes:
        await relay_transcription(ws, runtime_deps, session, audio, mime_type=session.audio_format)
    elif audio:
        logger.info("stop: dropping %s buffered bytes below minimum", len(audio))
    await safe_send_json(ws, {"type": MSG_TRANSCRIPTION_STOPPED, "clientType": session.client_kind})


HANDLERS: dict[type, HandlerFn] = {
    AuthMessage: _handle_auth,
    PingMessage: _handle_ping,
    UpdateLanguageMessage: _handle_update_language,
    StartTranscriptionMessage: _handle_start,
    AudioChunkMessage: _handle_chunk,
    AudioCompleteMessage: _handle_complete,
    StopTranscriptionMessage: _handle_stop,
}

PUBLIC_MESSAGES: frozenset[type] = frozenset({AuthMessage, PingMessage})


async def dispatch_message(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    session: Session,
    message: ClientMessage,
) -> None:
    message_cls = type(message)
    if message_cls not in PUBLIC_MESSAGES and not session.authenticated:
        await send_error(ws, NOT_AUTHENTICATED_MESSAGE, code=WS_ERROR_NOT_AUTHENTICATED)
        return
    handler = HANDLERS[message_cls]
    await handler(ws, runtime_deps, session, message)


__all__ = [
    "HANDLERS",
    "PUBLIC_MESSAGES",
    "build_transcription_result",
    "decode_audio",
    "dispatch_message",
    "relay_transcription",
]

"""Client message parsing into typed message variants."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

import orjson

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
    MSG_AUTH,
    MSG_PING,
    WS_KEY_TYPE,
    MSG_AUDIO_CHUNK,
    MSG_AUDIO_COMPLETE,
    MSG_UPDATE_LANGUAGE,
    MSG_STOP_TRANSCRIPTION,
    MSG_START_TRANSCRIPTION,
)


def _opt_str(msg: dict[str, Any], key: str) -> str | None:
    value = msg.get(key)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _auth(msg: dict[str, Any]) -> AuthMessage:
    return AuthMessage(
        email=_opt_str(msg, "email") or "",
        activation_code=_opt_str(msg, "activationCode") or "",
        client_type=_opt_str(msg, "clientType"),
        language=_opt_str(msg, "language"),
    )


def _update_language(msg: dict[str, Any]) -> UpdateLanguageMessage:
    return UpdateLanguageMessage(language=_opt_str(msg, "language"))


def _start(msg: dict[str, Any]) -> StartTranscriptionMessage:
    return StartTranscriptionMessage(
        language=_opt_str(msg, "language"),
        audio_format=_opt_str(msg, "audioFormat"),
        client_type=_opt_str(msg, "clientType"),
    )


def _chunk(msg: dict[str, Any]) -> AudioChunkMessage:
    return AudioChunkMessage(audio=_opt_str(msg, "audio"), mime_type=_opt_str(msg, "mimeType"))


def _complete(msg: dict[str, Any]) -> AudioCompleteMessage:
    return AudioCompleteMessage(
        audio=_opt_str(msg, "audio"),
        mime_type=_opt_str(msg, "mimeType"),
        language=_opt_str(msg, "language"),
    )


_BUILDERS: dict[str, Callable[[dict[str, Any]], ClientMessage]] = {
    MSG_AUTH: _auth,
    MSG_UPDATE_LANGUAGE: _update_language,
    MSG_START_TRANSCRIPTION: _start,
    MSG_AUDIO_CHUNK: _chunk,
    MSG_AUDIO_COMPLETE: _complete,
    MSG_STOP_TRANSCRIPTION: lambda _msg: StopTranscriptionMessage(),
    MSG_PING: lambda _msg: PingMessage(),
}


def parse_client_message(raw: str | bytes) -> ClientMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")

    builder = _BUILDERS.get(msg_type.strip())
    if builder is None:
        raise ValueError(f"message type '{msg_type.strip()}' is not supported")
    return builder(msg)


__all__ = ["parse_client_message"]

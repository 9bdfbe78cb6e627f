"""WebSocket protocol configuration and constants."""

from __future__ import annotations

# The desktop client connects to the server root.
ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
DEFAULT_WS_ENDPOINT_PATH = "/"
WS_ALT_ENDPOINT_PATH = "/ws"

WS_KEY_TYPE = "type"

# Inbound message types
MSG_AUTH = "auth"
MSG_UPDATE_LANGUAGE = "updateLanguage"
MSG_START_TRANSCRIPTION = "startTranscription"
MSG_AUDIO_CHUNK = "audioChunk"
MSG_AUDIO_COMPLETE = "audioComplete"
MSG_STOP_TRANSCRIPTION = "stopTranscription"
MSG_PING = "ping"

# Outbound message types
MSG_CONNECTION = "connection"
MSG_LANGUAGE_UPDATED = "languageUpdated"
MSG_TRANSCRIPTION_STARTED = "transcriptionStarted"
MSG_AUDIO_CHUNK_RECEIVED = "audioChunkReceived"
MSG_TRANSCRIPTION_RESULT = "transcriptionResult"
MSG_TRANSCRIPTION_ERROR = "transcriptionError"
MSG_TRANSCRIPTION_STOPPED = "transcriptionStopped"
MSG_ERROR = "error"
MSG_PONG = "pong"

# Close codes
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"

# Idle watchdog
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"
DEFAULT_WS_IDLE_TIMEOUT_S = 600.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 0.0

# Errors (error.code values)
WS_ERROR_NOT_AUTHENTICATED = "not_authenticated"
WS_ERROR_INVALID_LANGUAGE = "invalid_language"
WS_ERROR_INVALID_PAYLOAD = "invalid_payload"
WS_ERROR_AUDIO_LIMIT = "audio_limit_exceeded"
WS_ERROR_RATE_LIMITED = "rate_limited"
WS_ERROR_INTERNAL = "internal_error"

# Client-facing messages
AUTH_FAILED_MESSAGE = "Authentication failed"
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"
INTERNAL_ERROR_MESSAGE = "Server processing error"

SOURCE_PROVIDER = "deepgram"
SOURCE_SERVER = "server"

DEFAULT_CLIENT_KIND = "unknown"
AUTHENTICATED_CLIENT_KIND = "desktop"

__all__ = [
    "ENV_WS_ENDPOINT_PATH",
    "DEFAULT_WS_ENDPOINT_PATH",
    "WS_ALT_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "MSG_AUTH",
    "MSG_UPDATE_LANGUAGE",
    "MSG_START_TRANSCRIPTION",
    "MSG_AUDIO_CHUNK",
    "MSG_AUDIO_COMPLETE",
    "MSG_STOP_TRANSCRIPTION",
    "MSG_PING",
    "MSG_CONNECTION",
    "MSG_LANGUAGE_UPDATED",
    "MSG_TRANSCRIPTION_STARTED",
    "MSG_AUDIO_CHUNK_RECEIVED",
    "MSG_TRANSCRIPTION_RESULT",
    "MSG_TRANSCRIPTION_ERROR",
    "MSG_TRANSCRIPTION_STOPPED",
    "MSG_ERROR",
    "MSG_PONG",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_REASON",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "WS_ERROR_NOT_AUTHENTICATED",
    "WS_ERROR_INVALID_LANGUAGE",
    "WS_ERROR_INVALID_PAYLOAD",
    "WS_ERROR_AUDIO_LIMIT",
    "WS_ERROR_RATE_LIMITED",
    "WS_ERROR_INTERNAL",
    "AUTH_FAILED_MESSAGE",
    "NOT_AUTHENTICATED_MESSAGE",
    "INTERNAL_ERROR_MESSAGE",
    "SOURCE_PROVIDER",
    "SOURCE_SERVER",
    "DEFAULT_CLIENT_KIND",
    "AUTHENTICATED_CLIENT_KIND",
]

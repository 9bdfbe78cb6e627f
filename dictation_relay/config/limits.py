"""Audio size caps and rate limit configuration."""

from __future__ import annotations

ENV_MAX_AUDIO_BYTES = "MAX_AUDIO_BYTES"
ENV_MIN_AUDIO_BYTES = "MIN_AUDIO_BYTES"

# Hard cap on buffered audio per session and on a single audioComplete payload.
DEFAULT_MAX_AUDIO_BYTES = 50 * 1024 * 1024

# Payloads below this are treated as "no speech" without calling the provider.
DEFAULT_MIN_AUDIO_BYTES = 100

ENV_WS_MESSAGE_WINDOW_SECONDS = "WS_MESSAGE_WINDOW_SECONDS"
ENV_WS_MAX_MESSAGES_PER_WINDOW = "WS_MAX_MESSAGES_PER_WINDOW"
DEFAULT_WS_MESSAGE_WINDOW_SECONDS = 60.0

# MediaRecorder timeslices of 20ms give ~3000 chunks/minute.
DEFAULT_WS_MAX_MESSAGES_PER_WINDOW = 3000

__all__ = [
    "ENV_MAX_AUDIO_BYTES",
    "ENV_MIN_AUDIO_BYTES",
    "DEFAULT_MAX_AUDIO_BYTES",
    "DEFAULT_MIN_AUDIO_BYTES",
    "ENV_WS_MESSAGE_WINDOW_SECONDS",
    "ENV_WS_MAX_MESSAGES_PER_WINDOW",
    "DEFAULT_WS_MESSAGE_WINDOW_SECONDS",
    "DEFAULT_WS_MAX_MESSAGES_PER_WINDOW",
]

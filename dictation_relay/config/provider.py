"""Transcription provider (Deepgram) configuration."""

from __future__ import annotations

ENV_DEEPGRAM_BASE_URL = "DEEPGRAM_BASE_URL"
ENV_DEEPGRAM_MODEL = "DEEPGRAM_MODEL"
ENV_DEEPGRAM_TIMEOUT_S = "DEEPGRAM_TIMEOUT_S"

DEFAULT_DEEPGRAM_BASE_URL = "https://api.deepgram.com"
DEFAULT_DEEPGRAM_MODEL = "general"
DEFAULT_DEEPGRAM_TIMEOUT_S = 30.0

DEEPGRAM_LISTEN_PATH = "/v1/listen"
DEEPGRAM_PROJECTS_PATH = "/v1/projects"
DEEPGRAM_CHECK_TIMEOUT_S = 10.0

# Fallback when the client does not declare a mime type (MediaRecorder default).
DEFAULT_CONTENT_TYPE = "audio/webm"

__all__ = [
    "ENV_DEEPGRAM_BASE_URL",
    "ENV_DEEPGRAM_MODEL",
    "ENV_DEEPGRAM_TIMEOUT_S",
    "DEFAULT_DEEPGRAM_BASE_URL",
    "DEFAULT_DEEPGRAM_MODEL",
    "DEFAULT_DEEPGRAM_TIMEOUT_S",
    "DEEPGRAM_LISTEN_PATH",
    "DEEPGRAM_PROJECTS_PATH",
    "DEEPGRAM_CHECK_TIMEOUT_S",
    "DEFAULT_CONTENT_TYPE",
]

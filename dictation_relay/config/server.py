"""HTTP server (uvicorn) configuration."""

from __future__ import annotations

ENV_SERVER_HOST = "SERVER_HOST"
ENV_SERVER_PORT = "SERVER_PORT"

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 8000

APP_IMPORT_PATH = "dictation_relay.server:app"

# uvicorn's own ws_max_size; used when the audio cap is disabled.
DEFAULT_WS_MAX_FRAME_BYTES = 16 * 1024 * 1024

# Room for the JSON envelope around the base64 payload (type, mimeType, language).
WS_FRAME_HEADROOM_BYTES = 64 * 1024

__all__ = [
    "ENV_SERVER_HOST",
    "ENV_SERVER_PORT",
    "DEFAULT_SERVER_HOST",
    "DEFAULT_SERVER_PORT",
    "APP_IMPORT_PATH",
    "DEFAULT_WS_MAX_FRAME_BYTES",
    "WS_FRAME_HEADROOM_BYTES",
]

"""uvicorn launcher sized for base64 audio frames up to the session audio cap."""

from __future__ import annotations

import os
import argparse
from typing import Any

import uvicorn

from dictation_relay.config.logging import LOG_LEVEL
from dictation_relay.state.settings import AppSettings
from dictation_relay.config.server import (
    ENV_SERVER_HOST,
    ENV_SERVER_PORT,
    APP_IMPORT_PATH,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    WS_FRAME_HEADROOM_BYTES,
    DEFAULT_WS_MAX_FRAME_BYTES,
)

from .settings_loader import load_settings


def ws_max_frame_bytes(max_audio_bytes: int) -> int:
    """Largest inbound frame that can carry `max_audio_bytes` of base64 audio.

    A frame past uvicorn's limit is closed with 1009 before any handler runs,
    so the transport limit must sit above the audio cap.
    """
    if max_audio_bytes <= 0:
        return DEFAULT_WS_MAX_FRAME_BYTES
    encoded = 4 * -(-max_audio_bytes // 3)
    return max(DEFAULT_WS_MAX_FRAME_BYTES, encoded + WS_FRAME_HEADROOM_BYTES)


def build_uvicorn_config(
    app: Any = APP_IMPORT_PATH,
    *,
    settings: AppSettings | None = None,
    host: str | None = None,
    port: int | None = None,
) -> uvicorn.Config:
    settings = settings or load_settings()
    return uvicorn.Config(
        app,
        host=host or (os.getenv(ENV_SERVER_HOST) or "").strip() or DEFAULT_SERVER_HOST,
        port=port if port is not None else int(os.getenv(ENV_SERVER_PORT) or DEFAULT_SERVER_PORT),
        ws_max_size=ws_max_frame_bytes(settings.limits.max_audio_bytes),
        log_level=LOG_LEVEL.lower(),
        # Logging is configured by dictation_relay.runtime.logging.
        log_config=None,
    )


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the dictation relay server")
    p.add_argument("--host", default=None, help=f"Bind address (default: ${ENV_SERVER_HOST} or {DEFAULT_SERVER_HOST})")
    p.add_argument("--port", type=int, default=None, help=f"Port (default: ${ENV_SERVER_PORT} or {DEFAULT_SERVER_PORT})")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    uvicorn.Server(build_uvicorn_config(host=args.host, port=args.port)).run()


if __name__ == "__main__":
    main()

"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from dictation_relay.state.runtime import RuntimeDeps
from dictation_relay.config.websocket import MSG_CONNECTION
from dictation_relay.handlers.limits import SlidingWindowRateLimiter

from .errors import safe_send_json
from .lifecycle import WebSocketLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


def _create_rate_limiter(runtime_deps: RuntimeDeps) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(
        limit=runtime_deps.settings.limits.ws_max_messages_per_window,
        window_seconds=runtime_deps.settings.limits.ws_message_window_seconds,
    )


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    await ws.accept()

    session = runtime_deps.sessions.register()
    lifecycle: WebSocketLifecycle | None = None
    logger.info(
        "WebSocket connection accepted session_id=%s. Active: %s",
        session.session_id,
        len(runtime_deps.sessions),
    )
    try:
        await safe_send_json(ws, {"type": MSG_CONNECTION, "connectionId": session.session_id, "status": "connected"})

        lifecycle = WebSocketLifecycle(ws, runtime_deps.settings.websocket, session_id=session.session_id)
        lifecycle.start()

        await run_message_loop(ws, session, lifecycle, _create_rate_limiter(runtime_deps), runtime_deps)
    except Exception:
        logger.exception("WebSocket error session_id=%s", session.session_id)
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()
        runtime_deps.sessions.remove(session.session_id)
        logger.info(
            "WebSocket connection closed session_id=%s. Active: %s",
            session.session_id,
            len(runtime_deps.sessions),
        )


__all__ = ["handle_websocket_connection"]

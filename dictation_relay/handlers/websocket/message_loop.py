"""WebSocket receive loop for one dictation session."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from dictation_relay.state.session import Session
from dictation_relay.state.runtime import RuntimeDeps
from dictation_relay.handlers.limits import SlidingWindowRateLimiter
from dictation_relay.config.websocket import WS_ERROR_INTERNAL, INTERNAL_ERROR_MESSAGE

from .errors import send_error
from .dispatch import dispatch_message
from .parser import parse_client_message
from .lifecycle import WebSocketLifecycle
from .limits import consume_limiter, is_rate_limited_kind

logger = logging.getLogger(__name__)


async def _recv_with_watchdog(ws: WebSocket, lifecycle: WebSocketLifecycle) -> tuple[str | bytes | None, bool]:
    """Return (frame, should_exit). Wakes up periodically so a watchdog close is noticed."""
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=lifecycle.watchdog_tick_s * 2)
    except asyncio.TimeoutError:
        return None, lifecycle.should_close()
    if message.get("type") == "websocket.disconnect":
        raise WebSocketDisconnect(code=message.get("code", 1000))
    frame = message.get("text")
    if frame is None:
        frame = message.get("bytes")
    return frame, False


async def run_message_loop(
    ws: WebSocket,
    session: Session,
    lifecycle: WebSocketLifecycle,
    limiter: SlidingWindowRateLimiter,
    runtime_deps: RuntimeDeps,
) -> None:
    """Process frames one at a time, in arrival order, until the client goes away."""
    try:
        while True:
            raw, should_exit = await _recv_with_watchdog(ws, lifecycle)
            if should_exit:
                return
            if raw is None:
                continue

            lifecycle.touch()

            try:
                message = parse_client_message(raw)
            except ValueError as exc:
                logger.warning("dropping malformed message session_id=%s: %s", session.session_id, exc)
                continue

            logger.debug("message session_id=%s type=%s", session.session_id, type(message).__name__)

            if is_rate_limited_kind(message) and not await consume_limiter(ws, limiter):
                continue

            try:
                await dispatch_message(ws, runtime_deps, session, message)
            except Exception:
                logger.exception("message handling failed session_id=%s", session.session_id)
                await send_error(ws, INTERNAL_ERROR_MESSAGE, code=WS_ERROR_INTERNAL)
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]

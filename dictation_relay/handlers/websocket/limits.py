"""Rate limiting utilities for WebSocket message handling."""

from __future__ import annotations

import math

from fastapi import WebSocket

from dictation_relay.errors import RateLimitError
from dictation_relay.state.messages import PingMessage, ClientMessage
from dictation_relay.config.websocket import WS_ERROR_RATE_LIMITED
from dictation_relay.handlers.limits import SlidingWindowRateLimiter

from .errors import send_error


def is_rate_limited_kind(message: ClientMessage) -> bool:
    # Liveness checks are never throttled.
    return not isinstance(message, PingMessage)


async def consume_limiter(ws: WebSocket, limiter: SlidingWindowRateLimiter) -> bool:
    try:
        limiter.consume()
    except RateLimitError as exc:
        retry_in_s = int(max(1, math.ceil(float(exc.retry_in)))) if exc.retry_in else 1
        await send_error(
            ws,
            f"message rate limit: at most {limiter.limit} per {int(limiter.window_seconds)} seconds; "
            f"retry in {retry_in_s} seconds",
            code=WS_ERROR_RATE_LIMITED,
        )
        return False
    return True


__all__ = ["consume_limiter", "is_rate_limited_kind"]
